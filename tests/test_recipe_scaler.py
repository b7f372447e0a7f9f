import asyncio

import pytest

from errors import RemoteServiceError, ScaleError
from recipe_scaler import IngredientScaler


class FakeScalingService:
    def __init__(self, scaled=None, error=None):
        self.scaled = scaled
        self.error = error
        self.calls = []

    def scale_ingredients(self, ingredients, factor):
        self.calls.append((ingredients, factor))
        if self.error is not None:
            raise self.error
        return self.scaled


def test_scale_returns_rewritten_list():
    service = FakeScalingService(scaled=["4 eggs", "1 cup sugar"])

    scaled = asyncio.run(IngredientScaler(service).scale(["2 eggs", "1/2 cup sugar"], 2))

    assert scaled == ["4 eggs", "1 cup sugar"]
    assert service.calls == [(["2 eggs", "1/2 cup sugar"], 2)]


def test_unit_factor_and_empty_list_skip_the_service():
    service = FakeScalingService(scaled=["changed"])
    scaler = IngredientScaler(service)

    assert asyncio.run(scaler.scale(["2 eggs"], 1.0)) == ["2 eggs"]
    assert asyncio.run(scaler.scale([], 3)) == []
    assert service.calls == []


def test_remote_failure_raises_scale_error():
    service = FakeScalingService(error=RemoteServiceError("Recipe API error 500: oops"))

    with pytest.raises(ScaleError, match="500"):
        asyncio.run(IngredientScaler(service).scale(["2 eggs"], 0.5))


@pytest.mark.parametrize("factor", [0, -2, float("nan"), float("inf")])
def test_invalid_factor_is_rejected_locally(factor):
    service = FakeScalingService(scaled=[])

    with pytest.raises(ScaleError):
        asyncio.run(IngredientScaler(service).scale(["2 eggs"], factor))
    assert service.calls == []
