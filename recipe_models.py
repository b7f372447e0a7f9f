from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Union


@dataclass(frozen=True)
class HowToStep:
    """A single typed step object."""

    type: Optional[str] = None
    text: Optional[str] = None


@dataclass(frozen=True)
class HowToSection:
    """A named group of steps."""

    type: Optional[str] = None
    name: Optional[str] = None
    items: List[HowToStep] = field(default_factory=list)


@dataclass(frozen=True)
class PlainStep:
    """A bare instruction string."""

    text: str


Instruction = Union[PlainStep, HowToSection, HowToStep]


@dataclass(frozen=True)
class Recipe:
    """Canonical representation of a captured recipe.

    Fields are ``None`` when the source did not provide them. Ingredient and
    instruction order is the source order; nothing is sorted or deduplicated.
    """

    name: Optional[str] = None
    thumbnail_url: Optional[str] = None
    images: Optional[List[str]] = None
    ingredients: Optional[List[str]] = None
    instructions: Optional[List[Instruction]] = None

    @classmethod
    def from_manual_entry(
        cls,
        name: str,
        ingredients: Iterable[str],
        instructions: Iterable[str]
    ) -> "Recipe":
        cleaned_ingredients = [i.strip() for i in ingredients if i.strip()]
        cleaned_steps = [PlainStep(s.strip()) for s in instructions if s.strip()]
        return cls(
            name=name.strip(),
            ingredients=cleaned_ingredients,
            instructions=cleaned_steps,
        )


@dataclass(frozen=True)
class ServiceReply:
    """Reply of the remote extraction service."""

    recipe: Recipe
    recipe_found: bool = True


class ExtractionState(Enum):
    DECODED = "decoded"
    NOT_FOUND = "not_found"
    FAILED = "failed"


class FailureReason(Enum):
    NO_CONTENT = "no_content"
    RECIPE_NOT_FOUND = "recipe_not_found"
    REMOTE_UNAVAILABLE = "remote_unavailable"
    TIMEOUT = "timeout"


_NOT_FOUND_REASONS = {FailureReason.NO_CONTENT, FailureReason.RECIPE_NOT_FOUND}


@dataclass(frozen=True)
class ExtractionResult:
    """Outcome of one extraction request: a recipe or a failure reason."""

    recipe: Optional[Recipe] = None
    failure: Optional[FailureReason] = None
    detail: Optional[str] = None
    source: Optional[str] = None

    @classmethod
    def decoded(cls, recipe: Recipe, source: str) -> "ExtractionResult":
        return cls(recipe=recipe, source=source)

    @classmethod
    def failed(cls, reason: FailureReason, detail: Optional[str] = None) -> "ExtractionResult":
        return cls(failure=reason, detail=detail)

    @property
    def ok(self) -> bool:
        return self.recipe is not None

    @property
    def state(self) -> ExtractionState:
        if self.recipe is not None:
            return ExtractionState.DECODED
        if self.failure in _NOT_FOUND_REASONS:
            return ExtractionState.NOT_FOUND
        return ExtractionState.FAILED
