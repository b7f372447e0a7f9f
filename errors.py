class RecipeError(Exception):
    """Base class for recipe engine errors."""


class MalformedRecipeError(RecipeError, ValueError):
    """Structured recipe data that is not parseable as any known shape."""


class RemoteServiceError(RecipeError):
    """The recipe service could not be reached or answered with garbage."""


class ScaleError(RecipeError):
    """Ingredients could not be rescaled."""
