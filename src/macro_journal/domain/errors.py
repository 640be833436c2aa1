"""Error types shared across services."""


class ValidationError(ValueError):
    """Raised when user input is rejected before any computation or write."""


class NotFoundError(LookupError):
    """Raised when a referenced record does not exist."""


class StorageError(RuntimeError):
    """Raised when the storage backend returns no data for a write."""


class ResolutionError(RuntimeError):
    """Raised when the AI collaborator fails or returns an unusable payload."""


class RecipeNotReadyError(RuntimeError):
    """Raised when a recipe is finalized with unresolved ingredients."""
