"""Domain level errors that need a response other than 400."""


class ConflictError(ValueError):
    """The request duplicates a resource that must stay unique."""


__all__ = ["ConflictError"]
