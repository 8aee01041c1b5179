class SocialGraphError(Exception):
    """Base class for every error raised by the engine."""


class DuplicateRelationship(SocialGraphError):
    """A friendship or request already exists for the pair."""

    def __init__(self, message: str = "Request already sent"):
        super().__init__(message)


class EntityNotFound(SocialGraphError, LookupError):
    """A referenced user, friendship, message or notification does not exist."""

    def __init__(self, message: str = "Entity does not exist"):
        super().__init__(message)


class ValidationFailure(SocialGraphError, ValueError):
    """An entity failed structural or referential validation."""
