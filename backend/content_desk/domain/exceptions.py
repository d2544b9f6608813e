"""Domain-specific exceptions — framework-independent.

Every failure a use case reports derives from :class:`DomainError`, which
carries a short machine ``name`` (usually the offending field) and a
human-readable ``description``. The presentation layer renders them as
``{code, name, description}``.
"""


class DomainError(Exception):
    """Base class for failures reported to callers."""

    kind = "Conflict"

    def __init__(self, name: str, description: str):
        self.name = name
        self.description = description
        super().__init__(f"{name}: {description}")


class InvalidInputError(DomainError):
    """Malformed or missing field, bad enum value or malformed id."""

    kind = "InvalidInput"


class EntityNotFoundError(DomainError):
    """Raised when a requested entity does not exist."""

    kind = "NotFound"

    def __init__(self, entity_type: str, entity_id: str, name: str = "id"):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(name, f"{entity_type} with id '{entity_id}' not found")


class ForbiddenError(DomainError):
    """The actor lacks ownership or admin rights."""

    kind = "Forbidden"

    def __init__(self, description: str = "Access not authorized", name: str = "forbidden"):
        super().__init__(name, description)


class ConflictError(DomainError):
    """No-op transition, already removed, already read or quota exceeded."""

    kind = "Conflict"


class DependencyError(DomainError):
    """Object storage or notification collaborator failed."""

    kind = "Dependency"
