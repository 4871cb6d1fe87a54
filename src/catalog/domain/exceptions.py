"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Each class carries a stable ``code`` the boundary uses to tell them apart.
"""


class DomainException(Exception):
    """Base class for all domain errors."""

    code = "DOMAIN_ERROR"


class ValidationError(DomainException):
    """A caller-supplied value breaks a local invariant."""

    code = "VALIDATION_ERROR"


class InvariantViolationError(DomainException):
    """A well-formed operation would leave an aggregate in an invalid state."""

    code = "CONFLICT"


class DuplicateItemError(InvariantViolationError):
    """Another item already holds the same seller / normalized title pair."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    code = "NOT_FOUND"


class PersistenceError(Exception):
    """The store could not be written to (or read from) disk.

    Not a DomainException: this is an infrastructure fault, never something
    the caller can fix by changing its input.
    """

    code = "PERSISTENCE_ERROR"
