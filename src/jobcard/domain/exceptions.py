"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Malformed input or a violated invariant."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class NotAuthorizedError(DomainException):
    """The caller may not perform this operation on this job."""


class InvalidTransitionError(DomainException):
    """The job's current status does not allow the requested transition."""

    def __init__(self, message: str, current_status) -> None:
        super().__init__(message)
        self.current_status = current_status


class AlreadyAssignedError(DomainException):
    """The job already has a mechanic; re-assignment is not allowed."""


class InsufficientStockError(DomainException):
    """Requested quantity exceeds stock on hand at deduction time."""

    def __init__(self, message: str, available: int) -> None:
        super().__init__(message)
        self.available = available


class DependencyFailureError(DomainException):
    """A collaborator (storage, notifications) failed."""


class PersistenceError(DependencyFailureError):
    """Reading from or writing to the durable store failed."""


class NotificationError(DependencyFailureError):
    """The notification dispatcher could not deliver a message."""
