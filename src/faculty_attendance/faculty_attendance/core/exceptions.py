class DomainError(Exception):
    """Base exception for business rule violations.

    ``message`` is the human-readable text shown to users; diagnostic detail
    belongs in the logs.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules (e.g. duplicate keys)."""


class NotFoundError(DomainError):
    """Raised when a referenced leave, employee or month is absent."""


class InvalidRangeError(DomainError):
    """Raised when an end date falls before its start date."""


class AlreadyCompletedError(DomainError):
    """Raised when a locked monthly allocation is run again."""


class StoreError(DomainError):
    """Raised when the record store cannot be read or written."""


class WriteConflictError(StoreError):
    """Raised when a conditional write finds a different current value."""

    def __init__(self, message: str, *, path: str):
        super().__init__(message)
        self.path = path


class PartialWriteError(StoreError):
    """Raised when a multi-key update was only partly applied."""

    def __init__(self, message: str, *, applied: list[str], pending: list[str]):
        super().__init__(message)
        self.applied = applied
        self.pending = pending
