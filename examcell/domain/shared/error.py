"""Error hierarchy for examcell.

Error layers:
- ExamCellError: Base class for all examcell errors
- DomainError: Business rule violations, validation failures (4xx responses)
- InfrastructureError: System-level failures like storage/network issues (503 responses)

These errors are mapped to HTTP responses by the global exception handler in app.py.
"""


class ExamCellError(Exception):
    """Base class for all examcell errors."""

    retryable: bool = False

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors (business logic violations - typically 4xx)
# =============================================================================


class DomainError(ExamCellError):
    """Base class for domain/business errors."""


class NotFoundError(DomainError):
    """Resource not found."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message, code=code or "not_found")


class ValidationError(DomainError):
    """Input validation failed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


class InvalidStateError(DomainError):
    """Operation not allowed in current state."""


class StateConflictError(InvalidStateError):
    """Transition attempted from a status outside its allowed sources.

    Also raised when a concurrent writer changed the paper first. Callers may
    re-fetch and retry.
    """

    retryable = True

    def __init__(self, message: str) -> None:
        super().__init__(message, code="state_conflict")


class ConflictError(DomainError):
    """Resource already exists or version conflict."""


class DuplicateAssignmentError(ConflictError):
    """A paper already exists for (subject, exam type, attempt, setter)."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="duplicate_assignment")


class AuthorizationError(DomainError):
    """User not authorized for this operation."""


class IdentityResolutionError(DomainError):
    """A staff identifier could not be mapped to an internal identity."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="identity_resolution_failed")
        self.field = field


# =============================================================================
# Infrastructure Errors (system-level failures - typically 503)
# =============================================================================


class InfrastructureError(ExamCellError):
    """Base class for infrastructure/system errors."""


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""
