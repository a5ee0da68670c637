class DomainError(Exception):
    """Base exception for business rule violations.

    Every subclass carries a stable machine-readable ``kind`` and the HTTP
    status the web layer answers with.
    """

    kind = "error"
    http_status = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    kind = "validation"


class InvalidRangeError(ValidationError):
    """Raised when a date range starts after it ends."""

    kind = "invalid_range"


class UnauthorizedError(DomainError):
    """Raised when there is no valid authenticated session."""

    kind = "unauthorized"
    http_status = 401


class ForbiddenError(DomainError):
    """Raised when an authenticated user lacks the role for an action."""

    kind = "forbidden"
    http_status = 403


class NotFoundError(DomainError):
    """Raised when a referenced user or record does not exist."""

    kind = "not_found"
    http_status = 404


class ConflictError(DomainError):
    """Raised on uniqueness or state-transition violations."""

    kind = "conflict"
    http_status = 409


class InternalError(DomainError):
    """Raised for storage or otherwise unexpected failures."""

    kind = "internal"
    http_status = 500


class DuplicateKeyError(Exception):
    """Storage-level unique constraint violation.

    Raised by repositories; services translate it into ConflictError.
    """
