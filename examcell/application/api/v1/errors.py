"""Centralized error transformation for API routes.

Maps examcell errors (domain and infrastructure) to HTTPException responses.
"""

from typing import Any

from fastapi import HTTPException

from examcell.domain.shared.error import (
    AuthorizationError,
    ConflictError,
    DomainError,
    ExamCellError,
    IdentityResolutionError,
    InfrastructureError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)

DOMAIN_ERROR_STATUS_MAP: dict[type[DomainError], int] = {
    NotFoundError: 404,
    ValidationError: 422,
    IdentityResolutionError: 422,
    InvalidStateError: 409,
    ConflictError: 409,
    AuthorizationError: 403,
}


def _status_for(error: DomainError) -> int:
    # Most specific mapped ancestor wins
    for cls in type(error).__mro__:
        if cls in DOMAIN_ERROR_STATUS_MAP:
            return DOMAIN_ERROR_STATUS_MAP[cls]
    return 400


def map_examcell_error(error: ExamCellError) -> HTTPException:
    """Map an examcell error to an HTTPException.

    The detail body is always ``{code, message, retryable}`` plus ``field``
    when the error names the offending input.
    """
    detail: dict[str, Any] = {
        "code": error.code,
        "message": error.message,
        "retryable": error.retryable,
    }

    if isinstance(error, InfrastructureError):
        return HTTPException(status_code=503, detail=detail)

    if isinstance(error, DomainError):
        field = getattr(error, "field", None)
        if field is not None:
            detail["field"] = field
        # Distinguish 401 (unauthenticated) from 403 (unauthorized)
        if isinstance(error, AuthorizationError) and error.code == "missing_token":
            return HTTPException(
                status_code=401,
                detail=detail,
                headers={"WWW-Authenticate": "Bearer"},
            )
        return HTTPException(status_code=_status_for(error), detail=detail)

    return HTTPException(status_code=500, detail=detail)
