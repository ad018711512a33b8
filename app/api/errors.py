"""Translate domain results into HTTP responses."""
from typing import Optional, TypeVar

from fastapi import HTTPException

from app.domain.errors import DomainError, ErrorKind, Result, ValidationError

T = TypeVar("T")

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.STORAGE: 500,
    ErrorKind.NO_RATINGS: 404,
}


def to_http_exception(error: DomainError) -> HTTPException:
    if isinstance(error, ValidationError):
        detail = {"message": error.message, "errors": error.messages}
    else:
        detail = {"message": error.message}
    return HTTPException(status_code=STATUS_BY_KIND[error.kind], detail=detail)


def value_or_raise(result: Result[T]) -> Optional[T]:
    """Return the result value or raise the matching HTTPException."""
    if not result.ok:
        raise to_http_exception(result.error)
    return result.value
