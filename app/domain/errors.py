"""Domain error taxonomy and the Result type returned by application services."""
from dataclasses import dataclass
from enum import Enum
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Kinds of failure a domain operation can report."""
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    FORBIDDEN = "forbidden"
    STORAGE = "storage"
    NO_RATINGS = "no_ratings"


class DomainError(Exception):
    """Base class for every failure the domain reports."""

    kind: ErrorKind = ErrorKind.STORAGE

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    """Malformed or out-of-range input. Never retried automatically."""

    kind = ErrorKind.VALIDATION

    def __init__(self, messages):
        if isinstance(messages, str):
            messages = [messages]
        self.messages: List[str] = list(messages)
        super().__init__("; ".join(self.messages))


class NotFound(DomainError):
    """A referenced entity does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, entity: str, entity_id=None):
        self.entity = entity
        self.entity_id = entity_id
        if entity_id is None:
            message = f"{entity} not found"
        else:
            message = f"{entity} {entity_id} not found"
        super().__init__(message)


class Conflict(DomainError):
    """The operation would break a uniqueness or referential rule."""

    kind = ErrorKind.CONFLICT


class Forbidden(DomainError):
    """The caller is not allowed to act on the resource."""

    kind = ErrorKind.FORBIDDEN


class StorageError(DomainError):
    """The persistence layer failed. Keeps the original cause for diagnostics."""

    kind = ErrorKind.STORAGE

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class NoRatings(DomainError):
    """An aggregate was requested over an empty set of ratings."""

    kind = ErrorKind.NO_RATINGS

    def __init__(self, vehicle_id: int):
        self.vehicle_id = vehicle_id
        super().__init__(f"vehicle {vehicle_id} has no ratings")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a domain operation: either a value or a DomainError."""
    value: Optional[T] = None
    error: Optional[DomainError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: DomainError) -> "Result[T]":
        return cls(error=error)

    def unwrap(self) -> Optional[T]:
        """Return the value, raising the carried error on failure."""
        if self.error is not None:
            raise self.error
        return self.value
