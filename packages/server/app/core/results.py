"""
Tagged results for service operations.

Expected failures (unknown codes, cross-room actions, closed rooms) are
returned as ``Failure`` values carrying an ``ErrorKind`` and field-level
messages. Only programming errors propagate as exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from santa_shared.schemas.common import ErrorKind

T = TypeVar("T")


@dataclass(frozen=True)
class FieldError:
    """A message attributed to a request field (or entity name)."""
    field: str
    message: str


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    @property
    def is_success(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    errors: tuple[FieldError, ...] = ()

    @property
    def is_success(self) -> bool:
        return False

    @property
    def field(self) -> str | None:
        return self.errors[0].field if self.errors else None

    @property
    def message(self) -> str | None:
        return self.errors[0].message if self.errors else None

    @classmethod
    def of(cls, kind: ErrorKind, field_name: str, message: str) -> "Failure":
        return cls(kind=kind, errors=(FieldError(field_name, message),))

    @classmethod
    def not_found(cls, field_name: str, message: str) -> "Failure":
        return cls.of(ErrorKind.NOT_FOUND, field_name, message)

    @classmethod
    def forbidden(cls, field_name: str, message: str) -> "Failure":
        return cls.of(ErrorKind.FORBIDDEN, field_name, message)

    @classmethod
    def bad_request(cls, field_name: str, message: str) -> "Failure":
        return cls.of(ErrorKind.BAD_REQUEST, field_name, message)

    @classmethod
    def storage_error(cls, field_name: str, message: str) -> "Failure":
        return cls.of(ErrorKind.STORAGE_ERROR, field_name, message)


Result = Union[Success[T], Failure]
