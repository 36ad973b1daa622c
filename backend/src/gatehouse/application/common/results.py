"""Typed use-case outcomes: exactly one of ``Success`` or ``Failure``."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class ErrorKind(str, Enum):
    VALIDATION = "Validation"
    CONFLICT = "Conflict"
    UNAUTHORIZED = "Unauthorized"
    NOT_FOUND = "NotFound"
    BAD_REQUEST = "BadRequest"


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    @property
    def is_success(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    message: str
    kind: ErrorKind = ErrorKind.BAD_REQUEST

    @property
    def is_success(self) -> bool:
        return False

    @classmethod
    def validation(cls, message: str) -> "Failure":
        return cls(message, ErrorKind.VALIDATION)

    @classmethod
    def conflict(cls, message: str) -> "Failure":
        return cls(message, ErrorKind.CONFLICT)

    @classmethod
    def unauthorized(cls, message: str = "Unauthorized") -> "Failure":
        return cls(message, ErrorKind.UNAUTHORIZED)

    @classmethod
    def not_found(cls, message: str = "Resource not found") -> "Failure":
        return cls(message, ErrorKind.NOT_FOUND)


Result = Union[Success[T], Failure]
