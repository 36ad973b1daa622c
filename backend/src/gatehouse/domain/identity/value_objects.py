"""Immutable value objects for the Identity bounded context.

Constructors never raise for bad user input: ``create`` returns ``Valid`` or
``Invalid`` so callers branch explicitly. Direct instantiation still enforces
the same rules (raising ``ValueError``) so every instance is well-formed.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50

_USERNAME_RE = re.compile(r"^[A-Za-z0-9_]+$")
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass(frozen=True)
class Valid(Generic[T]):
    value: T


@dataclass(frozen=True)
class Invalid:
    reason: str


Validation = Union[Valid[T], Invalid]


def _username_error(value: str) -> str | None:
    if not value:
        return "Username cannot be empty."
    if len(value) < USERNAME_MIN_LENGTH:
        return f"Username must be at least {USERNAME_MIN_LENGTH} characters long."
    if len(value) > USERNAME_MAX_LENGTH:
        return f"Username must not exceed {USERNAME_MAX_LENGTH} characters."
    if not _USERNAME_RE.match(value):
        return "Username can only contain letters, numbers, and underscores."
    return None


def _email_error(value: str) -> str | None:
    if not value:
        return "Email cannot be empty."
    if not _EMAIL_RE.match(value):
        return "Invalid email format."
    return None


@dataclass(frozen=True)
class Username:
    value: str

    def __post_init__(self) -> None:
        error = _username_error(self.value)
        if error is not None or self.value != self.value.strip():
            raise ValueError(error or "Username must be normalized")

    @classmethod
    def create(cls, raw: str | None) -> Validation[Username]:
        normalized = (raw or "").strip()
        error = _username_error(normalized)
        if error is not None:
            return Invalid(error)
        return Valid(cls(normalized))

    @classmethod
    def try_create(cls, raw: str | None) -> Username | None:
        result = cls.create(raw)
        return result.value if isinstance(result, Valid) else None

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Email:
    value: str

    def __post_init__(self) -> None:
        error = _email_error(self.value)
        if error is not None or self.value != self.value.strip().lower():
            raise ValueError(error or "Email must be normalized")

    @classmethod
    def create(cls, raw: str | None) -> Validation[Email]:
        normalized = (raw or "").strip().lower()
        error = _email_error(normalized)
        if error is not None:
            return Invalid(error)
        return Valid(cls(normalized))

    @classmethod
    def try_create(cls, raw: str | None) -> Email | None:
        result = cls.create(raw)
        return result.value if isinstance(result, Valid) else None

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PasswordHash:
    """Opaque wrapper for the hashed password string, never the raw password."""
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PasswordSalt:
    """Opaque wrapper for the per-password random salt."""
    value: str

    def __str__(self) -> str:
        return self.value
