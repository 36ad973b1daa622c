"""Pydantic v2 schemas for identity endpoints.

Field rules for usernames and emails live in the domain value objects; these
schemas only check shape and the password policy.
"""
import re
from typing import Generic, TypeVar

from pydantic import BaseModel, field_validator

T = TypeVar("T")

_PASSWORD_CHARSETS = re.compile(r"(?=.*[a-z])(?=.*[A-Z])(?=.*\d)")


class RegisterRequest(BaseModel):
    username: str
    email: str
    password: str

    @field_validator("password")
    @classmethod
    def password_strong(cls, v: str) -> str:
        if len(v) < 8:
            raise ValueError("Password must be at least 8 characters long.")
        if not _PASSWORD_CHARSETS.match(v):
            raise ValueError(
                "Password must contain at least one uppercase letter, one lowercase letter, and one number."
            )
        return v


class LoginRequest(BaseModel):
    username: str
    password: str


class AccountResponse(BaseModel):
    id: int
    username: str
    email: str


class AuthResponse(BaseModel):
    token: str
    account: AccountResponse


class CurrentUserResponse(BaseModel):
    account: AccountResponse


class ErrorResponse(BaseModel):
    message: str
    errorCode: str


class ApiResponse(BaseModel, Generic[T]):
    data: T
    success: bool = True
