"""Pydantic models for auth API."""

import re
from enum import Enum

from pydantic import EmailStr, Field, field_validator

from .common import CamelModel


class Role(str, Enum):
    """User role enumeration."""

    USER = "user"
    ADMIN = "admin"


class RegisterRequest(CamelModel):
    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6)

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("password")
    @classmethod
    def password_has_digit(cls, value: str) -> str:
        if not re.search(r"\d", value):
            raise ValueError("Password must contain at least one number")
        return value


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class RefreshRequest(CamelModel):
    refresh_token: str | None = None


class UserPublic(CamelModel):
    """User fields safe to return to clients."""

    id: str
    username: str
    email: str
    role: Role
    created_at: int


class UserSummary(CamelModel):
    """Owner identity shown on shared tasks."""

    id: str
    username: str
    email: str


class TokenPair(CamelModel):
    access_token: str
    refresh_token: str
    expires_in: int


class AuthData(CamelModel):
    user: UserPublic
    tokens: TokenPair


class TokensData(CamelModel):
    tokens: TokenPair


class UserData(CamelModel):
    user: UserPublic
