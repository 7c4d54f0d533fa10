import re
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic_core import PydanticCustomError

from .base import CamelModel


USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]+$")
SESSION_TOKEN_VERSION = 1


def username_errors(username: str) -> List[str]:
    """Validation messages for a candidate username (empty when valid)"""
    errors: List[str] = []
    if len(username) < 2:
        errors.append("Username must be at least 2 characters")
    if len(username) > 20:
        errors.append("Username must be no more than 20 characters")
    if not USERNAME_PATTERN.match(username):
        errors.append("Username must not contain special characters")
    return errors


def _check_username(value: str) -> str:
    value = value.strip()
    errors = username_errors(value)
    if errors:
        raise PydanticCustomError("username", ", ".join(errors))
    return value


class SignUpRequest(BaseModel):
    """DTO for sign-up request"""
    username: str
    email: EmailStr
    password: str = Field(min_length=6, max_length=256)

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        return _check_username(value)


class SignInRequest(BaseModel):
    """DTO for sign-in request; identifier is an email or a username"""
    identifier: str = Field(min_length=1)
    password: str = Field(min_length=1, max_length=256)


class VerifyCodeRequest(BaseModel):
    """DTO for verification request (username may arrive URL-encoded)"""
    username: str = Field(min_length=1)
    code: str = Field(min_length=1)


class TokenResponse(BaseModel):
    """DTO for authentication token response"""
    access_token: str
    token_type: str = "bearer"


class SessionPayload(BaseModel):
    """Claims carried by a session token; validated on every decode"""
    model_config = ConfigDict(extra="ignore")

    ver: Literal[1]
    sub: str = Field(min_length=1)
    username: str = Field(min_length=1)
    is_verified: bool
    is_accepting_messages: bool


class SessionUser(CamelModel):
    """Request-scoped session derived from a valid token"""
    id: str
    username: str
    is_verified: bool
    is_accepting_messages: bool
