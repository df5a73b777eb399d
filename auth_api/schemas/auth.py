"""Authentication schemas."""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from auth_api.services.passwords import BCRYPT_MAX_PASSWORD_BYTES, exceeds_bcrypt_limit

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128
NAME_MAX_LENGTH = 100

_PASSWORD_POLICY = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d).+$")


def check_password_strength(password: str) -> str:
    """Require at least one lowercase letter, one uppercase letter and one digit."""
    if not _PASSWORD_POLICY.match(password):
        raise ValueError(
            "Password must contain an uppercase letter, a lowercase letter and a number"
        )
    return password


class UserRegister(BaseModel):
    """User registration request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)
    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        if exceeds_bcrypt_limit(value):
            raise ValueError(f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes long")
        return check_password_strength(value)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name must not be blank")
        return value


class UserLogin(BaseModel):
    """User login request.

    No strength policy here: a weak password simply fails verification.
    """

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LENGTH)


class UserResponse(BaseModel):
    """Outward view of a user. Never carries the password hash."""

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    email: str
    name: str
    created_at: datetime
    updated_at: datetime


class LoginResult(BaseModel):
    """Successful login: the session token and the user it was issued for."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    token: str
    user: UserResponse


class TokenClaims(BaseModel):
    """Identity facts embedded in a session token."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    user_id: int
    email: str
