"""
Jotter Backend: User Request/Response Schemas
==============================================

What:  Pydantic models for registration, login and the public user view.
Who:   Used by UserService and the /users route handlers.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from jotter.exceptions import ValidationError

PASSWORD_MIN_LENGTH = 7
PASSWORD_MAX_LENGTH = 128


class UserCreate(BaseModel):
    """Payload for POST /users."""

    model_config = ConfigDict(extra="ignore")

    # email-validator caps addresses at 254 characters
    email: EmailStr
    password: str = Field(min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: Any) -> str:
        """Trims and lowercases; EmailStr then checks the address itself."""
        if not isinstance(v, str):
            raise PydanticCustomError("email_type", "Email is required")
        return v.strip().lower()

    @field_validator("password")
    @classmethod
    def reject_obvious_password(cls, v: str) -> str:
        if "password" in v.lower():
            raise PydanticCustomError(
                "password_weak", 'Password cannot contain "password"'
            )
        return v


class UserLogin(BaseModel):
    """Payload for POST /users/login."""

    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class UserResponse(BaseModel):
    """Public view of a user; never includes the password hash or tokens."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str
    email: str
    created_at: datetime


class AuthResponse(BaseModel):
    """Returned by registration and login: the user plus a fresh bearer token."""

    user: UserResponse
    token: str


class MessageResponse(BaseModel):
    message: str


def validate_user_create(payload: Any) -> UserCreate:
    try:
        return UserCreate.model_validate(payload if payload is not None else {})
    except PydanticValidationError as exc:
        errors = exc.errors()
        message = errors[0]["msg"] if errors else "Validation failed"
        raise ValidationError(message=message)
