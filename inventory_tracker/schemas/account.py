from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from inventory_tracker.core.constants import (
    PASSWORD_MIN_LENGTH,
    USERNAME_MAX_LENGTH,
    USERNAME_MIN_LENGTH,
)


class RegisterRequest(BaseModel):
    username: str = Field(
        ...,
        min_length=USERNAME_MIN_LENGTH,
        max_length=USERNAME_MAX_LENGTH,
        description="Username must be 3-30 characters",
    )
    email: EmailStr = Field(..., description="Please include a valid email")
    password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LENGTH,
        description="Password must be at least 6 characters",
    )

    @field_validator("username", mode="before")
    @classmethod
    def _strip_username(cls, value):
        return value.strip() if isinstance(value, str) else value


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class AccountRead(BaseModel):
    """Public view of an account; the password hash has no field here."""

    id: int
    username: str
    email: str
    created_at: datetime

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class AuthResponse(BaseModel):
    success: bool = True
    token: str
    user: AccountRead
    message: str


class VerifyResponse(BaseModel):
    success: bool = True
    user: AccountRead
