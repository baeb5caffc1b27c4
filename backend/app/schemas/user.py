"""
Pydantic schemas for user-related request/response validation.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import EmailStr, Field, field_validator, model_validator

from app.schemas.base import CamelModel, UpdateModel

Role = Literal["admin", "attendee", "organizer", "venue", "service_provider", "sponsor"]
# Registration cannot self-assign admin
SelfServiceRole = Literal["attendee", "organizer", "venue", "service_provider", "sponsor"]

USERNAME_PATTERN = r"^[a-zA-Z0-9_]+$"


def normalize_role(value):
    # Older clients send "services" for service providers
    if value == "services":
        return "service_provider"
    return value


class UserRegister(CamelModel):
    email: EmailStr
    username: str = Field(..., min_length=3, max_length=30, pattern=USERNAME_PATTERN)
    password: str = Field(..., min_length=8, max_length=128)
    confirm_password: str
    first_name: str = Field(..., min_length=2, max_length=50)
    last_name: str = Field(..., min_length=2, max_length=50)
    role: SelfServiceRole = "attendee"
    phone: Optional[str] = Field(None, max_length=50)
    city: Optional[str] = Field(None, max_length=100)

    @field_validator("role", mode="before")
    @classmethod
    def normalize_legacy_role(cls, value):
        return normalize_role(value)

    @model_validator(mode="after")
    def passwords_match(self) -> "UserRegister":
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class UserLogin(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserUpsert(CamelModel):
    """
    Insert-or-update shape used by registration and OIDC sign-in.
    password is plaintext here; storage hashes it.
    """

    id: Optional[str] = None
    email: EmailStr
    username: Optional[str] = Field(None, min_length=3, max_length=30, pattern=USERNAME_PATTERN)
    password: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    role: Optional[Role] = None
    bio: Optional[str] = None
    phone: Optional[str] = None
    city: Optional[str] = None

    @field_validator("role", mode="before")
    @classmethod
    def normalize_legacy_role(cls, value):
        return normalize_role(value)


class UserUpdate(UpdateModel):
    username: Optional[str] = Field(None, min_length=3, max_length=30, pattern=USERNAME_PATTERN)
    first_name: Optional[str] = Field(None, min_length=2, max_length=50)
    last_name: Optional[str] = Field(None, min_length=2, max_length=50)
    profile_image_url: Optional[str] = None
    bio: Optional[str] = None
    phone: Optional[str] = Field(None, max_length=50)
    city: Optional[str] = Field(None, max_length=100)


class RoleUpdate(CamelModel):
    role: Role

    @field_validator("role", mode="before")
    @classmethod
    def normalize_legacy_role(cls, value):
        return normalize_role(value)


class UserResponse(CamelModel):
    id: str
    email: str
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    role: str
    bio: Optional[str] = None
    phone: Optional[str] = None
    city: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class PasswordResetRequest(CamelModel):
    email: EmailStr


class PasswordResetConfirm(CamelModel):
    token: str = Field(..., min_length=1)
    password: str = Field(..., min_length=8, max_length=128)
    confirm_password: str

    @model_validator(mode="after")
    def passwords_match(self) -> "PasswordResetConfirm":
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class ForgotPasswordResponse(CamelModel):
    message: str
    # Only populated when DEBUG is on; production delivers the token out of band
    reset_token: Optional[str] = None


class DetailResponse(CamelModel):
    message: str
