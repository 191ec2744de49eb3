"""Identity request and response models.

Covers registration, login, password reset, profile updates and staff
account management.
"""

import uuid
from datetime import datetime
from typing import Any

from pydantic import Field, field_validator, model_validator

from app.core.validators import normalize_phone_number, validate_email_format
from app.models.principal import Role
from app.schemas.base import FormModel, RecordOut, RequestModel, ResponseModel

NAME_LENGTH_ERROR = "Name must be between 2 and 50 characters"
PASSWORD_LENGTH_ERROR = "Password must be at least 6 characters"


def _check_name(value: str) -> str:
    if not 2 <= len(value) <= 50:
        raise ValueError(NAME_LENGTH_ERROR)
    return value


def _check_password(value: str) -> str:
    if len(value) < 6:
        raise ValueError(PASSWORD_LENGTH_ERROR)
    return value


class AccountCreate(RequestModel):
    """New account fields (JSON body for staff accounts)."""

    name: str
    email: str
    password: str
    phone_number: str

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return _check_name(v)

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        return validate_email_format(v)

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        return _check_password(v)

    @field_validator("phone_number")
    @classmethod
    def check_phone(cls, v: str) -> str:
        return normalize_phone_number(v)


class RegisterForm(FormModel, AccountCreate):
    """User registration (multipart, optional ``image`` file)."""


class LoginRequest(RequestModel):
    email: str
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        return validate_email_format(v)


class ProfileUpdateForm(FormModel):
    """Partial profile update (multipart, optional ``image`` file)."""

    name: str | None = None
    email: str | None = None
    phone_number: str | None = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str | None) -> str | None:
        return _check_name(v) if v is not None else v

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str | None) -> str | None:
        return validate_email_format(v) if v is not None else v

    @field_validator("phone_number")
    @classmethod
    def check_phone(cls, v: str | None) -> str | None:
        return normalize_phone_number(v) if v is not None else v


class ChangePasswordRequest(RequestModel):
    current_password: str = Field(min_length=1)
    new_password: str

    @field_validator("new_password")
    @classmethod
    def check_new_password(cls, v: str) -> str:
        if len(v) < 6:
            raise ValueError("New password must be at least 6 characters")
        return v


class SendOtpRequest(RequestModel):
    email: str

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        return validate_email_format(v)


class VerifyOtpRequest(SendOtpRequest):
    otp: str = Field(min_length=1)


class ResetPasswordRequest(SendOtpRequest):
    new_password: str
    confirm_new_password: str

    @field_validator("new_password")
    @classmethod
    def check_new_password(cls, v: str) -> str:
        if len(v) < 6:
            raise ValueError("New password must be at least 6 characters")
        return v

    @model_validator(mode="after")
    def check_confirmation(self) -> "ResetPasswordRequest":
        if self.new_password != self.confirm_new_password:
            raise ValueError("New Password and the confirm do not match")
        return self


class PrincipalOut(RecordOut):
    """Public view of a principal (never includes secrets)."""

    name: str
    email: str
    phone_number: str
    role: Role
    image: dict[str, Any] = Field(default_factory=dict)
    is_active: bool
    last_login: datetime | None = None


class PrincipalRef(ResponseModel):
    """Principal summary embedded in other records."""

    id: uuid.UUID
    name: str
    email: str | None = None


__all__ = [
    "ChangePasswordRequest",
    "LoginRequest",
    "PrincipalOut",
    "PrincipalRef",
    "ProfileUpdateForm",
    "RegisterForm",
    "ResetPasswordRequest",
    "SendOtpRequest",
    "AccountCreate",
    "VerifyOtpRequest",
]
