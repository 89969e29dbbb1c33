"""Sign-up / sign-in / password schemas."""

import re

from pydantic import BaseModel, Field, field_validator, model_validator

from coachhub.core.constants import EMAIL_PATTERN, NAME_MAX_LENGTH, NAME_MIN_LENGTH
from coachhub.core.enums import UserType
from coachhub.schemas.user import UserRead
from coachhub.services.passwords import password_rule_errors

_EMAIL_RE = re.compile(EMAIL_PATTERN)


def _check_email(value: str) -> str:
    value = value.strip().lower()
    if not value:
        raise ValueError("Email is required")
    if not _EMAIL_RE.match(value):
        raise ValueError("Please enter a valid email address")
    return value


def _check_password(value: str) -> str:
    errors = password_rule_errors(value)
    if errors:
        raise ValueError("; ".join(errors))
    return value


class SignUpRequest(BaseModel):
    email: str
    password: str
    confirm_password: str
    name: str
    user_type: UserType

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        return _check_email(v)

    @field_validator("password")
    @classmethod
    def _password(cls, v: str) -> str:
        return _check_password(v)

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < NAME_MIN_LENGTH:
            raise ValueError(f"Name must be at least {NAME_MIN_LENGTH} characters long")
        if len(v) > NAME_MAX_LENGTH:
            raise ValueError(f"Name must be less than {NAME_MAX_LENGTH} characters")
        return v

    @model_validator(mode="after")
    def _passwords_match(self):
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class SignInRequest(BaseModel):
    email: str
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        return _check_email(v)


class AuthSession(BaseModel):
    """Bearer token plus the signed-in user."""

    access_token: str
    token_type: str = "bearer"
    user: UserRead


class ResetPasswordRequest(BaseModel):
    email: str

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        return _check_email(v)


class ResetPasswordAccepted(BaseModel):
    message: str
    reset_token: str | None = None  # Only populated in debug mode


class ConfirmResetRequest(BaseModel):
    token: str
    new_password: str

    @field_validator("new_password")
    @classmethod
    def _password(cls, v: str) -> str:
        return _check_password(v)


class UpdatePasswordRequest(BaseModel):
    new_password: str

    @field_validator("new_password")
    @classmethod
    def _password(cls, v: str) -> str:
        return _check_password(v)


class PasswordStrengthRequest(BaseModel):
    password: str


class PasswordStrengthRead(BaseModel):
    score: int
    feedback: str
    color: str
