"""Pydantic schemas for registration and login forms."""

from typing import Annotated

from pydantic import (
    BaseModel,
    EmailStr,
    Field,
    StringConstraints,
    ValidationInfo,
    field_validator,
)

PASSWORD_MIN_LENGTH = 8

Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class RegisterForm(BaseModel):
    """Fields accepted by the registration form."""

    name: Name = Field(..., max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH)
    password_confirmation: str = Field(...)

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @field_validator("password_confirmation")
    @classmethod
    def passwords_match(cls, value: str, info: ValidationInfo) -> str:
        if "password" in info.data and value != info.data["password"]:
            raise ValueError("The password confirmation does not match.")
        return value


class LoginForm(BaseModel):
    """Fields accepted by the login form."""

    email: Name = Field(..., max_length=255)
    password: str = Field(..., min_length=1)
