# todo_app/schemas/user.py
from pydantic import BaseModel, ConfigDict, Field, field_validator

PASSWORD_MIN_LENGTH = 6


def _required(v: str, field: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError(f"{field} is required")
    return v


# -- Request --

class RegisterIn(BaseModel):
    name: str = Field(..., max_length=100)
    email: str = Field(..., max_length=255)
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH)

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        return _required(v, "name")

    @field_validator("email")
    @classmethod
    def email_required(cls, v: str) -> str:
        # trimmed only; email comparison stays case-sensitive
        return _required(v, "email")


class LoginIn(BaseModel):
    email: str
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH)

    @field_validator("email")
    @classmethod
    def email_required(cls, v: str) -> str:
        return _required(v, "email")


# -- Response --

class MessageOut(BaseModel):
    message: str


class TokenOut(MessageOut):
    token: str


class ProfileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    name: str
    email: str


class CurrentUser(BaseModel):
    """Identity attached by the auth gate; lives for one request."""
    model_config = ConfigDict(frozen=True)
    user_id: str
    name: str
    email: str
    session_id: str
