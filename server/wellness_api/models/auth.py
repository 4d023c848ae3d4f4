"""Authentication request and response models."""
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

PASSWORD_MIN_LENGTH = 6


class Credentials(BaseModel):
    """Email and password pair."""

    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        return value.strip().lower()


class RegisterRequest(Credentials):
    """New account payload."""

    password: str = Field(min_length=PASSWORD_MIN_LENGTH)


class UserProfile(BaseModel):
    """Public view of a user."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    email: str


class AuthResponse(UserProfile):
    """Issued bearer token plus the user it belongs to."""

    message: str
    token: str
