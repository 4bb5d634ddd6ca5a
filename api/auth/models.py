# api/auth/models.py
"""
Pydantic models for authentication and profile endpoints.
"""
from pydantic import EmailStr, Field, model_validator

from records.base import RecordModel
from records.user import User


class LoginRequest(RecordModel):
    """Login credentials."""
    email: str = Field(..., min_length=1)
    password: str


class SessionResponse(RecordModel):
    """Who is logged in, if anyone."""
    is_authenticated: bool
    user: User | None = None


class ProfileUpdate(RecordModel):
    """Fields a user may change on their own profile. Role is not one of them."""
    name: str | None = Field(None, min_length=2)
    full_name: str | None = Field(None, min_length=2)
    email: EmailStr | None = None
    badge_number: str | None = Field(None, min_length=1)


class PasswordChange(RecordModel):
    """New password, typed twice."""
    password: str = Field(..., min_length=6)
    confirm_password: str = Field(..., min_length=6)

    @model_validator(mode="after")
    def passwords_match(self) -> "PasswordChange":
        if self.password != self.confirm_password:
            raise ValueError("Passwords don't match")
        return self


class MessageResponse(RecordModel):
    message: str
