"""
User record with role-based access for the maintenance dashboard.

Roles:
- ADMIN: Manages users, locations and every submitted report
- TECHNICIAN: Submits reports and reads only their own
"""
from datetime import datetime
from enum import Enum

from pydantic import EmailStr, Field

from .base import RecordModel


class UserRole(str, Enum):
    """User roles for authorization."""
    ADMIN = "admin"
    TECHNICIAN = "technician"


class User(RecordModel):
    id: str

    # Login name and contact
    email: str
    name: str

    # Profile
    full_name: str
    badge_number: str

    # Role-based access control
    role: UserRole

    # Timestamps
    created_at: datetime
    updated_at: datetime

    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def is_technician(self) -> bool:
        return self.role == UserRole.TECHNICIAN


class UserCreate(RecordModel):
    """Data required to create a user. The password never reaches the stored record."""
    name: str = Field(..., min_length=2)
    full_name: str = Field(..., min_length=2)
    email: EmailStr
    badge_number: str = Field(..., min_length=1)
    role: UserRole
    password: str = Field(..., min_length=6)


class UserUpdate(RecordModel):
    """Partial user update. Only fields explicitly set are merged."""
    name: str | None = Field(None, min_length=2)
    full_name: str | None = Field(None, min_length=2)
    email: EmailStr | None = None
    badge_number: str | None = Field(None, min_length=1)
    role: UserRole | None = None
