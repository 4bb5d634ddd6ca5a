# api/users/models.py
"""
Pydantic models for user management endpoints.
"""
from records.base import RecordModel
from records.user import User


class UserListResponse(RecordModel):
    """List of users response."""
    users: list[User]
    total: int
