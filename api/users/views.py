# api/users/views.py
"""
User management endpoints. Admin only.
"""
from fastapi import APIRouter, HTTPException, Query, status

from api.auth.models import MessageResponse, PasswordChange
from api.reports.queries import search_users
from core.deps import AdminUser, Store
from core.exceptions import NotFoundError
from records.user import User, UserCreate, UserUpdate
from .models import UserListResponse

router = APIRouter(prefix="/users", tags=["users"])


def _not_found(exc: NotFoundError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=str(exc),
    )


@router.get("", response_model=UserListResponse, summary="List users")
async def list_users(
    admin: AdminUser,
    store: Store,
    q: str | None = Query(None, description="Search name, full name, email or badge number"),
) -> UserListResponse:
    """List all users, optionally filtered by a search term."""
    users = search_users(store.users, q)
    return UserListResponse(users=users, total=len(users))


@router.post(
    "",
    response_model=User,
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
)
async def create_user(user_data: UserCreate, admin: AdminUser, store: Store) -> User:
    """Create a new user. The password is not kept."""
    return await store.add_user(user_data)


@router.get("/{user_id}", response_model=User, summary="Get user by ID")
async def get_user(user_id: str, admin: AdminUser, store: Store) -> User:
    try:
        return store.get_user(user_id)
    except NotFoundError as exc:
        raise _not_found(exc) from exc


@router.put("/{user_id}", response_model=User, summary="Update user")
async def update_user(
    user_id: str,
    updates: UserUpdate,
    admin: AdminUser,
    store: Store,
) -> User:
    """Merge the given fields into a user."""
    try:
        return await store.update_user(user_id, updates)
    except NotFoundError as exc:
        raise _not_found(exc) from exc


@router.post("/{user_id}/password", response_model=MessageResponse, summary="Set user password")
async def set_user_password(
    user_id: str,
    request: PasswordChange,
    admin: AdminUser,
    store: Store,
) -> MessageResponse:
    """Accept a new password for a user. Nothing is stored by the demo."""
    try:
        await store.change_password(user_id, request.password)
    except NotFoundError as exc:
        raise _not_found(exc) from exc

    return MessageResponse(message="Password updated successfully")


@router.delete("/{user_id}", response_model=MessageResponse, summary="Delete user")
async def delete_user(user_id: str, admin: AdminUser, store: Store) -> MessageResponse:
    """
    Delete a user.
    The logged-in admin cannot delete their own account.
    """
    try:
        deleted = await store.delete_user(user_id)
    except NotFoundError as exc:
        raise _not_found(exc) from exc

    if not deleted:
        if user_id == admin.id:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="You cannot delete your own account while logged in",
            )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred",
        )
    return MessageResponse(message="User deleted successfully")
