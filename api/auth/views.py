# api/auth/views.py
"""
Authentication and own-profile endpoints.
"""
from fastapi import APIRouter, HTTPException, status

from core.deps import CurrentUser, PublicOnly, Store
from core.exceptions import AuthError, NotFoundError
from records.user import User, UserUpdate
from .models import (
    LoginRequest,
    MessageResponse,
    PasswordChange,
    ProfileUpdate,
    SessionResponse,
)


router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post(
    "/login",
    response_model=User,
    summary="Login with email and password",
    dependencies=[PublicOnly],
)
async def login(credentials: LoginRequest, store: Store) -> User:
    """
    Start a session for a seeded account.
    Only available while nobody is logged in.
    """
    try:
        return await store.login(credentials.email, credentials.password)
    except AuthError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
        ) from exc


@router.post("/logout", response_model=MessageResponse, summary="Logout")
async def logout(store: Store) -> MessageResponse:
    """End the session. Succeeds even when nobody is logged in."""
    store.logout()
    return MessageResponse(message="You have been successfully logged out")


@router.get("/session", response_model=SessionResponse, summary="Get session state")
async def get_session_state(store: Store) -> SessionResponse:
    """Report whether someone is logged in, without requiring it."""
    return SessionResponse(is_authenticated=store.is_authenticated, user=store.current_user)


@router.get("/me", response_model=User, summary="Get current user")
async def get_me(current_user: CurrentUser) -> User:
    """Get the logged-in user's profile."""
    return current_user


@router.put("/me", response_model=User, summary="Update current user profile")
async def update_me(
    updates: ProfileUpdate,
    current_user: CurrentUser,
    store: Store,
) -> User:
    """
    Update the logged-in user's own profile.
    The session copy is refreshed along with the stored user.
    """
    patch = UserUpdate(**updates.model_dump(exclude_unset=True))
    try:
        return await store.update_user(current_user.id, patch)
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc


@router.post("/me/password", response_model=MessageResponse, summary="Change password")
async def change_password(
    request: PasswordChange,
    current_user: CurrentUser,
    store: Store,
) -> MessageResponse:
    """
    Accept a new password for the logged-in user.
    The demo keeps no credential store, so the login password is unchanged.
    """
    try:
        await store.change_password(current_user.id, request.password)
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc

    return MessageResponse(message="Password changed successfully")
