# core/deps.py
"""
FastAPI dependencies for session access and role guarding.
"""
from typing import Annotated

from fastapi import Depends, HTTPException, status

from records.user import User
from store import DomainStore, get_store
from core.guards import Paths, RedirectTo, Requirement, can_access

Store = Annotated[DomainStore, Depends(get_store)]


class AccessDenied(HTTPException):
    """
    Raised when the session fails a guard.

    The body names the page the client should navigate to instead:
    401 when that is the login page, 403 otherwise.
    """
    def __init__(self, redirect: RedirectTo, message: str = "Not enough permissions"):
        if redirect.route == Paths.LOGIN:
            code = status.HTTP_401_UNAUTHORIZED
            message = "Not authenticated"
        else:
            code = status.HTTP_403_FORBIDDEN
        super().__init__(
            status_code=code,
            detail={"message": message, "redirect_to": redirect.route},
        )


def _guard(store: DomainStore, requirement: Requirement, message: str) -> User | None:
    decision = can_access(store.current_user, requirement)
    if isinstance(decision, RedirectTo):
        raise AccessDenied(decision, message)
    return store.current_user


async def get_current_user(store: Store) -> User:
    """
    Dependency to get the session user.

    Raises:
        AccessDenied: If nobody is logged in
    """
    if store.current_user is None:
        raise AccessDenied(RedirectTo(Paths.LOGIN))
    return store.current_user


async def require_public(store: Store) -> None:
    """Dependency for the login screen: only when nobody is logged in."""
    _guard(store, Requirement.PUBLIC_ONLY, "Already authenticated")


async def require_admin(store: Store) -> User:
    """Dependency that requires the admin role."""
    return _guard(store, Requirement.ADMIN, "Admin access required")


async def require_technician(store: Store) -> User:
    """Dependency that requires the technician role."""
    return _guard(store, Requirement.TECHNICIAN, "Technician access required")


# Type aliases for cleaner endpoint signatures
CurrentUser = Annotated[User, Depends(get_current_user)]
AdminUser = Annotated[User, Depends(require_admin)]
TechnicianUser = Annotated[User, Depends(require_technician)]
PublicOnly = Depends(require_public)
