# core/guards.py
"""
Pure authorization predicates for the dashboard's route groups.

Given the session user (or None), each decision is either Allow or a
RedirectTo naming where the caller should be sent instead. Decisions hold
no state and must be re-evaluated after every session change.
"""
from dataclasses import dataclass
from enum import Enum

from records.user import User


class Requirement(str, Enum):
    """Access requirement of a route group."""
    PUBLIC_ONLY = "public_only"
    ADMIN = "admin"
    TECHNICIAN = "technician"


class Paths:
    LOGIN = "/login"
    DASHBOARD = "/dashboard"
    TECHNICIAN_DASHBOARD = "/technician"


@dataclass(frozen=True)
class Allow:
    pass


@dataclass(frozen=True)
class RedirectTo:
    route: str


Decision = Allow | RedirectTo

ALLOW = Allow()


def home_for(user: User) -> str:
    """Landing page of a signed-in user."""
    if user.is_admin():
        return Paths.DASHBOARD
    return Paths.TECHNICIAN_DASHBOARD


def public_only(user: User | None) -> Decision:
    """Login screen: signed-in users are sent to their home page."""
    if user is not None:
        return RedirectTo(home_for(user))
    return ALLOW


def admin_only(user: User | None) -> Decision:
    if user is None:
        return RedirectTo(Paths.LOGIN)
    if not user.is_admin():
        if user.is_technician():
            return RedirectTo(Paths.TECHNICIAN_DASHBOARD)
        return RedirectTo(Paths.LOGIN)
    return ALLOW


def technician_only(user: User | None) -> Decision:
    if user is None:
        return RedirectTo(Paths.LOGIN)
    if not user.is_technician():
        if user.is_admin():
            return RedirectTo(Paths.DASHBOARD)
        return RedirectTo(Paths.LOGIN)
    return ALLOW


_GUARDS = {
    Requirement.PUBLIC_ONLY: public_only,
    Requirement.ADMIN: admin_only,
    Requirement.TECHNICIAN: technician_only,
}


def can_access(user: User | None, requirement: Requirement) -> Decision:
    """Evaluate the guard for a requirement against the session user."""
    return _GUARDS[requirement](user)
