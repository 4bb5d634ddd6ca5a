# core/routes.py
"""
Route table of the dashboard and resolution of a path against the session.
"""
import re
from dataclasses import dataclass

from records.user import User
from .guards import Decision, Paths, RedirectTo, Requirement, can_access


class Routes:
    HOME = "/"
    LOGIN = Paths.LOGIN
    DASHBOARD = Paths.DASHBOARD
    REPORTS = "/reports"
    REPORT_DETAIL = "/reports/:id"
    USERS = "/users"
    LOCATIONS = "/locations"
    EXPORT = "/export"
    TECHNICIAN_DASHBOARD = Paths.TECHNICIAN_DASHBOARD
    TECHNICIAN_REPORTS = "/technician/reports"
    TECHNICIAN_REPORT_DETAIL = "/technician/reports/:id"
    TECHNICIAN_PROFILE = "/technician/profile"
    TECHNICIAN_SUBMIT_REPORT = "/technician/submit-report"


ROUTE_TABLE: dict[str, Requirement] = {
    Routes.LOGIN: Requirement.PUBLIC_ONLY,
    Routes.DASHBOARD: Requirement.ADMIN,
    Routes.REPORTS: Requirement.ADMIN,
    Routes.REPORT_DETAIL: Requirement.ADMIN,
    Routes.USERS: Requirement.ADMIN,
    Routes.LOCATIONS: Requirement.ADMIN,
    Routes.EXPORT: Requirement.ADMIN,
    Routes.TECHNICIAN_DASHBOARD: Requirement.TECHNICIAN,
    Routes.TECHNICIAN_REPORTS: Requirement.TECHNICIAN,
    Routes.TECHNICIAN_REPORT_DETAIL: Requirement.TECHNICIAN,
    Routes.TECHNICIAN_PROFILE: Requirement.TECHNICIAN,
    Routes.TECHNICIAN_SUBMIT_REPORT: Requirement.TECHNICIAN,
}


@dataclass(frozen=True)
class NotFound:
    path: str


def _compile(pattern: str) -> re.Pattern:
    # ":id" style segments match one path segment
    regex = re.sub(r":[A-Za-z_]+", r"[^/]+", pattern)
    return re.compile(f"^{regex}/?$")


_COMPILED = [(_compile(pattern), pattern) for pattern in ROUTE_TABLE]


def match_route(path: str) -> str | None:
    """Return the route pattern a concrete path belongs to, if any."""
    for regex, pattern in _COMPILED:
        if regex.match(path):
            return pattern
    return None


def resolve_route(path: str, user: User | None) -> Decision | NotFound:
    """
    Decide what happens when the session navigates to `path`.

    The root path always redirects to the login page; unknown paths
    resolve to NotFound regardless of session state.
    """
    if path in ("", Routes.HOME):
        return RedirectTo(Routes.LOGIN)

    pattern = match_route(path)
    if pattern is None:
        return NotFound(path)

    return can_access(user, ROUTE_TABLE[pattern])
