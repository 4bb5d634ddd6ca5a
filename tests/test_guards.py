import pytest

from core.guards import (
    ALLOW,
    RedirectTo,
    Requirement,
    admin_only,
    can_access,
    public_only,
    technician_only,
)
from core.routes import NotFound, match_route, resolve_route
from records.user import UserRole


@pytest.fixture
def admin(user_factory):
    return user_factory(UserRole.ADMIN)


@pytest.fixture
def technician(user_factory):
    return user_factory(UserRole.TECHNICIAN)


def test_public_only(admin, technician):
    assert public_only(None) == ALLOW
    assert public_only(admin) == RedirectTo("/dashboard")
    assert public_only(technician) == RedirectTo("/technician")


def test_admin_only(admin, technician):
    assert admin_only(None) == RedirectTo("/login")
    assert admin_only(technician) == RedirectTo("/technician")
    assert admin_only(admin) == ALLOW


def test_technician_only(admin, technician):
    assert technician_only(None) == RedirectTo("/login")
    assert technician_only(admin) == RedirectTo("/dashboard")
    assert technician_only(technician) == ALLOW


def test_can_access_dispatches(admin):
    assert can_access(admin, Requirement.ADMIN) == ALLOW
    assert can_access(admin, Requirement.TECHNICIAN) == RedirectTo("/dashboard")
    assert can_access(admin, Requirement.PUBLIC_ONLY) == RedirectTo("/dashboard")


@pytest.mark.parametrize("path,pattern", [
    ("/login", "/login"),
    ("/reports", "/reports"),
    ("/reports/abc123", "/reports/:id"),
    ("/reports/abc123/", "/reports/:id"),
    ("/technician", "/technician"),
    ("/technician/reports/xyz", "/technician/reports/:id"),
    ("/technician/submit-report", "/technician/submit-report"),
    ("/reports/abc/extra", None),
    ("/settings", None),
])
def test_match_route(path, pattern):
    assert match_route(path) == pattern


def test_root_redirects_to_login(admin):
    assert resolve_route("/", None) == RedirectTo("/login")
    assert resolve_route("/", admin) == RedirectTo("/login")


def test_unknown_path_not_found(admin):
    assert resolve_route("/nowhere", None) == NotFound("/nowhere")
    assert resolve_route("/nowhere", admin) == NotFound("/nowhere")


@pytest.mark.parametrize("path", ["/dashboard", "/reports", "/reports/r1", "/users", "/locations", "/export"])
def test_admin_routes(path, admin, technician):
    assert resolve_route(path, admin) == ALLOW
    assert resolve_route(path, technician) == RedirectTo("/technician")
    assert resolve_route(path, None) == RedirectTo("/login")


@pytest.mark.parametrize("path", [
    "/technician",
    "/technician/reports",
    "/technician/reports/r1",
    "/technician/profile",
    "/technician/submit-report",
])
def test_technician_routes(path, admin, technician):
    assert resolve_route(path, technician) == ALLOW
    assert resolve_route(path, admin) == RedirectTo("/dashboard")
    assert resolve_route(path, None) == RedirectTo("/login")


def test_login_route_is_public_only(admin, technician):
    assert resolve_route("/login", None) == ALLOW
    assert resolve_route("/login", admin) == RedirectTo("/dashboard")
    assert resolve_route("/login", technician) == RedirectTo("/technician")
