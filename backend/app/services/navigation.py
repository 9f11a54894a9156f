"""Navigation shell: route table, role gating and active-route highlighting."""

from typing import NamedTuple, Optional

from backend.app.models.enums import UserRole
from backend.app.schemas.navigation import NavigationRead, NavItem

STAFF_ROLES = (UserRole.admin.value, UserRole.coach.value)
ADMIN_ONLY = (UserRole.admin.value,)


class NavRoute(NamedTuple):
    name: str
    href: str
    allowed_roles: tuple[str, ...]


NAV_ROUTES: tuple[NavRoute, ...] = (
    NavRoute("Dashboard", "/", STAFF_ROLES),
    NavRoute("Schedule", "/schedule", STAFF_ROLES),
    NavRoute("Students", "/students", ADMIN_ONLY),
    NavRoute("Coaches", "/coaches", ADMIN_ONLY),
    NavRoute("Branches", "/branches", ADMIN_ONLY),
    NavRoute("Sessions", "/sessions", ADMIN_ONLY),
)


def normalize_path(path: Optional[str]) -> str:
    if not path:
        return "/"
    path = path.split("?", 1)[0].split("#", 1)[0]
    if not path.startswith("/"):
        path = "/" + path
    if len(path) > 1:
        path = path.rstrip("/") or "/"
    return path


def find_route(path: Optional[str]) -> Optional[NavRoute]:
    target = normalize_path(path)
    return next((route for route in NAV_ROUTES if route.href == target), None)


def can_access(role: str, path: Optional[str]) -> bool:
    route = find_route(path)
    return route is not None and role in route.allowed_roles


def build_navigation(role: str, path: Optional[str], sidebar_open: bool = False) -> NavigationRead:
    """Menu for the role with the entry matching ``path`` exactly marked active."""
    target = normalize_path(path)
    items = [
        NavItem(name=route.name, href=route.href, active=route.href == target)
        for route in NAV_ROUTES
        if role in route.allowed_roles
    ]
    active = next((item.href for item in items if item.active), None)
    return NavigationRead(role=role, items=items, active_href=active, sidebar_open=sidebar_open)
