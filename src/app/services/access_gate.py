"""
Routing/access gate.

Decides, for a path and the current session, whether the page may be shown
or where to send the user instead.
"""

from dataclasses import dataclass
from typing import Optional

from src.app.services.session_context import SessionContext
from src.domain.entities import AccessArea

LOGIN_PATH = "/login"
DASHBOARD_PATH = "/dashboard"
ADMIN_PATH = "/admin"

AUTH_PATHS = frozenset({LOGIN_PATH, "/register", "/update-password"})
PROTECTED_PATHS = frozenset({DASHBOARD_PATH, "/settings"})
FEATURE_PATHS = {
    "/problem": AccessArea.problem,
    "/customers": AccessArea.customers,
    "/solution": AccessArea.solution,
    "/competitors": AccessArea.competitors,
    "/financials": AccessArea.financials,
    "/progress": AccessArea.progress,
}


@dataclass(frozen=True)
class RouteDecision:
    allowed: bool
    redirect_to: Optional[str] = None

    @classmethod
    def allow(cls) -> "RouteDecision":
        return cls(allowed=True)

    @classmethod
    def redirect(cls, path: str) -> "RouteDecision":
        return cls(allowed=False, redirect_to=path)


def _root(path: str) -> str:
    """'/customers/segments?x=1' -> '/customers'"""
    path = path.split("?", 1)[0].split("#", 1)[0].rstrip("/") or "/"
    segments = [segment for segment in path.split("/") if segment]
    return f"/{segments[0]}" if segments else "/"


def resolve_route(path: str, session: SessionContext) -> RouteDecision:
    root = _root(path)
    signed_in = session.is_authenticated

    if root in AUTH_PATHS:
        return RouteDecision.redirect(DASHBOARD_PATH) if signed_in else RouteDecision.allow()

    if root == ADMIN_PATH:
        return RouteDecision.allow() if session.is_master else RouteDecision.redirect(LOGIN_PATH)

    if root in PROTECTED_PATHS:
        return RouteDecision.allow() if signed_in else RouteDecision.redirect(LOGIN_PATH)

    area = FEATURE_PATHS.get(root)
    if area is None:
        return RouteDecision.redirect(DASHBOARD_PATH)
    if not signed_in:
        return RouteDecision.redirect(LOGIN_PATH)
    if not session.has_access(area.value):
        return RouteDecision.redirect(DASHBOARD_PATH)
    return RouteDecision.allow()
