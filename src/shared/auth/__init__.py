"""Auth gate factory and FastAPI dependency.

Provides get_authorizer() / set_authorizer() to swap implementations, and
``require_admin`` for admin-only routes.
"""

import structlog
from fastapi import HTTPException, Request

from shared.auth.port import AccessDenied, Authorizer, Principal
from shared.auth.token_adapter import StaticTokenAuthorizer

logger = structlog.get_logger(__name__)

_current_authorizer: Authorizer | None = None


def get_authorizer() -> Authorizer:
    """Return the current authorizer. Defaults to StaticTokenAuthorizer."""
    global _current_authorizer
    if _current_authorizer is None:
        _current_authorizer = StaticTokenAuthorizer()
    return _current_authorizer


def set_authorizer(authorizer: Authorizer) -> None:
    """Override the active authorizer (useful for tests)."""
    global _current_authorizer
    _current_authorizer = authorizer


def reset_authorizer() -> None:
    """Reset to default authorizer."""
    global _current_authorizer
    _current_authorizer = None


def require_admin(request: Request) -> Principal:
    """FastAPI dependency guarding mutating admin endpoints."""
    try:
        return get_authorizer().authorize(request)
    except AccessDenied as exc:
        logger.info("admin_access_denied", path=request.url.path, reason=str(exc))
        raise HTTPException(status_code=401, detail=str(exc)) from exc


__all__ = [
    "AccessDenied",
    "Authorizer",
    "Principal",
    "get_authorizer",
    "require_admin",
    "reset_authorizer",
    "set_authorizer",
]
