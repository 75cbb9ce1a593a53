"""Request-scoped authentication context shared across blueprints.

Handlers never read the login session directly: the decorators below build
an :class:`AuthContext` for the request and pass it in as ``auth``.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import wraps
from typing import Callable, TypeVar, cast

from flask import request
from flask_login import current_user

from causeway.errors import Forbidden, Unauthorized
from causeway.models import UserRole

F = TypeVar('F', bound=Callable[..., object])


@dataclass(frozen=True)
class AuthContext:
    authorized: bool
    user_id: str | None = None
    role: UserRole | None = None

    @classmethod
    def anonymous(cls) -> "AuthContext":
        return cls(authorized=False)

    @property
    def is_admin(self) -> bool:
        return self.authorized and self.role is UserRole.ADMIN

    def has_role(self, *roles: UserRole) -> bool:
        return self.authorized and self.role in roles


def current_auth() -> AuthContext:
    """Build the auth context from the flask-login session."""
    if current_user.is_authenticated and current_user.is_active:
        return AuthContext(authorized=True, user_id=current_user.id, role=current_user.role)
    return AuthContext.anonymous()


def admin_view_requested() -> bool:
    """Whether the request asks for the unfiltered admin view of a listing."""
    return (
        request.headers.get('X-Admin', '').lower() == 'true'
        or request.args.get('admin', '').lower() == 'true'
    )


def admin_view_context() -> AuthContext | None:
    """
    Auth context for an admin view of a public endpoint.

    Returns None for ordinary public requests; raises Unauthorized when the
    admin view is requested without a session.
    """
    if not admin_view_requested():
        return None
    auth = current_auth()
    if not auth.authorized:
        raise Unauthorized('Authentication required for admin view')
    return auth


def auth_required(func: F) -> F:
    """Decorator requiring an editor or admin session; injects ``auth``."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        auth = current_auth()
        if not auth.authorized:
            raise Unauthorized()
        if not auth.has_role(UserRole.ADMIN, UserRole.EDITOR):
            raise Forbidden()
        return func(*args, auth=auth, **kwargs)
    return cast(F, wrapper)


def admin_required(func: F) -> F:
    """Decorator requiring an admin session; injects ``auth``."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        auth = current_auth()
        if not auth.authorized:
            raise Unauthorized()
        if not auth.is_admin:
            raise Forbidden('Administrator privileges required')
        return func(*args, auth=auth, **kwargs)
    return cast(F, wrapper)


__all__ = [
    'AuthContext',
    'current_auth',
    'admin_view_requested',
    'admin_view_context',
    'auth_required',
    'admin_required',
]
