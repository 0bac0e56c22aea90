"""Access gate run before every route handler.

Stage A resolves the caller from the session cookie. A bad or stale token
demotes the caller to anonymous and clears the cookie instead of failing.
Stage B applies the matched route's declared roles, raising
``Unauthenticated`` for anonymous callers and ``Forbidden`` for callers
below the route's minimum role.
"""
from __future__ import annotations
import logging
from typing import FrozenSet, Optional

from flask import Flask, current_app, g, request
from flask_jwt_extended import unset_access_cookies

from stockroom.config.security import SESSION_COOKIE_NAME
from stockroom.constants.roles import Role, role_satisfies
from stockroom.errors import Forbidden, Unauthenticated
from stockroom.models.authz import User
from stockroom.services.tokens import SessionSigner

logger = logging.getLogger(__name__)


def current_user() -> Optional[User]:
    return g.get('auth_user')


def route_roles() -> FrozenSet[Role]:
    if request.endpoint is None:
        return frozenset()
    view = current_app.view_functions.get(request.endpoint)
    return getattr(view, 'required_roles', frozenset())


class AccessGate:
    def __init__(self, signer: SessionSigner):
        self.signer = signer

    def init_app(self, app: Flask):
        app.extensions['access_gate'] = self
        app.before_request(self._before_request)
        app.after_request(self._after_request)

    def resolve_identity(self) -> Optional[User]:
        g.auth_user = None
        token = request.cookies.get(SESSION_COOKIE_NAME)
        if not token or not token.strip():
            return None
        try:
            user = self.signer.verify(token)
        except Unauthenticated as e:
            logger.debug('Dropping session cookie: %s', e.description)
            g.clear_session_cookie = True
            return None
        g.auth_user = user
        return user

    def authorize(self, user: Optional[User], required: FrozenSet[Role]) -> None:
        if not required:
            return
        if user is None:
            raise Unauthenticated('User not authenticated.')
        if not role_satisfies(user.role, required):
            logger.info('Denied %s %s to user %s with role %s', request.method, request.path, user.id, user.role.name)
            raise Forbidden('User does not have the required role.')

    def _before_request(self):
        user = self.resolve_identity()
        # CORS preflight carries no credentials
        if request.method == 'OPTIONS':
            return None
        self.authorize(user, route_roles())
        return None

    def _after_request(self, response):
        if g.get('clear_session_cookie'):
            unset_access_cookies(response)
        return response


__all__ = ['AccessGate', 'current_user', 'route_roles']
