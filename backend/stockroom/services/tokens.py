"""Session token issuing and verification.

Tokens are HS256 JWTs minted through flask-jwt-extended. The key belongs to
a ``SessionSigner`` built once by ``create_app`` and never persisted, so
every session dies with the process. The JWT manager's key loaders read
the signer of the current application.
"""
from __future__ import annotations
import logging
import secrets
from datetime import timedelta
from typing import Optional

from flask import current_app
from flask_jwt_extended import JWTManager, create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from stockroom.config.security import SIGNING_KEY_BYTES, TOKEN_TTL
from stockroom.errors import NotFound, Unauthenticated
from stockroom.models.authz import User
from stockroom.services.stores import UserStore

logger = logging.getLogger(__name__)

EXTENSION_KEY = 'session_signer'


class SessionSigner:
    def __init__(self, users: UserStore, key: Optional[bytes] = None):
        self.users = users
        self._key = key or secrets.token_bytes(SIGNING_KEY_BYTES)

    @property
    def key(self) -> bytes:
        return self._key

    def init_app(self, app, jwt: JWTManager):
        app.extensions[EXTENSION_KEY] = self
        jwt.encode_key_loader(_signing_key)
        jwt.decode_key_loader(_verification_key)

    def issue(self, user: User, expires_delta: Optional[timedelta] = None) -> str:
        """Mint a token for user; must run inside an application context."""
        return create_access_token(
            identity=str(user.id),
            additional_claims={'id': user.id, 'email': user.email},
            expires_delta=expires_delta if expires_delta is not None else TOKEN_TTL,
        )

    def verify(self, token: Optional[str]) -> User:
        """Return the stored user the token speaks for, or raise ``Unauthenticated``."""
        if not token or not token.strip():
            raise Unauthenticated('Missing or empty session token.')
        try:
            claims = decode_token(token)
        except (JWTExtendedException, PyJWTError) as e:
            logger.debug('Session token rejected: %s', e.__class__.__name__)
            raise Unauthenticated('Invalid session token.') from e

        user_id = claims.get('id')
        if user_id is None:
            user_id = claims.get('sub')
        try:
            user_id = int(user_id)
        except (TypeError, ValueError):
            raise Unauthenticated('Invalid session token: missing user id.')

        try:
            user = self.users.get(user_id)
        except NotFound:
            raise Unauthenticated('Invalid session token: user does not exist.')
        email = claims.get('email')
        if email is not None and (not isinstance(email, str) or email.casefold() != user.email.casefold()):
            raise Unauthenticated('Invalid session token: user does not exist.')
        return user


def get_signer() -> SessionSigner:
    return current_app.extensions[EXTENSION_KEY]


def _signing_key(identity):
    return get_signer().key


def _verification_key(jwt_header, jwt_data):
    return get_signer().key


__all__ = ['SessionSigner', 'get_signer']
