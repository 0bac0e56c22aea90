"""Credential hashing.

Digests use werkzeug's scrypt scheme with fixed cost parameters. The
resulting string carries method, parameters and salt
(``scrypt:32768:8:1$<salt>$<hex>``), so verification needs nothing else.
"""
from __future__ import annotations
import logging
from functools import lru_cache
from typing import Optional

from werkzeug.security import generate_password_hash, check_password_hash

from stockroom.config.security import PASSWORD_HASH_METHOD, PASSWORD_SALT_LENGTH
from stockroom.errors import InternalError

logger = logging.getLogger(__name__)


def hash_password(plaintext: str) -> str:
    """Hash plaintext and self-verify the digest before handing it out."""
    digest = generate_password_hash(plaintext, method=PASSWORD_HASH_METHOD, salt_length=PASSWORD_SALT_LENGTH)
    if not check_password_hash(digest, plaintext):
        logger.error('Password digest failed self-verification')
        raise InternalError('Hashing failed.')
    return digest


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return generate_password_hash('not-a-real-password', method=PASSWORD_HASH_METHOD, salt_length=PASSWORD_SALT_LENGTH)


def verify_password(digest: Optional[str], plaintext: str) -> bool:
    """Return True when plaintext matches digest.

    A missing digest (unknown account) still pays for one hash so response
    time does not reveal whether the account exists.
    """
    if not digest:
        check_password_hash(_dummy_hash(), plaintext)
        return False
    try:
        return check_password_hash(digest, plaintext)
    except ValueError:
        logger.warning('Unreadable password digest encountered')
        return False


__all__ = ['hash_password', 'verify_password']
