"""Content fingerprints and conditional GET handling.

A fingerprint is SHA-256 over a compact JSON array of field values, so
values containing separators cannot collide. Collections are sorted by id
before hashing because store iteration order is not part of the content.
"""
from __future__ import annotations
import base64
import hashlib
import json
from typing import Any, Iterable, Optional, Sequence

from flask import jsonify, make_response, request


def compute_etag(*parts: Any) -> str:
    seed = json.dumps(list(parts), separators=(',', ':'), ensure_ascii=False, default=str)
    digest = hashlib.sha256(seed.encode('utf-8')).digest()
    return 'W/"' + base64.urlsafe_b64encode(digest).rstrip(b'=').decode('ascii') + '"'


def resource_etag(fields: Sequence[Any]) -> str:
    return compute_etag(*fields)


def collection_etag(filter_key: Any, members: Iterable[Sequence[Any]]) -> str:
    """Fingerprint a listing; each member tuple must start with its id."""
    ordered = sorted((list(m) for m in members), key=lambda m: m[0])
    return compute_etag(filter_key, *ordered)


def _opaque(tag: str) -> str:
    tag = tag.strip()
    return tag[2:] if tag.startswith('W/') else tag


def is_fresh(client_validator: Optional[str], current: str) -> bool:
    """Evaluate If-None-Match against the current fingerprint (weak comparison)."""
    if not client_validator or not client_validator.strip():
        return False
    candidate = client_validator.strip()
    if candidate == '*':
        return True
    wanted = _opaque(current)
    return any(_opaque(part) == wanted for part in candidate.split(','))


# single records may sit in shared caches; listings are per caller
RESOURCE_SCOPE = 'public'
COLLECTION_SCOPE = 'private'


def cache_control(scope: str) -> str:
    return f'{scope}, max-age=0, must-revalidate'


def make_cached_response(payload: Any, etag: str, scope: str = RESOURCE_SCOPE):
    """Return 304 with validators when the client copy is fresh, else the full body."""
    if is_fresh(request.headers.get('If-None-Match'), etag):
        resp = make_response('', 304)
    else:
        resp = make_response(jsonify(payload))
    resp.headers['ETag'] = etag
    resp.headers['Cache-Control'] = cache_control(scope)
    return resp


__all__ = ['RESOURCE_SCOPE', 'COLLECTION_SCOPE', 'compute_etag', 'resource_etag', 'collection_etag', 'is_fresh', 'cache_control', 'make_cached_response']
