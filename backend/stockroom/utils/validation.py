from __future__ import annotations
"""Request body validation helpers.

Each helper returns the cleaned value (to enable inline usage) or raises
``ValidationError`` (400).
"""
from typing import Any, Dict, Optional

from flask import request

from stockroom.constants.limits import MAX_INT64
from stockroom.constants.roles import Role
from stockroom.errors import ValidationError


def json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError('JSON object body required')
    return data


def require_str(data: Dict[str, Any], field: str, message: Optional[str] = None, strip: bool = True) -> str:
    value = data.get(field)
    if not isinstance(value, str) or not (value.strip() if strip else value):
        raise ValidationError(message or f'Missing {field}')
    return value.strip() if strip else value


def require_non_negative_int(data: Dict[str, Any], field: str, message: Optional[str] = None) -> int:
    value = data.get(field)
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= MAX_INT64:
        raise ValidationError(message or f'{field} must be a non-negative integer')
    return value


def require_role(data: Dict[str, Any], field: str = 'role') -> Role:
    try:
        return Role.parse(data.get(field))
    except ValueError:
        raise ValidationError('Missing role')


__all__ = ['json_body', 'require_str', 'require_non_negative_int', 'require_role']
