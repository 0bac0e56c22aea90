"""Role ladder used for route authorization.

Roles form a total order by their numeric code; a caller satisfies a route
when its code is at least the lowest code the route declares.
"""
from __future__ import annotations
from enum import IntEnum
from typing import Iterable, Any


class Role(IntEnum):
    UNKNOWN = 0
    READ = 1
    WRITE = 2
    ADMIN = 3

    @classmethod
    def parse(cls, raw: Any) -> 'Role':
        """Accept a role name (any case) or its numeric code, as int or digit string."""
        if isinstance(raw, bool) or raw is None:
            raise ValueError('role invalid')
        if isinstance(raw, int):
            return cls(raw)
        if isinstance(raw, str):
            value = raw.strip()
            if value.isdigit():
                return cls(int(value))
            try:
                return cls[value.upper()]
            except KeyError:
                raise ValueError('role invalid')
        raise ValueError('role invalid')


# Route presets; always upward-closed so the minimum code decides
READERS = (Role.READ, Role.WRITE, Role.ADMIN)
WRITERS = (Role.WRITE, Role.ADMIN)
ADMINS = (Role.ADMIN,)


def minimum_role(required: Iterable[Role]) -> Role:
    return min(required)


def role_satisfies(role: Role | None, required: Iterable[Role]) -> bool:
    required = list(required)
    if not required:
        return True
    if role is None:
        return False
    return Role(role) >= minimum_role(required)
