from typing import Callable

from stockroom.constants.roles import Role


def require_roles(*roles: Role):
    """Declare the roles a route accepts.

    Nothing is checked here; the access gate reads ``required_roles`` off the
    matched view before the handler runs. Routes without the attribute are public.
    """
    def outer(fn: Callable):
        fn.required_roles = frozenset(Role(r) for r in roles)
        return fn
    return outer
