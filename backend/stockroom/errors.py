"""Error taxonomy raised by services and routes.

Every class is a Werkzeug ``HTTPException`` so the application-wide error
handler renders it with the standard JSON envelope and status code.
"""
from werkzeug import exceptions as wz


class ValidationError(wz.BadRequest):
    description = 'Invalid request'


class Unauthenticated(wz.Unauthorized):
    description = 'User not authenticated.'


class Forbidden(wz.Forbidden):
    description = 'User does not have the required role.'


class NotFound(wz.NotFound):
    description = 'Resource not found.'


class Conflict(wz.Conflict):
    description = 'Resource conflicts with current state.'


class InternalError(wz.InternalServerError):
    description = 'Internal error.'


__all__ = ['ValidationError', 'Unauthenticated', 'Forbidden', 'NotFound', 'Conflict', 'InternalError']
