"""Domain error taxonomy.

Each error is a werkzeug HTTPException so services can raise it directly and the
application error handler renders it like any ``abort(...)``. ``error_type``
names the failure independently of the HTTP status, since several of them share
400.
"""
from __future__ import annotations
from werkzeug import exceptions


class ValidationError(exceptions.BadRequest):
    error_type = 'ValidationError'


class Conflict(exceptions.BadRequest):
    error_type = 'Conflict'


class InvalidCredentials(exceptions.BadRequest):
    error_type = 'InvalidCredentials'
    description = 'Invalid credentials'


class Unauthorized(exceptions.Unauthorized):
    error_type = 'Unauthorized'


class Forbidden(exceptions.Forbidden):
    error_type = 'Forbidden'
    description = 'Access denied'


class NotFound(exceptions.NotFound):
    error_type = 'NotFound'


__all__ = ['ValidationError', 'Conflict', 'InvalidCredentials', 'Unauthorized', 'Forbidden', 'NotFound']
