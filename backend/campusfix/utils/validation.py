from __future__ import annotations
"""Reusable validation helpers for request payloads.

Every failure raises ValidationError so callers get the same 400 shape.
"""
from typing import Any, Iterable
from flask import request
from campusfix.errors import ValidationError


def validate_status(new_status: str, allowed: Iterable[str], field_name: str = 'status') -> str:
    """Validate that new_status is inside allowed.

    Returns the status (to enable inline usage) or raises ValidationError.
    """
    allowed = tuple(allowed)
    if new_status not in allowed:
        raise ValidationError(description=f"{field_name} must be one of: {', '.join(allowed)}")
    return new_status


def coerce_int(value: Any, field_name: str) -> int:
    # bool is an int subclass; True must not pass as 1
    if isinstance(value, bool):
        raise ValidationError(description=f'{field_name} must be an integer')
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ValidationError(description=f'{field_name} must be an integer')


def validate_range(value: int, low: int, high: int, field_name: str) -> int:
    if value < low or value > high:
        raise ValidationError(description=f'{field_name} must be between {low} and {high}')
    return value


def require_fields(data: dict, *names: str) -> None:
    missing = [n for n in names if not data.get(n)]
    if missing:
        raise ValidationError(description=f"{', '.join(missing)} required")


def require_strings(data: dict, *names: str) -> None:
    """Raise ValidationError for any named field that is present but not a string."""
    bad = [n for n in names if data.get(n) is not None and not isinstance(data.get(n), str)]
    if bad:
        raise ValidationError(description=f"{', '.join(bad)} must be a string")


def json_object() -> dict:
    """Return the JSON request body, which must be an object (an empty body counts as {})."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError(description='Request body must be a JSON object')
    return data


__all__ = ['validate_status', 'coerce_int', 'validate_range', 'require_fields', 'require_strings', 'json_object']
