from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable
from flask import current_app
from flask_jwt_extended import get_jwt, get_jwt_identity
from campusfix.constants.roles import ROLE_ADMIN
from campusfix.errors import Forbidden


@dataclass(frozen=True)
class Identity:
    """Authenticated caller, rebuilt from the token claims on every request."""
    user_id: int
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


def identity_from_claims(subject, claims) -> Identity:
    return Identity(user_id=int(subject), role=claims.get('role'))


def current_identity() -> Identity:
    # JWT identity is stored as string (flask-jwt-extended v4 requirement)
    return identity_from_claims(get_jwt_identity(), get_jwt())


def authorize(identity: Identity, allowed_roles: Iterable[str]) -> None:
    allowed = tuple(allowed_roles)
    if identity.role not in allowed:
        current_app.logger.warning('Role %s denied (allowed: %s) for user %s', identity.role, ', '.join(allowed), identity.user_id)
        raise Forbidden()


def assert_self_or_admin(identity: Identity, user_id: int) -> None:
    if identity.is_admin:
        return
    if identity.user_id != user_id:
        raise Forbidden(description='Record ownership required')
