"""Role and status vocabularies shared by models, services and routes.
Values are persisted and sent over the wire; never rename them silently.
"""
from __future__ import annotations
from typing import Tuple

ROLE_STUDENT = 'student'
ROLE_FACULTY = 'faculty'
ROLE_TECHNICIAN = 'technician'
ROLE_ADMIN = 'admin'

ALL_ROLES: Tuple[str, ...] = (ROLE_STUDENT, ROLE_FACULTY, ROLE_TECHNICIAN, ROLE_ADMIN)
# Roles a visitor may pick at sign-up; admin comes only from the seeding script
SELF_REGISTER_ROLES: Tuple[str, ...] = (ROLE_STUDENT, ROLE_FACULTY, ROLE_TECHNICIAN)
# Roles allowed to file complaints
SUBMITTER_ROLES: Tuple[str, ...] = (ROLE_STUDENT, ROLE_FACULTY, ROLE_TECHNICIAN)
