"""Minimal deterministic OpenAPI document for the complaint tracker API.

Scope is purposefully narrow: every route with its method, auth requirement,
allowed roles and the reusable schemas. Paths are emitted in sorted order so the
output is stable between runs.
"""
from typing import Any, Dict, List, Optional
from campusfix.constants.roles import ROLE_ADMIN, ROLE_TECHNICIAN, SUBMITTER_ROLES
from campusfix.models.complaint import Complaint

__all__ = ["build_openapi_spec", "ROUTES"]

# (path, method, summary, roles) ; roles None = public, [] = any authenticated user
ROUTES = [
    ('/api/auth/register', 'post', 'Self-register a student, faculty or technician account', None),
    ('/api/auth/login', 'post', 'Exchange credentials for a bearer token', None),
    ('/api/complaints', 'post', 'File a complaint (multipart, optional image)', list(SUBMITTER_ROLES)),
    ('/api/complaints', 'get', 'List all complaints', [ROLE_ADMIN]),
    ('/api/complaints/user/{userId}', 'get', "List a user's complaints", []),
    ('/api/complaints/assigned/{techId}', 'get', 'List open complaints assigned to a technician', [ROLE_TECHNICIAN]),
    ('/api/complaints/{id}/assign', 'put', 'Assign or unassign a technician', [ROLE_ADMIN]),
    ('/api/complaints/{id}/status', 'put', 'Update complaint status', [ROLE_ADMIN, ROLE_TECHNICIAN]),
    ('/api/feedback', 'post', 'Rate a resolved complaint', []),
    ('/api/reports', 'get', 'Complaint statistics', [ROLE_ADMIN]),
    ('/api/technicians', 'get', 'List technicians', []),
]


def _operation(summary: str, roles: Optional[List[str]]) -> Dict[str, Any]:
    op: Dict[str, Any] = {
        "summary": summary,
        "responses": {
            "200": {"description": "OK"},
            "400": {"$ref": "#/components/responses/BadRequest"},
        },
    }
    if roles is not None:
        op["security"] = [{"BearerAuth": []}]
        op["responses"]["401"] = {"description": "Unauthorized"}
        if roles:
            op["x-roles"] = roles
            op["responses"]["403"] = {"description": "Forbidden"}
    return op


def build_openapi_spec() -> Dict[str, Any]:
    paths: Dict[str, Dict[str, Any]] = {}
    for path, method, summary, roles in ROUTES:
        paths.setdefault(path, {})[method] = _operation(summary, roles)

    schemas = {
        "Complaint": {
            "type": "object",
            "properties": {
                "id": {"type": "integer"},
                "userId": {"type": "integer"},
                "category": {"type": "string"},
                "title": {"type": "string"},
                "description": {"type": "string"},
                "imagePath": {"type": "string", "nullable": True},
                "status": {"type": "string", "enum": list(Complaint.ALL_STATUSES)},
                "assignedTo": {"type": "integer", "nullable": True},
                "repairNotes": {"type": "string", "nullable": True},
                "createdAt": {"type": "string", "format": "date-time"},
                "updatedAt": {"type": "string", "format": "date-time", "nullable": True},
            },
            "required": ["id", "userId", "status"],
            "x-transitions": list(Complaint.ALL_STATUSES),
        },
        "Feedback": {
            "type": "object",
            "properties": {
                "id": {"type": "integer"},
                "complaintId": {"type": "integer"},
                "userId": {"type": "integer"},
                "rating": {"type": "integer", "minimum": 1, "maximum": 5},
                "comments": {"type": "string", "nullable": True},
            },
            "required": ["id", "complaintId", "rating"],
        },
        "Error": {
            "type": "object",
            "properties": {
                "error": {
                    "type": "object",
                    "properties": {
                        "status": {"type": "integer"},
                        "title": {"type": "string"},
                        "detail": {"type": "string"},
                        "type": {"type": "string"},
                    },
                }
            },
            "required": ["error"],
        },
    }

    return {
        "openapi": "3.0.3",
        "info": {"title": "Campus Complaint Tracker API", "version": "1.0.0"},
        "paths": {p: paths[p] for p in sorted(paths)},
        "components": {
            "schemas": schemas,
            "responses": {"BadRequest": {"description": "Bad Request"}},
            "securitySchemes": {"BearerAuth": {"type": "http", "scheme": "bearer", "bearerFormat": "JWT"}},
        },
    }
