from functools import wraps
from flask_jwt_extended import verify_jwt_in_request
from campusfix.services.policy import authorize, current_identity


def require_roles(*roles: str):
    """Authenticate the bearer token and, when roles are given, require one of them."""
    def outer(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            verify_jwt_in_request()
            if roles:
                authorize(current_identity(), roles)
            return fn(*args, **kwargs)
        return wrapper
    return outer
