from functools import wraps
from typing import Optional

from flask import g, request

from auth.identity import get_identity_verifier, parse_bearer


# The verified user id is kept on g for the rest of the request.
# require_user sets it, get_current_user_id reads it.

def bearer_token() -> Optional[str]:
    return parse_bearer(request.headers.get("Authorization"))


def authenticate() -> str:
    uid = get_identity_verifier().verify(bearer_token())
    g.current_user_id = uid
    return uid


def get_current_user_id() -> Optional[str]:
    return getattr(g, "current_user_id", None)


def require_user(view):
    """401 unless the request carries a valid bearer token."""
    @wraps(view)
    def wrapper(*args, **kwargs):
        authenticate()
        return view(*args, **kwargs)
    return wrapper
