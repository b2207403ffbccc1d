from __future__ import annotations

from functools import wraps

from flask import g, request

from ..core.exceptions import AuthenticationError
from ..users.tokens import TokenService


def bearer_token() -> str:
    header = request.headers.get("Authorization", "")
    if not header.startswith("Bearer "):
        raise AuthenticationError("Unauthorized")
    token = header[len("Bearer "):].strip()
    if not token:
        raise AuthenticationError("Unauthorized")
    return token


def make_token_required(tokens: TokenService):
    """Decorator factory: authenticate the bearer token, expose ``g.user_id``."""

    def token_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.user_id = tokens.verify(bearer_token())
            return view(*args, **kwargs)

        return wrapper

    return token_required
