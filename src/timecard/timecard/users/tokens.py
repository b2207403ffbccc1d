from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt

from ..core.constants import DEFAULT_TOKEN_HOURS, JWT_ALGORITHM
from ..core.exceptions import AuthenticationError


class TokenService:
    """Issues and verifies HS256 bearer tokens carrying the user id."""

    def __init__(self, secret: str, *, expires_hours: int = DEFAULT_TOKEN_HOURS):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self._expires = timedelta(hours=int(expires_hours))

    def issue(self, *, user_id: int, email: str, now: datetime | None = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "email": email,
            "iat": issued_at,
            "exp": issued_at + self._expires,
        }
        return jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)

    def verify(self, token: str) -> int:
        """Return the user id inside ``token``."""

        try:
            payload = jwt.decode(token, self._secret, algorithms=[JWT_ALGORITHM])
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token has expired") from None
        except jwt.InvalidTokenError:
            raise AuthenticationError("Invalid token") from None

        try:
            return int(payload["sub"])
        except (KeyError, TypeError, ValueError):
            raise AuthenticationError("Invalid token") from None
