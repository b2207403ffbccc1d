from __future__ import annotations

import re
from typing import Any, Mapping, Optional

from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_non_empty(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: Any, field_name: str, min_len: int) -> str:
    if not isinstance(value, str) or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_email(value: Any, field_name: str = "email") -> str:
    email = require_non_empty(value, field_name)
    if not _EMAIL_RE.match(email):
        raise ValidationError(f"{field_name} is not a valid email address")
    return email


def optional_int(value: Any, field_name: str, *, minimum: Optional[int] = None, maximum: Optional[int] = None) -> Optional[int]:
    """Parse an optional integer query parameter, enforcing bounds."""

    if value is None or value == "":
        return None
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer") from None
    if minimum is not None and parsed < minimum:
        raise ValidationError(f"{field_name} must be >= {minimum}")
    if maximum is not None and parsed > maximum:
        raise ValidationError(f"{field_name} must be <= {maximum}")
    return parsed


def require_object(payload: Any) -> Mapping[str, Any]:
    """JSON request body as a mapping; a missing body counts as empty."""

    if payload is None:
        return {}
    if not isinstance(payload, Mapping):
        raise ValidationError("Request body must be a JSON object")
    return payload
