from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..common.validators import require_email, require_min_length, require_non_empty, require_object
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class RegisterRequest:
    name: str
    email: str
    password: str

    @classmethod
    def from_payload(cls, payload: Optional[Mapping[str, Any]]) -> "RegisterRequest":
        payload = require_object(payload)
        return cls(
            name=require_non_empty(payload.get("name"), "name"),
            email=require_email(payload.get("email")),
            password=require_min_length(payload.get("password"), "password", MIN_PASSWORD_LENGTH),
        )


@dataclass(frozen=True)
class LoginRequest:
    email: str
    password: str

    @classmethod
    def from_payload(cls, payload: Optional[Mapping[str, Any]]) -> "LoginRequest":
        payload = require_object(payload)
        email = payload.get("email")
        password = payload.get("password")
        if not isinstance(email, str) or not email.strip() or not isinstance(password, str) or not password:
            raise ValidationError("Email and password are required")
        return cls(email=email.strip(), password=password)


@dataclass(frozen=True)
class ProfileUpdate:
    name: str
    email: str

    @classmethod
    def from_payload(cls, payload: Optional[Mapping[str, Any]]) -> "ProfileUpdate":
        payload = require_object(payload)
        if not payload.get("name") or not payload.get("email"):
            raise ValidationError("Name and email are required")
        return cls(
            name=require_non_empty(payload.get("name"), "name"),
            email=require_email(payload.get("email")),
        )


@dataclass(frozen=True)
class PasswordChange:
    current_password: str
    new_password: str

    @classmethod
    def from_payload(cls, payload: Optional[Mapping[str, Any]]) -> "PasswordChange":
        payload = require_object(payload)
        current = payload.get("currentPassword")
        new = payload.get("newPassword")
        if not current or not new:
            raise ValidationError("Current and new password are required")
        return cls(
            current_password=str(current),
            new_password=require_min_length(new, "newPassword", MIN_PASSWORD_LENGTH),
        )
