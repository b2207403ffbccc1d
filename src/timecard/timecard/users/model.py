from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: plain data object, no DB access code here.
    """

    user_id: int
    name: str
    email: str
    password_hash: str
    created_at: Optional[datetime] = None

    def public_dict(self) -> dict:
        return {
            "id": self.user_id,
            "name": self.name,
            "email": self.email,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
