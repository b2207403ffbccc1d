from __future__ import annotations

from typing import Optional, Protocol

from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(self, *, name: str, email: str, password_hash: str) -> int:
        """Insert a user; raises EmailAlreadyInUse on a duplicate email."""

        raise NotImplementedError

    def email_taken_by_other(self, email: str, user_id: int) -> bool:
        raise NotImplementedError

    def update_profile(self, user_id: int, *, name: str, email: str) -> bool:
        raise NotImplementedError

    def update_password(self, user_id: int, *, password_hash: str) -> bool:
        raise NotImplementedError
