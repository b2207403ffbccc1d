from __future__ import annotations

import logging
from dataclasses import dataclass

from werkzeug.security import check_password_hash, generate_password_hash

from ..core.exceptions import AuthenticationError, EmailAlreadyInUse, NotFound
from .model import User
from .repository import UserRepository
from .schemas import LoginRequest, PasswordChange, ProfileUpdate, RegisterRequest
from .tokens import TokenService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    token: str
    user: User


def _password_matches(password_hash: str, password: str) -> bool:
    try:
        return check_password_hash(password_hash, password)
    except (TypeError, ValueError):
        # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
        return False


class AuthService:
    """Use cases: register and log in."""

    def __init__(self, users: UserRepository, tokens: TokenService):
        self._users = users
        self._tokens = tokens

    def register(self, request: RegisterRequest) -> int:
        if self._users.get_by_email(request.email):
            logger.warning("Registration rejected, email already in use: %s", request.email)
            raise EmailAlreadyInUse("Email already in use")

        user_id = self._users.create_user(
            name=request.name,
            email=request.email,
            password_hash=generate_password_hash(request.password),
        )
        logger.info("Registered user %s (%s)", user_id, request.email)
        return user_id

    def login(self, request: LoginRequest) -> LoginResult:
        user = self._users.get_by_email(request.email)
        if not user or not _password_matches(user.password_hash, request.password):
            logger.warning("Login failed for %s", request.email)
            raise AuthenticationError("Invalid email or password")

        logger.info("Login succeeded for user %s", user.user_id)
        return LoginResult(token=self._tokens.issue(user_id=user.user_id, email=user.email), user=user)


class UserService:
    """Use cases: profile and password of the current user."""

    def __init__(self, users: UserRepository):
        self._users = users

    def get_profile(self, user_id: int) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFound("User not found")
        return user

    def update_profile(self, user_id: int, update: ProfileUpdate) -> User:
        if self._users.email_taken_by_other(update.email, user_id):
            raise EmailAlreadyInUse("Email already in use")
        if not self._users.update_profile(user_id, name=update.name, email=update.email):
            raise NotFound("User not found")
        return self.get_profile(user_id)

    def change_password(self, user_id: int, change: PasswordChange) -> None:
        user = self.get_profile(user_id)
        if not _password_matches(user.password_hash, change.current_password):
            logger.warning("Password change rejected for user %s", user_id)
            raise AuthenticationError("Current password is incorrect")

        self._users.update_password(user_id, password_hash=generate_password_hash(change.new_password))
        logger.info("Password changed for user %s", user_id)
