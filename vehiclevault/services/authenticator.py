"""Authenticator: turns (email, password) into a principal or a declined result."""

import logging
import secrets
from functools import lru_cache
from typing import TYPE_CHECKING

from vehiclevault.core.errors import StoreUnavailableError
from vehiclevault.core.security import hash_password, needs_rehash, verify_password
from vehiclevault.models.user import User
from vehiclevault.schemas.auth import AuthResult, DeclineReason, Profile, SessionPrincipal, UserStatus
from vehiclevault.services.credential_store import UserStore, normalize_email

if TYPE_CHECKING:
    from vehiclevault.core.config import Settings

logger = logging.getLogger(__name__)


def to_principal(user: User) -> SessionPrincipal:
    """Drop everything but the non-secret session fields."""
    return SessionPrincipal(
        id=user.id,
        full_name=user.full_name,
        email=user.email,
        profile=Profile(user.profile),
    )


@lru_cache(maxsize=4)
def _dummy_digest(rounds: int) -> str:
    """A bcrypt digest of a random secret, verified against when the email is unknown."""
    return hash_password(secrets.token_urlsafe(16), rounds)


def _is_active(user: User) -> bool:
    try:
        return UserStatus(user.status) is UserStatus.ACTIVE
    except ValueError:
        return False


class Authenticator:
    """
    Sole entry point for credential checks.

    Unknown email and wrong password produce the same declined result. Only
    after the password verifies is an inactive account reported as such.
    Ordinary failures never raise; StoreUnavailableError propagates.
    """

    def __init__(self, store: UserStore, settings: "Settings") -> None:
        self.store = store
        self.settings = settings

    def authenticate(self, email: str, password: str) -> AuthResult:
        user = self.store.find_one_by_email(normalize_email(email))
        if user is None:
            # Unknown emails pay the same bcrypt cost as known ones.
            verify_password(password, _dummy_digest(self.settings.BCRYPT_ROUNDS))
            verified = False
        else:
            verified = verify_password(password, user.password_digest)
        if not verified:
            logger.info(
                "Login declined",
                extra={"login_outcome": "declined", "reason": DeclineReason.INVALID_CREDENTIALS.value},
            )
            return AuthResult.declined(DeclineReason.INVALID_CREDENTIALS)

        if not _is_active(user):
            logger.info(
                "Login declined",
                extra={
                    "login_outcome": "declined",
                    "reason": DeclineReason.ACCOUNT_INACTIVE.value,
                    "user_id": user.id,
                },
            )
            return AuthResult.declined(DeclineReason.ACCOUNT_INACTIVE)

        try:
            principal = to_principal(user)
        except ValueError:
            logger.warning(
                "Stored user record has an unknown profile; declining login",
                extra={"login_outcome": "declined", "user_id": user.id},
            )
            return AuthResult.declined(DeclineReason.INVALID_CREDENTIALS)

        if self.settings.REHASH_ON_LOGIN and needs_rehash(user.password_digest, self.settings.BCRYPT_ROUNDS):
            self._rehash(user, password)

        logger.info("Login succeeded", extra={"login_outcome": "success", "user_id": user.id})
        return AuthResult.ok(principal)

    def _rehash(self, user: User, password: str) -> None:
        try:
            self.store.update(
                user.id,
                {"password_digest": hash_password(password, self.settings.BCRYPT_ROUNDS)},
            )
            logger.info("Password digest upgraded", extra={"user_id": user.id})
        except StoreUnavailableError:
            logger.warning("Password digest upgrade failed; keeping old digest", extra={"user_id": user.id})
