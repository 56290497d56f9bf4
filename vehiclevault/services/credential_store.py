"""Credential store: access to the users table.

Every store call goes through here so infrastructure failures surface as
StoreUnavailableError (details logged) and the email unique index surfaces as
DuplicateEmailError. Callers never see a raw SQLAlchemy exception.
"""

import logging
from typing import Any

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from vehiclevault.core.errors import DuplicateEmailError, NotFoundError, StoreUnavailableError
from vehiclevault.models.user import User
from vehiclevault.schemas.auth import Profile, UserStatus

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    """Emails are compared trimmed and lower-cased everywhere."""
    return (email or "").strip().lower()


class UserStore:
    """Thin repository over a SQLAlchemy session for user records."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def _fail(self, operation: str, exc: SQLAlchemyError) -> StoreUnavailableError:
        self.db.rollback()
        logger.exception(
            "User store operation failed",
            extra={"entity": "user", "operation": operation, "error_type": type(exc).__name__},
        )
        return StoreUnavailableError()

    def find_one_by_email(self, email: str) -> User | None:
        try:
            return self.db.query(User).filter(User.email == normalize_email(email)).first()
        except SQLAlchemyError as e:
            raise self._fail("find_one_by_email", e) from e

    def get(self, user_id: str) -> User | None:
        try:
            return self.db.get(User, user_id)
        except SQLAlchemyError as e:
            raise self._fail("get", e) from e

    def require(self, user_id: str) -> User:
        user = self.get(user_id)
        if user is None:
            raise NotFoundError("User not found.")
        return user

    def list_users(self) -> list[User]:
        try:
            return self.db.query(User).order_by(User.full_name, User.id).all()
        except SQLAlchemyError as e:
            raise self._fail("list", e) from e

    def count_active_admins(self) -> int:
        try:
            return (
                self.db.query(func.count(User.id))
                .filter(User.profile == Profile.ADMIN.value, User.status == UserStatus.ACTIVE.value)
                .scalar()
            ) or 0
        except SQLAlchemyError as e:
            raise self._fail("count_active_admins", e) from e

    def insert(self, fields: dict[str, Any]) -> User:
        user = User(**fields)
        try:
            self.db.add(user)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            # Lost the check-then-insert race: the unique index caught it.
            logger.warning("Duplicate email rejected by store", extra={"entity": "user"})
            raise DuplicateEmailError(fields.get("email", "")) from e
        except SQLAlchemyError as e:
            raise self._fail("insert", e) from e
        self.db.refresh(user)
        return user

    def update(self, user_id: str, fields: dict[str, Any]) -> User:
        user = self.require(user_id)
        for key, value in fields.items():
            setattr(user, key, value)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning("Duplicate email rejected by store", extra={"entity": "user"})
            raise DuplicateEmailError(fields.get("email", "")) from e
        except SQLAlchemyError as e:
            raise self._fail("update", e) from e
        self.db.refresh(user)
        return user

    def delete(self, user_id: str) -> None:
        user = self.require(user_id)
        try:
            self.db.delete(user)
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._fail("delete", e) from e
