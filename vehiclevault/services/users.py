"""User management: validated create/update/delete on top of the credential store."""

import logging
import re
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError as SchemaValidationError

from vehiclevault.core.authorization import can_delete_user, check_user_deletion, check_user_demotion
from vehiclevault.core.errors import AuthorizationRefusedError, DuplicateEmailError, ValidationError
from vehiclevault.core.security import (
    COMPANY_MAX_LEN,
    FULL_NAME_MAX_LEN,
    PASSWORD_MAX_LEN,
    PHONE_MAX_LEN,
    hash_password,
)
from vehiclevault.schemas.auth import Profile, SessionPrincipal, UserStatus
from vehiclevault.schemas.users import UserCreate, UserOut, UserUpdate
from vehiclevault.services.credential_store import UserStore, normalize_email

if TYPE_CHECKING:
    from vehiclevault.core.config import Settings

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _clean_full_name(value: str) -> str:
    name = (value or "").strip()
    if not name:
        raise ValidationError("Full name cannot be empty.", field="full_name")
    if len(name) > FULL_NAME_MAX_LEN:
        raise ValidationError(
            f"Full name must be at most {FULL_NAME_MAX_LEN} characters.", field="full_name"
        )
    return name


def _clean_email(value: str) -> str:
    email = normalize_email(value)
    if not email:
        raise ValidationError("Email cannot be empty.", field="email")
    if not EMAIL_PATTERN.match(email) or len(email) > 255:
        raise ValidationError("Invalid email address.", field="email")
    return email


def _check_password(value: str, settings: "Settings") -> None:
    if len(value) < settings.PASSWORD_MIN_LEN:
        raise ValidationError(
            f"Password must be at least {settings.PASSWORD_MIN_LEN} characters.", field="password"
        )
    if len(value) > PASSWORD_MAX_LEN:
        raise ValidationError(
            f"Password must be at most {PASSWORD_MAX_LEN} characters.", field="password"
        )


def _clean_optional(value: str | None, field: str, max_len: int) -> str | None:
    """Trim optional free text; blank becomes None."""
    if value is None:
        return None
    text = value.strip()
    if not text:
        return None
    if len(text) > max_len:
        raise ValidationError(f"{field} must be at most {max_len} characters.", field=field)
    return text


def list_users(store: UserStore) -> list[UserOut]:
    """All users ordered by full name, without digests. Records with an unknown profile or status are skipped."""
    users: list[UserOut] = []
    for record in store.list_users():
        try:
            users.append(UserOut.model_validate(record))
        except SchemaValidationError:
            logger.warning("Skipping user record with unknown profile or status", extra={"user_id": record.id})
    return users


def add_user(
    store: UserStore,
    data: UserCreate,
    settings: "Settings",
    *,
    is_protected: bool = False,
) -> UserOut:
    """
    Create a staff account.

    Uniqueness is checked before the insert; a concurrent insert that slips
    past the check is rejected by the unique index and raised the same way.
    """
    full_name = _clean_full_name(data.full_name)
    email = _clean_email(data.email)
    _check_password(data.password, settings)
    company = _clean_optional(data.company, "company", COMPANY_MAX_LEN)
    phone = _clean_optional(data.phone, "phone", PHONE_MAX_LEN)

    if store.find_one_by_email(email) is not None:
        raise DuplicateEmailError(email)

    user = store.insert(
        {
            "full_name": full_name,
            "email": email,
            "password_digest": hash_password(data.password, settings.BCRYPT_ROUNDS),
            "company": company,
            "profile": Profile(data.profile).value,
            "phone": phone,
            "status": UserStatus(data.status).value,
            "is_protected": is_protected,
        }
    )
    logger.info("User created", extra={"entity": "user", "user_id": user.id})
    return UserOut.model_validate(user)


def _is_active_admin(profile: str, status: str) -> bool:
    return profile == Profile.ADMIN.value and status == UserStatus.ACTIVE.value


def _check_demotion(store: UserStore, user_id: str, fields: dict[str, Any]) -> None:
    target = store.require(user_id)
    losing_admin = target.profile == Profile.ADMIN.value and fields.get("profile", target.profile) != target.profile
    losing_active = (
        target.status == UserStatus.ACTIVE.value and fields.get("status", target.status) != target.status
    )
    if not (losing_admin or losing_active):
        return
    is_active_admin = _is_active_admin(target.profile, target.status)
    check_user_demotion(
        target_is_protected=bool(target.is_protected),
        target_is_active_admin=is_active_admin,
        active_admin_count=store.count_active_admins() if is_active_admin else 0,
    )


def update_user(
    store: UserStore,
    user_id: str,
    data: UserUpdate,
    settings: "Settings",
) -> UserOut:
    """
    Apply a partial update. Only fields set on ``data`` are touched; an empty
    password keeps the current digest. With nothing to change this is a no-op.
    Demoting or deactivating a protected account or the last active admin is refused.
    """
    provided = data.model_dump(exclude_unset=True)
    fields: dict[str, Any] = {}

    if provided.get("full_name") is not None:
        fields["full_name"] = _clean_full_name(data.full_name)
    if provided.get("email") is not None:
        email = _clean_email(data.email)
        existing = store.find_one_by_email(email)
        if existing is not None and existing.id != user_id:
            raise DuplicateEmailError(email)
        fields["email"] = email
    if "company" in provided:
        fields["company"] = _clean_optional(data.company, "company", COMPANY_MAX_LEN)
    if "phone" in provided:
        fields["phone"] = _clean_optional(data.phone, "phone", PHONE_MAX_LEN)
    if provided.get("profile") is not None:
        fields["profile"] = Profile(data.profile).value
    if provided.get("status") is not None:
        fields["status"] = UserStatus(data.status).value
    if "profile" in fields or "status" in fields:
        _check_demotion(store, user_id, fields)
    if data.password:
        _check_password(data.password, settings)
        fields["password_digest"] = hash_password(data.password, settings.BCRYPT_ROUNDS)

    if not fields:
        logger.info("No fields to update", extra={"entity": "user", "user_id": user_id})
        return UserOut.model_validate(store.require(user_id))

    user = store.update(user_id, fields)
    logger.info(
        "User updated",
        extra={"entity": "user", "user_id": user_id, "fields": ",".join(sorted(fields))},
    )
    return UserOut.model_validate(user)


def delete_user(store: UserStore, actor: SessionPrincipal, user_id: str) -> None:
    """Delete a user after the self, protected and last-admin guards pass."""
    if not can_delete_user(actor.id, user_id):
        raise AuthorizationRefusedError("You cannot delete your own user account.")

    target = store.require(user_id)
    is_active_admin = _is_active_admin(target.profile, target.status)
    check_user_deletion(
        actor,
        target_id=target.id,
        target_is_protected=bool(target.is_protected),
        target_is_active_admin=is_active_admin,
        active_admin_count=store.count_active_admins() if is_active_admin else 0,
    )
    store.delete(user_id)
    logger.info("User deleted", extra={"entity": "user", "user_id": user_id, "actor_id": actor.id})
