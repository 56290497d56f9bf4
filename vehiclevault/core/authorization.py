"""Authorization checks layered on top of an authenticated session."""

from enum import StrEnum

from vehiclevault.core.errors import AccessDeniedError, AuthorizationRefusedError, NotAuthenticatedError
from vehiclevault.schemas.auth import Profile, SessionPrincipal


class Action(StrEnum):
    LIST_USERS = "users:list"
    ADD_USER = "users:add"
    UPDATE_USER = "users:update"
    DELETE_USER = "users:delete"
    MANAGE_CATALOG = "catalog:manage"
    MANAGE_VEHICLES = "vehicles:manage"


# Actions gated on the admin profile; anything else only needs a session.
ADMIN_ACTIONS = frozenset(
    {Action.LIST_USERS, Action.ADD_USER, Action.UPDATE_USER, Action.DELETE_USER}
)


def require_authenticated(principal: SessionPrincipal | None) -> SessionPrincipal:
    if principal is None:
        raise NotAuthenticatedError()
    return principal


def profile_allows(profile: Profile, action: Action) -> bool:
    match profile:
        case Profile.ADMIN:
            return True
        case Profile.TECHNICIAN:
            return action not in ADMIN_ACTIONS
    raise ValueError(f"Unknown profile: {profile!r}")


def require_profile(principal: SessionPrincipal, *allowed: Profile) -> SessionPrincipal:
    """Raise AccessDeniedError unless the principal's profile is one of ``allowed``."""
    if principal.profile not in allowed:
        raise AccessDeniedError()
    return principal


def authorize(principal: SessionPrincipal | None, action: Action) -> SessionPrincipal:
    """Route guard plus role gate for a named action."""
    principal = require_authenticated(principal)
    allowed = tuple(p for p in Profile if profile_allows(p, action))
    return require_profile(principal, *allowed)


def can_delete_user(actor_id: str, target_id: str) -> bool:
    return actor_id != target_id


def check_user_deletion(
    actor: SessionPrincipal,
    target_id: str,
    target_is_protected: bool,
    target_is_active_admin: bool,
    active_admin_count: int,
) -> None:
    """
    Refuse deletions that would lock staff out. Must run before any store write.

    Refused: the acting user's own account, an account flagged protected, and
    the last remaining active admin.
    """
    if not can_delete_user(actor.id, target_id):
        raise AuthorizationRefusedError("You cannot delete your own user account.")
    if target_is_protected:
        raise AuthorizationRefusedError("This account is protected and cannot be deleted.")
    if target_is_active_admin and active_admin_count <= 1:
        raise AuthorizationRefusedError("Cannot delete the last active admin account.")


def check_user_demotion(target_is_protected: bool, target_is_active_admin: bool, active_admin_count: int) -> None:
    """
    Refuse a profile or status change that takes admin rights or activity away
    from a protected account or from the last remaining active admin.
    """
    if target_is_protected:
        raise AuthorizationRefusedError("This account is protected and cannot be demoted or deactivated.")
    if target_is_active_admin and active_admin_count <= 1:
        raise AuthorizationRefusedError("Cannot demote or deactivate the last active admin account.")
