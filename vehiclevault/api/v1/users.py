"""User management endpoints (admin profile only)."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from vehiclevault.api.v1.auth import require_action
from vehiclevault.core.authorization import Action
from vehiclevault.core.config import Settings, get_settings
from vehiclevault.core.database import get_db
from vehiclevault.schemas.auth import SessionPrincipal
from vehiclevault.schemas.users import UserCreate, UserOut, UsersListResponse, UserUpdate
from vehiclevault.services import users as users_service
from vehiclevault.services.credential_store import UserStore

router = APIRouter()


@router.get("", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[SessionPrincipal, Depends(require_action(Action.LIST_USERS))],
    db: Annotated[Session, Depends(get_db)],
) -> UsersListResponse:
    """List all users ordered by name. Digests are never included."""
    return UsersListResponse(users=users_service.list_users(UserStore(db)))


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(
    body: UserCreate,
    _admin: Annotated[SessionPrincipal, Depends(require_action(Action.ADD_USER))],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> UserOut:
    return users_service.add_user(UserStore(db), body, settings)


@router.patch("/{user_id}", response_model=UserOut)
def update_user(
    user_id: str,
    body: UserUpdate,
    _admin: Annotated[SessionPrincipal, Depends(require_action(Action.UPDATE_USER))],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> UserOut:
    """Partial update; omit password (or send an empty one) to keep the current password."""
    return users_service.update_user(UserStore(db), user_id, body, settings)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: str,
    admin: Annotated[SessionPrincipal, Depends(require_action(Action.DELETE_USER))],
    db: Annotated[Session, Depends(get_db)],
) -> None:
    """Delete a user. Refused for your own account, protected accounts and the last admin."""
    users_service.delete_user(UserStore(db), admin, user_id)
