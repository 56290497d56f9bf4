"""Login/logout endpoints and the session dependencies (route guard, role gate)."""

from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session

from vehiclevault.core.authorization import Action, authorize, require_authenticated
from vehiclevault.core.config import Settings, get_settings
from vehiclevault.core.database import get_db
from vehiclevault.core.session import CookieSessionCache, SessionHolder
from vehiclevault.schemas.auth import DeclineReason, LoginRequest, LoginResponse, SessionPrincipal
from vehiclevault.services.authenticator import Authenticator
from vehiclevault.services.credential_store import UserStore

router = APIRouter()


def get_session_holder(
    request: Request,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> SessionHolder:
    """Dependency: session holder for this client, already restored from its cookie."""
    cache = CookieSessionCache(request, response, secure=settings.APP_ENV == "prod")
    holder = SessionHolder(cache, Authenticator(UserStore(db), settings), settings)
    holder.restore()
    return holder


def get_current_principal(
    holder: Annotated[SessionHolder, Depends(get_session_holder)],
) -> SessionPrincipal:
    """Dependency: require a logged-in client. Raises NotAuthenticatedError (401) otherwise."""
    return require_authenticated(holder.current())


def require_action(action: Action) -> Callable[..., SessionPrincipal]:
    """Dependency factory: route guard plus profile gate for ``action`` (403 when denied)."""

    def _dependency(
        holder: Annotated[SessionHolder, Depends(get_session_holder)],
    ) -> SessionPrincipal:
        return authorize(holder.current(), action)

    return _dependency


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    holder: Annotated[SessionHolder, Depends(get_session_holder)],
) -> LoginResponse:
    """
    Authenticate with email and password. On success the session is stored in
    an httponly cookie; the same generic message is returned for an unknown
    email and a wrong password.
    """
    result = holder.login(body.email, body.password)
    if not result.success or result.principal is None:
        code = (
            status.HTTP_503_SERVICE_UNAVAILABLE
            if result.reason is DeclineReason.UNAVAILABLE
            else status.HTTP_401_UNAUTHORIZED
        )
        raise HTTPException(status_code=code, detail=result.message)
    return LoginResponse(
        user=result.principal,
        message=f"Welcome, {result.principal.full_name}!",
    )


@router.post("/logout")
def logout(
    holder: Annotated[SessionHolder, Depends(get_session_holder)],
) -> dict[str, str]:
    """Clear the session cookie. Safe to call when already logged out."""
    holder.logout()
    return {"message": "You have been successfully logged out."}


@router.get("/me", response_model=SessionPrincipal)
def me(
    principal: Annotated[SessionPrincipal, Depends(get_current_principal)],
) -> SessionPrincipal:
    """Return the principal held by the current session."""
    return principal
