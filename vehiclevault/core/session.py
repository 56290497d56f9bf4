"""Client-held session: the principal cached under a fixed key after login.

There is no server-side session table and no expiry. The cached value is a
signed token (PyJWT) over the principal's non-secret fields so a client can
read it but not forge a different profile. Anything that fails to decode, or
decodes without every required field, is treated as a logged-out client and
erased.
"""

import logging
from typing import TYPE_CHECKING, Any, Protocol

import jwt
from fastapi import Request, Response
from pydantic import ValidationError

from vehiclevault.core.errors import StoreUnavailableError
from vehiclevault.schemas.auth import AuthResult, DeclineReason, SessionPrincipal

if TYPE_CHECKING:
    from vehiclevault.core.config import Settings
    from vehiclevault.services.authenticator import Authenticator

logger = logging.getLogger(__name__)

# Browsers cap cookie lifetime at 400 days.
SESSION_COOKIE_MAX_AGE = 400 * 24 * 60 * 60


class SessionCache(Protocol):
    """Key -> string store local to the client (cookie jar, memory, ...)."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemorySessionCache:
    """In-process cache; share one instance across holders to model a client restart."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value

    def delete(self, key: str) -> None:
        self.values.pop(key, None)


class CookieSessionCache:
    """
    Cache backed by the browser's cookie jar: reads from the request, writes to
    the response. Writes made during the request are visible to later reads.
    """

    def __init__(self, request: Request, response: Response, secure: bool = False) -> None:
        self.request = request
        self.response = response
        self.secure = secure
        self._pending: dict[str, str | None] = {}

    def get(self, key: str) -> str | None:
        if key in self._pending:
            return self._pending[key]
        return self.request.cookies.get(key)

    def set(self, key: str, value: str) -> None:
        self._pending[key] = value
        self.response.set_cookie(
            key,
            value,
            max_age=SESSION_COOKIE_MAX_AGE,
            httponly=True,
            samesite="lax",
            secure=self.secure,
        )

    def delete(self, key: str) -> None:
        self._pending[key] = None
        self.response.delete_cookie(key, httponly=True, samesite="lax", secure=self.secure)


def encode_principal(principal: SessionPrincipal, settings: "Settings") -> str:
    """Serialize a principal into the signed string stored in the cache."""
    payload: dict[str, Any] = {
        "sub": principal.id,
        "full_name": principal.full_name,
        "email": principal.email,
        "profile": principal.profile.value,
    }
    return jwt.encode(
        payload,
        settings.SESSION_SECRET.get_secret_value(),
        algorithm=settings.SESSION_ALGORITHM,
    )


def decode_principal(value: str, settings: "Settings") -> SessionPrincipal | None:
    """Return the cached principal, or None when the value is malformed or incomplete."""
    try:
        payload = jwt.decode(
            value,
            settings.SESSION_SECRET.get_secret_value(),
            algorithms=[settings.SESSION_ALGORITHM],
        )
    except jwt.PyJWTError:
        return None
    try:
        return SessionPrincipal(
            id=payload.get("sub"),
            full_name=payload.get("full_name"),
            email=payload.get("email"),
            profile=payload.get("profile"),
        )
    except ValidationError:
        return None


class SessionHolder:
    """
    Holds the authenticated principal for one client.

    States are Unauthenticated (current() is None) and Authenticated. Call
    restore() once at start-up; login() and logout() move between states and
    keep the cache in step.
    """

    def __init__(
        self,
        cache: SessionCache,
        authenticator: "Authenticator",
        settings: "Settings",
    ) -> None:
        self.cache = cache
        self.authenticator = authenticator
        self.settings = settings
        self._principal: SessionPrincipal | None = None

    @property
    def key(self) -> str:
        return self.settings.SESSION_KEY

    def current(self) -> SessionPrincipal | None:
        return self._principal

    @property
    def is_authenticated(self) -> bool:
        return self._principal is not None

    def restore(self) -> SessionPrincipal | None:
        """Re-enter Authenticated from the cache, or clear a malformed cached value."""
        stored = self.cache.get(self.key)
        if stored is None:
            self._principal = None
            return None
        principal = decode_principal(stored, self.settings)
        if principal is None:
            logger.warning("Discarding malformed cached session")
            self.logout()
            return None
        self._principal = principal
        return principal

    def login(self, email: str, password: str) -> AuthResult:
        """Authenticate and, on success, persist the principal. Never raises for store failures."""
        try:
            result = self.authenticator.authenticate(email, password)
        except StoreUnavailableError:
            logger.error("Login failed: credential store unavailable", extra={"login_outcome": "error"})
            return AuthResult.declined(DeclineReason.UNAVAILABLE)
        if result.success and result.principal is not None:
            self.cache.set(self.key, encode_principal(result.principal, self.settings))
            self._principal = result.principal
        return result

    def logout(self) -> None:
        self.cache.delete(self.key)
        self._principal = None
