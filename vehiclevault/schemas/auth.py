"""Auth types: profiles, the session principal, login request and result."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class Profile(StrEnum):
    """Role governing authorization decisions. Closed set; see core.authorization."""

    ADMIN = "admin"
    TECHNICIAN = "technician"


class UserStatus(StrEnum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class DeclineReason(StrEnum):
    INVALID_CREDENTIALS = "invalid_credentials"
    ACCOUNT_INACTIVE = "account_inactive"
    UNAVAILABLE = "unavailable"


DECLINE_MESSAGES: dict[DeclineReason, str] = {
    DeclineReason.INVALID_CREDENTIALS: "Invalid email or password.",
    DeclineReason.ACCOUNT_INACTIVE: "This user account is inactive.",
    DeclineReason.UNAVAILABLE: "Could not sign in right now. Please try again.",
}


class SessionPrincipal(BaseModel):
    """Non-secret subset of a user kept by the session holder after login."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    full_name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    profile: Profile


class LoginRequest(BaseModel):
    """Credentials for login. Length rules are enforced by the authenticator, not here."""

    email: str = Field(..., min_length=1, max_length=255, description="Account email")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class AuthResult(BaseModel):
    """Tagged authentication outcome: a principal on success, a reason otherwise."""

    success: bool
    principal: SessionPrincipal | None = None
    reason: DeclineReason | None = None
    message: str | None = None

    @classmethod
    def ok(cls, principal: SessionPrincipal) -> "AuthResult":
        return cls(success=True, principal=principal)

    @classmethod
    def declined(cls, reason: DeclineReason) -> "AuthResult":
        return cls(success=False, reason=reason, message=DECLINE_MESSAGES[reason])


class LoginResponse(BaseModel):
    """Body returned after a successful login; the session itself travels in a cookie."""

    user: SessionPrincipal
    message: str
