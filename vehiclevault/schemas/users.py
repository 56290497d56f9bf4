"""Request/response schemas for user management (admin only)."""

from datetime import datetime

from pydantic import BaseModel, Field

from vehiclevault.schemas.auth import Profile, UserStatus


class UserCreate(BaseModel):
    """New staff account. Trimming and length rules are applied by the users service."""

    full_name: str = Field(..., description="Display name (max 50 chars)")
    email: str = Field(..., description="Login email, unique")
    password: str = Field(..., description="Plain password (min 6 chars); stored as a digest")
    company: str | None = None
    profile: Profile = Profile.TECHNICIAN
    phone: str | None = None
    status: UserStatus = UserStatus.ACTIVE


class UserUpdate(BaseModel):
    """Partial update. An empty password keeps the current one."""

    full_name: str | None = None
    email: str | None = None
    password: str | None = None
    company: str | None = None
    profile: Profile | None = None
    phone: str | None = None
    status: UserStatus | None = None


class UserOut(BaseModel):
    """User as returned to callers (no digest)."""

    id: str
    full_name: str
    email: str
    company: str | None = None
    profile: Profile
    phone: str | None = None
    status: UserStatus
    is_protected: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class UsersListResponse(BaseModel):
    """Response for GET /users (admin only)."""

    users: list[UserOut]
