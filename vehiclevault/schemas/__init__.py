"""Pydantic request/response schemas."""

from vehiclevault.schemas.auth import (
    AuthResult,
    DeclineReason,
    LoginRequest,
    LoginResponse,
    Profile,
    SessionPrincipal,
    UserStatus,
)
from vehiclevault.schemas.catalog import (
    BrandCreate,
    BrandOut,
    BrandUpdate,
    ModelCreate,
    ModelOut,
    ModelUpdate,
)
from vehiclevault.schemas.health import HealthResponse
from vehiclevault.schemas.users import UserCreate, UserOut, UserUpdate
from vehiclevault.schemas.vehicles import VehicleCreate, VehicleOut, VehicleUpdate

__all__ = [
    "AuthResult",
    "BrandCreate",
    "BrandOut",
    "BrandUpdate",
    "DeclineReason",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "ModelCreate",
    "ModelOut",
    "ModelUpdate",
    "Profile",
    "SessionPrincipal",
    "UserCreate",
    "UserOut",
    "UserStatus",
    "UserUpdate",
    "VehicleCreate",
    "VehicleOut",
    "VehicleUpdate",
]
