"""API v1 routes."""

from fastapi import APIRouter

from vehiclevault.api.v1 import auth, brands, health, models, users, vehicles

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(brands.router, prefix="/brands", tags=["brands"])
router.include_router(models.router, prefix="/models", tags=["models"])
router.include_router(vehicles.router, prefix="/vehicles", tags=["vehicles"])
