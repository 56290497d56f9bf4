"""Health endpoint: reports store connectivity, no session required."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from vehiclevault import __version__
from vehiclevault.core.config import Settings, get_settings
from vehiclevault.core.database import check_db_connected, get_db
from vehiclevault.schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> HealthResponse:
    """Used by load balancers; a store outage reports 'degraded' rather than failing."""
    connected = check_db_connected(db)
    return HealthResponse(
        status="ok" if connected else "degraded",
        environment=settings.APP_ENV,
        database="connected" if connected else "disconnected",
        version=__version__,
    )
