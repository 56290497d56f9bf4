"""FastAPI application entrypoint. No business logic; only wiring, middleware and error mapping."""

from dotenv import load_dotenv

load_dotenv()

import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from vehiclevault import __version__
from vehiclevault.api.v1 import router as v1_router
from vehiclevault.core.config import get_settings, settings
from vehiclevault.core.errors import (
    AccessDeniedError,
    AuthorizationRefusedError,
    DuplicateEmailError,
    NotAuthenticatedError,
    NotFoundError,
    ReferenceInUseError,
    StoreUnavailableError,
    ValidationError,
    VehicleVaultError,
)
from vehiclevault.core.logging_config import configure_logging

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Most specific classes first; lookup walks this in order.
ERROR_STATUS: list[tuple[type[VehicleVaultError], int]] = [
    (DuplicateEmailError, status.HTTP_409_CONFLICT),
    (ValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ReferenceInUseError, status.HTTP_409_CONFLICT),
    (NotAuthenticatedError, status.HTTP_401_UNAUTHORIZED),
    (AccessDeniedError, status.HTTP_403_FORBIDDEN),
    (AuthorizationRefusedError, status.HTTP_403_FORBIDDEN),
    (StoreUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def status_for(exc: VehicleVaultError) -> int:
    for cls, code in ERROR_STATUS:
        if isinstance(exc, cls):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


app = FastAPI(
    title="VehicleVault API",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(VehicleVaultError)
async def handle_app_error(request: Request, exc: VehicleVaultError) -> JSONResponse:
    """Map application errors to a JSON body with a stable code."""
    body: dict[str, str] = {"detail": exc.message, "code": exc.code}
    field = getattr(exc, "field", None)
    if field:
        body["field"] = field
    response = JSONResponse(status_code=status_for(exc), content=body)
    if isinstance(exc, NotAuthenticatedError):
        # Any stale or malformed session cookie goes with the 401.
        response.delete_cookie(get_settings().SESSION_KEY)
    if isinstance(exc, (AccessDeniedError, AuthorizationRefusedError)):
        logger.info(
            "Request refused",
            extra={"path": request.url.path, "code": exc.code},
        )
    return response


app.include_router(v1_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "VehicleVault API"}
