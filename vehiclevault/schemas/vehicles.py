"""Request/response schemas for vehicles."""

from datetime import datetime

from pydantic import BaseModel, Field

YEAR_MIN = 1887
YEAR_MAX = 2099


class VehicleCreate(BaseModel):
    """New vehicle. Brand and model names are derived from model_id."""

    model_id: str
    year: int
    colors: str
    cut: str | None = None
    location: str | None = None
    observation: str | None = None
    image_urls: list[str] = Field(default_factory=list)
    user_email: str | None = None


class VehicleUpdate(BaseModel):
    """
    Partial update. Only fields present in the request body are applied;
    sending null for cut, location or observation clears it.
    """

    model_id: str | None = None
    year: int | None = None
    colors: str | None = None
    cut: str | None = None
    location: str | None = None
    observation: str | None = None


class VehicleOut(BaseModel):
    id: str
    model_id: str
    brand: str
    model: str
    year: int
    colors: str
    cut: str | None = None
    location: str | None = None
    observation: str | None = None
    image_urls: list[str] = Field(default_factory=list)
    user_email: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class VehiclesListResponse(BaseModel):
    vehicles: list[VehicleOut]
