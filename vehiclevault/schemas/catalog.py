"""Request/response schemas for brands and vehicle models."""

from datetime import datetime

from pydantic import BaseModel, Field


class BrandCreate(BaseModel):
    name: str = Field(..., max_length=255, description="Brand name")


class BrandUpdate(BaseModel):
    name: str = Field(..., max_length=255, description="New brand name")


class BrandOut(BaseModel):
    id: str
    name: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class BrandsListResponse(BaseModel):
    brands: list[BrandOut]


class ModelCreate(BaseModel):
    name: str = Field(..., max_length=255, description="Model name")
    brand_id: str = Field(..., description="Id of an existing brand")


class ModelUpdate(BaseModel):
    name: str | None = Field(default=None, max_length=255)
    brand_id: str | None = None


class ModelOut(BaseModel):
    """Vehicle model with its brand name resolved for display."""

    id: str
    name: str
    brand_id: str
    brand_name: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ModelsListResponse(BaseModel):
    models: list[ModelOut]
