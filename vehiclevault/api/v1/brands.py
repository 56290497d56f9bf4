"""Brand endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from vehiclevault.api.v1.auth import require_action
from vehiclevault.core.authorization import Action
from vehiclevault.core.database import get_db
from vehiclevault.schemas.auth import SessionPrincipal
from vehiclevault.schemas.catalog import BrandCreate, BrandOut, BrandsListResponse, BrandUpdate
from vehiclevault.services import catalog

router = APIRouter()

CatalogUser = Annotated[SessionPrincipal, Depends(require_action(Action.MANAGE_CATALOG))]


@router.get("", response_model=BrandsListResponse)
def list_brands(_user: CatalogUser, db: Annotated[Session, Depends(get_db)]) -> BrandsListResponse:
    return BrandsListResponse(brands=catalog.list_brands(db))


@router.post("", response_model=BrandOut, status_code=status.HTTP_201_CREATED)
def create_brand(
    body: BrandCreate, _user: CatalogUser, db: Annotated[Session, Depends(get_db)]
) -> BrandOut:
    return catalog.add_brand(db, body)


@router.patch("/{brand_id}", response_model=BrandOut)
def update_brand(
    brand_id: str, body: BrandUpdate, _user: CatalogUser, db: Annotated[Session, Depends(get_db)]
) -> BrandOut:
    return catalog.update_brand(db, brand_id, body)


@router.delete("/{brand_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_brand(brand_id: str, _user: CatalogUser, db: Annotated[Session, Depends(get_db)]) -> None:
    """Delete a brand. 409 while models still reference it."""
    catalog.delete_brand(db, brand_id)
