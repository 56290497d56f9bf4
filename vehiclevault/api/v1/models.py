"""Vehicle model endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from vehiclevault.api.v1.auth import require_action
from vehiclevault.core.authorization import Action
from vehiclevault.core.database import get_db
from vehiclevault.schemas.auth import SessionPrincipal
from vehiclevault.schemas.catalog import ModelCreate, ModelOut, ModelsListResponse, ModelUpdate
from vehiclevault.services import catalog

router = APIRouter()

CatalogUser = Annotated[SessionPrincipal, Depends(require_action(Action.MANAGE_CATALOG))]


@router.get("", response_model=ModelsListResponse)
def list_models(_user: CatalogUser, db: Annotated[Session, Depends(get_db)]) -> ModelsListResponse:
    """List models ordered by name, each with its brand name."""
    return ModelsListResponse(models=catalog.list_models(db))


@router.post("", response_model=ModelOut, status_code=status.HTTP_201_CREATED)
def create_model(
    body: ModelCreate, _user: CatalogUser, db: Annotated[Session, Depends(get_db)]
) -> ModelOut:
    return catalog.add_model(db, body)


@router.patch("/{model_id}", response_model=ModelOut)
def update_model(
    model_id: str, body: ModelUpdate, _user: CatalogUser, db: Annotated[Session, Depends(get_db)]
) -> ModelOut:
    return catalog.update_model(db, model_id, body)


@router.delete("/{model_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_model(model_id: str, _user: CatalogUser, db: Annotated[Session, Depends(get_db)]) -> None:
    """Delete a model. 409 while vehicles still reference it."""
    catalog.delete_model(db, model_id)
