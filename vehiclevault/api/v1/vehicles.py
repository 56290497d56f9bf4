"""Vehicle endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from vehiclevault.api.v1.auth import require_action
from vehiclevault.core.authorization import Action
from vehiclevault.core.database import get_db
from vehiclevault.schemas.auth import SessionPrincipal
from vehiclevault.schemas.vehicles import VehicleCreate, VehicleOut, VehiclesListResponse, VehicleUpdate
from vehiclevault.services import vehicles as vehicles_service

router = APIRouter()

VehicleUser = Annotated[SessionPrincipal, Depends(require_action(Action.MANAGE_VEHICLES))]


@router.get("", response_model=VehiclesListResponse)
def list_vehicles(_user: VehicleUser, db: Annotated[Session, Depends(get_db)]) -> VehiclesListResponse:
    return VehiclesListResponse(vehicles=vehicles_service.list_vehicles(db))


@router.post("", response_model=VehicleOut, status_code=status.HTTP_201_CREATED)
def create_vehicle(
    body: VehicleCreate, _user: VehicleUser, db: Annotated[Session, Depends(get_db)]
) -> VehicleOut:
    """Create a vehicle; brand and model names are taken from model_id."""
    return vehicles_service.add_vehicle(db, body)


@router.get("/{vehicle_id}", response_model=VehicleOut)
def get_vehicle(vehicle_id: str, _user: VehicleUser, db: Annotated[Session, Depends(get_db)]) -> VehicleOut:
    return VehicleOut.model_validate(vehicles_service.get_vehicle(db, vehicle_id))


@router.patch("/{vehicle_id}", response_model=VehicleOut)
def update_vehicle(
    vehicle_id: str, body: VehicleUpdate, _user: VehicleUser, db: Annotated[Session, Depends(get_db)]
) -> VehicleOut:
    """Partial update; send null for cut, location or observation to clear it."""
    return vehicles_service.update_vehicle(db, vehicle_id, body)


@router.delete("/{vehicle_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_vehicle(vehicle_id: str, _user: VehicleUser, db: Annotated[Session, Depends(get_db)]) -> None:
    vehicles_service.delete_vehicle(db, vehicle_id)
