"""Vehicles: CRUD with brand/model names derived from the referenced model."""

import logging
from typing import Any

from sqlalchemy.orm import Session

from vehiclevault.core.errors import NotFoundError, ReferenceNotFoundError, ValidationError
from vehiclevault.models import Brand, Vehicle, VehicleModel
from vehiclevault.schemas.vehicles import (
    YEAR_MAX,
    YEAR_MIN,
    VehicleCreate,
    VehicleOut,
    VehicleUpdate,
)
from vehiclevault.services.catalog import UNKNOWN_BRAND, run_store

logger = logging.getLogger(__name__)

CLEARABLE_FIELDS = ("cut", "location", "observation")


def _check_year(year: int) -> int:
    if not (YEAR_MIN <= year <= YEAR_MAX):
        raise ValidationError("Invalid year provided.", field="year")
    return year


def _check_colors(colors: str | None) -> str:
    if colors is None or not colors.strip():
        raise ValidationError("Colors cannot be empty.", field="colors")
    return colors.strip()


def _resolve_names(db: Session, model_id: str | None) -> dict[str, str]:
    """Look up the model and its brand; returns the denormalized name fields."""
    if not model_id or not model_id.strip():
        raise ValidationError("Model id cannot be empty.", field="model_id")
    model = run_store(db, "model", "get", lambda: db.get(VehicleModel, model_id))
    if model is None:
        raise ReferenceNotFoundError(
            f"The selected model (id: {model_id}) does not exist.", field="model_id"
        )
    brand = run_store(db, "brand", "get", lambda: db.get(Brand, model.brand_id))
    if brand is None:
        logger.warning(
            "Brand missing for model",
            extra={"entity": "vehicle", "model_id": model_id, "brand_id": model.brand_id},
        )
    return {
        "model_id": model.id,
        "model": model.name,
        "brand": brand.name if brand else UNKNOWN_BRAND,
    }


def _commit(db: Session, operation: str, obj: Vehicle | None = None) -> None:
    def _do() -> None:
        db.commit()
        if obj is not None:
            db.refresh(obj)

    run_store(db, "vehicle", operation, _do)


def list_vehicles(db: Session) -> list[VehicleOut]:
    vehicles = run_store(
        db,
        "vehicle",
        "list",
        lambda: db.query(Vehicle).order_by(Vehicle.created_at.desc(), Vehicle.id).all(),
    )
    return [VehicleOut.model_validate(v) for v in vehicles]


def get_vehicle(db: Session, vehicle_id: str) -> Vehicle:
    vehicle = run_store(db, "vehicle", "get", lambda: db.get(Vehicle, vehicle_id))
    if vehicle is None:
        raise NotFoundError("Vehicle not found.")
    return vehicle


def add_vehicle(db: Session, data: VehicleCreate) -> VehicleOut:
    fields: dict[str, Any] = _resolve_names(db, data.model_id)
    vehicle = Vehicle(
        **fields,
        year=_check_year(data.year),
        colors=_check_colors(data.colors),
        cut=data.cut,
        location=data.location,
        observation=data.observation,
        image_urls=[u for u in data.image_urls if u],
        user_email=(data.user_email or "").strip().lower() or None,
    )
    db.add(vehicle)
    _commit(db, "insert", vehicle)
    logger.info("Vehicle created", extra={"entity": "vehicle", "vehicle_id": vehicle.id})
    return VehicleOut.model_validate(vehicle)


def update_vehicle(db: Session, vehicle_id: str, data: VehicleUpdate) -> VehicleOut:
    """
    Apply only the fields present in the request. Changing model_id re-derives
    brand and model names; null clears cut, location and observation.
    """
    provided = data.model_dump(exclude_unset=True)
    vehicle = get_vehicle(db, vehicle_id)
    fields: dict[str, Any] = {}

    if "year" in provided:
        if data.year is None:
            raise ValidationError("Invalid year provided.", field="year")
        fields["year"] = _check_year(data.year)
    if "colors" in provided:
        fields["colors"] = _check_colors(data.colors)
    for name in CLEARABLE_FIELDS:
        if name in provided:
            fields[name] = provided[name]
    if "model_id" in provided:
        fields.update(_resolve_names(db, data.model_id))

    if not fields:
        logger.info("No fields to update", extra={"entity": "vehicle", "vehicle_id": vehicle_id})
        return VehicleOut.model_validate(vehicle)

    for key, value in fields.items():
        setattr(vehicle, key, value)
    _commit(db, "update", vehicle)
    return VehicleOut.model_validate(vehicle)


def delete_vehicle(db: Session, vehicle_id: str) -> None:
    vehicle = get_vehicle(db, vehicle_id)
    db.delete(vehicle)
    _commit(db, "delete")
    logger.info("Vehicle deleted", extra={"entity": "vehicle", "vehicle_id": vehicle_id})
