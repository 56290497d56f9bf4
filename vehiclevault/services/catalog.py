"""Brands and vehicle models, with reference checks before writes and deletes."""

import logging
from collections.abc import Callable
from typing import TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from vehiclevault.core.errors import (
    NotFoundError,
    ReferenceInUseError,
    ReferenceNotFoundError,
    StoreUnavailableError,
    ValidationError,
)
from vehiclevault.models import Brand, Vehicle, VehicleModel
from vehiclevault.schemas.catalog import (
    BrandCreate,
    BrandOut,
    BrandUpdate,
    ModelCreate,
    ModelOut,
    ModelUpdate,
)

logger = logging.getLogger(__name__)

UNKNOWN_BRAND = "Unknown brand"

T = TypeVar("T")


def run_store(db: Session, entity: str, operation: str, fn: Callable[[], T]) -> T:
    """Run a store call; SQLAlchemy failures are rolled back, logged and raised as StoreUnavailableError."""
    try:
        return fn()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(
            "Store operation failed",
            extra={"entity": entity, "operation": operation, "error_type": type(e).__name__},
        )
        raise StoreUnavailableError() from e


def _clean_name(value: str | None, what: str) -> str:
    name = (value or "").strip()
    if not name:
        raise ValidationError(f"{what} name cannot be empty.", field="name")
    return name


def _commit(db: Session, entity: str, operation: str, obj: object | None = None) -> None:
    def _do() -> None:
        db.commit()
        if obj is not None:
            db.refresh(obj)

    run_store(db, entity, operation, _do)


# --- Brands -----------------------------------------------------------------


def list_brands(db: Session) -> list[BrandOut]:
    brands = run_store(db, "brand", "list", lambda: db.query(Brand).order_by(Brand.name).all())
    return [BrandOut.model_validate(b) for b in brands]


def get_brand(db: Session, brand_id: str) -> Brand:
    brand = run_store(db, "brand", "get", lambda: db.get(Brand, brand_id))
    if brand is None:
        raise NotFoundError("Brand not found.")
    return brand


def add_brand(db: Session, data: BrandCreate) -> BrandOut:
    brand = Brand(name=_clean_name(data.name, "Brand"))
    db.add(brand)
    _commit(db, "brand", "insert", brand)
    logger.info("Brand created", extra={"entity": "brand", "brand_id": brand.id})
    return BrandOut.model_validate(brand)


def update_brand(db: Session, brand_id: str, data: BrandUpdate) -> BrandOut:
    name = _clean_name(data.name, "Brand")
    brand = get_brand(db, brand_id)
    brand.name = name
    _commit(db, "brand", "update", brand)
    return BrandOut.model_validate(brand)


def models_exist_for_brand(db: Session, brand_id: str) -> bool:
    return run_store(
        db,
        "model",
        "exists_for_brand",
        lambda: db.query(VehicleModel.id).filter(VehicleModel.brand_id == brand_id).first() is not None,
    )


def delete_brand(db: Session, brand_id: str) -> None:
    """Delete a brand; refused while any model still references it."""
    brand = get_brand(db, brand_id)
    if models_exist_for_brand(db, brand_id):
        raise ReferenceInUseError(
            "Cannot delete the brand because it is associated with one or more models."
        )
    db.delete(brand)
    _commit(db, "brand", "delete")
    logger.info("Brand deleted", extra={"entity": "brand", "brand_id": brand_id})


# --- Models -----------------------------------------------------------------


def _require_brand_ref(db: Session, brand_id: str | None) -> Brand:
    if not brand_id or not brand_id.strip():
        raise ValidationError("A brand must be selected.", field="brand_id")
    brand = run_store(db, "brand", "get", lambda: db.get(Brand, brand_id))
    if brand is None:
        raise ReferenceNotFoundError("Selected brand does not exist.", field="brand_id")
    return brand


def _model_out(model: VehicleModel, brand_name: str | None) -> ModelOut:
    return ModelOut(
        id=model.id,
        name=model.name,
        brand_id=model.brand_id,
        brand_name=brand_name or UNKNOWN_BRAND,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def list_models(db: Session) -> list[ModelOut]:
    """Models ordered by name with brand names resolved; missing brands show as unknown."""

    def _query() -> list[tuple[VehicleModel, str | None]]:
        return (
            db.query(VehicleModel, Brand.name)
            .outerjoin(Brand, Brand.id == VehicleModel.brand_id)
            .order_by(VehicleModel.name)
            .all()
        )

    rows = run_store(db, "model", "list", _query)
    return [_model_out(model, brand_name) for model, brand_name in rows]


def get_model(db: Session, model_id: str) -> VehicleModel:
    model = run_store(db, "model", "get", lambda: db.get(VehicleModel, model_id))
    if model is None:
        raise NotFoundError("Model not found.")
    return model


def add_model(db: Session, data: ModelCreate) -> ModelOut:
    name = _clean_name(data.name, "Model")
    brand = _require_brand_ref(db, data.brand_id)
    model = VehicleModel(name=name, brand_id=brand.id)
    db.add(model)
    _commit(db, "model", "insert", model)
    logger.info("Model created", extra={"entity": "model", "model_id": model.id})
    return _model_out(model, brand.name)


def update_model(db: Session, model_id: str, data: ModelUpdate) -> ModelOut:
    provided = data.model_dump(exclude_unset=True)
    model = get_model(db, model_id)
    if "name" in provided:
        model.name = _clean_name(data.name, "Model")
    if "brand_id" in provided:
        model.brand_id = _require_brand_ref(db, data.brand_id).id
    _commit(db, "model", "update", model)
    brand = run_store(db, "brand", "get", lambda: db.get(Brand, model.brand_id))
    return _model_out(model, brand.name if brand else None)


def vehicles_exist_for_model(db: Session, model_id: str) -> bool:
    return run_store(
        db,
        "vehicle",
        "exists_for_model",
        lambda: db.query(Vehicle.id).filter(Vehicle.model_id == model_id).first() is not None,
    )


def delete_model(db: Session, model_id: str) -> None:
    """Delete a model; refused while any vehicle still references it."""
    model = get_model(db, model_id)
    if vehicles_exist_for_model(db, model_id):
        raise ReferenceInUseError(
            "Cannot delete the model because one or more vehicles use it."
        )
    db.delete(model)
    _commit(db, "model", "delete")
    logger.info("Model deleted", extra={"entity": "model", "model_id": model_id})
