"""SQLAlchemy ORM models."""

from vehiclevault.models.base import Base
from vehiclevault.models.brand import Brand
from vehiclevault.models.user import User
from vehiclevault.models.vehicle import Vehicle
from vehiclevault.models.vehicle_model import VehicleModel

__all__ = ["Base", "Brand", "User", "Vehicle", "VehicleModel"]
