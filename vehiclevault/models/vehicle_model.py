"""ORM model for vehicle models; each one belongs to a brand."""

from sqlalchemy import Column, DateTime, String, func

from vehiclevault.models.base import Base, new_id


class VehicleModel(Base):
    """
    A model line under a brand (e.g. brand 'Toyota', model 'Corolla').

    brand_id is a plain reference, not a foreign key: integrity is checked by
    the catalog service before writes and deletes.
    """

    __tablename__ = "models"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False, index=True)
    brand_id = Column(String(32), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
