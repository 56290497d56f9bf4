"""ORM model for tracked vehicles."""

from sqlalchemy import JSON, Column, DateTime, Integer, String, Text, func

from vehiclevault.models.base import Base, new_id


class Vehicle(Base):
    """
    Vehicle record. brand and model names are denormalized copies taken from
    the referenced model when the vehicle is created or its model_id changes.
    """

    __tablename__ = "vehicles"

    id = Column(String(32), primary_key=True, default=new_id)
    model_id = Column(String(32), nullable=False, index=True)
    brand = Column(String(255), nullable=False, default="")
    model = Column(String(255), nullable=False, default="")
    year = Column(Integer, nullable=False)
    colors = Column(String(255), nullable=False)
    cut = Column(String(255), nullable=True)
    location = Column(String(255), nullable=True)
    observation = Column(Text, nullable=True)
    image_urls = Column(JSON, nullable=False, default=list)
    user_email = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
