"""ORM model for vehicle brands."""

from sqlalchemy import Column, DateTime, String, func

from vehiclevault.models.base import Base, new_id


class Brand(Base):
    __tablename__ = "brands"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
