"""ORM model for staff accounts (credential store)."""

from sqlalchemy import Boolean, Column, DateTime, String, func

from vehiclevault.models.base import Base, new_id


class User(Base):
    """
    Staff account used for login and profile-based access control.

    profile: 'admin' or 'technician'; status: 'active' or 'inactive'.
    password_digest holds a self-describing digest (see core.security) and is
    never copied into a response schema.
    """

    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=new_id)
    full_name = Column(String(50), nullable=False, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_digest = Column(String(255), nullable=False)
    company = Column(String(50), nullable=True)
    profile = Column(String(32), nullable=False, default="technician")
    phone = Column(String(20), nullable=True)
    status = Column(String(32), nullable=False, default="active")
    is_protected = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
