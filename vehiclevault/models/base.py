"""SQLAlchemy declarative Base and shared model configuration."""

import uuid

from sqlalchemy.orm import DeclarativeBase


def new_id() -> str:
    """Opaque record id, assigned on insert."""
    return uuid.uuid4().hex


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    pass
