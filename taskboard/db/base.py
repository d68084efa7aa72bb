"""
SQLAlchemy declarative base.

All models inherit from this Base class so SQLAlchemy can track
their tables in a single metadata collection.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass
