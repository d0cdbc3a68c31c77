"""SQLAlchemy Declarative Base: shared base class for all ORM models.

Invariants:
    - All models inherit from Base
    - Base.metadata is the single source of truth for table definitions

Design Decisions:
    - Separate file for Base: models and infrastructure import it without cycles
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all Users API ORM models."""
    pass
