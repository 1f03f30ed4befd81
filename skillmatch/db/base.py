"""Base class for all database models."""

from sqlalchemy import JSON, Column, DateTime, Integer, String, func
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import DeclarativeBase, declared_attr

# TEXT[] on PostgreSQL, JSON list elsewhere (SQLite in tests)
StringList = JSON().with_variant(ARRAY(String), "postgresql")


class Base(DeclarativeBase):
    """Base class for all models."""

    @declared_attr.directive
    def __tablename__(cls) -> str:
        """Generate table name automatically."""
        return cls.__name__.lower() + "s"

    # Common columns for all tables
    id = Column(Integer, primary_key=True, autoincrement=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)


class UpdatedAtMixin:
    """Adds ``updated_at`` to mutable tables; writers refresh it on every update."""

    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)
