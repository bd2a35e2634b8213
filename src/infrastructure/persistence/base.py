"""Declarative base for the credential tables.

BaseMutableModel gives every table a time-ordered UUID primary key plus
created_at/updated_at columns maintained by the database. Domain entities
never inherit from it; repositories map rows to entities explicitly.

Usage:
    class IntegrationCredential(BaseMutableModel):
        __tablename__ = "integration_credentials"
        provider_type: Mapped[str]

Note: PostgreSQL is the production store, but tests run on SQLite, so the
columns stick to SQLAlchemy's generic Uuid and DateTime types.
"""

from datetime import datetime
from uuid import UUID as PythonUUID

from sqlalchemy import DateTime, Uuid, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from uuid_extensions import uuid7


class BaseModel(DeclarativeBase):
    """Declarative root; holds the metadata alembic autogenerates from."""

    __abstract__ = True

    id: Mapped[PythonUUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid7,
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id})>"


class BaseMutableModel(BaseModel):
    """Base for rows that are updated in place (updated_at set on UPDATE)."""

    __abstract__ = True

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
