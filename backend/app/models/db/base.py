"""ORM common base

DeclarativeBase + shared mixins.
JSON columns become JSONB on PostgreSQL and plain JSON on SQLite (tests, local).
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JSONBOrJSON(TypeDecorator):
    """JSONB on PostgreSQL, JSON elsewhere"""

    impl = JSON
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            from sqlalchemy.dialects.postgresql import JSONB
            return dialect.type_descriptor(JSONB())
        return dialect.type_descriptor(JSON())


class Base(DeclarativeBase):
    """Base class of every ORM model"""

    type_annotation_map = {
        dict: JSONBOrJSON,
        list: JSONBOrJSON,
        datetime: DateTime(timezone=True),
    }


class TimestampMixin:
    """created_at / updated_at maintained by the ORM"""

    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow, nullable=False)


class PrimaryKeyMixin:
    """UUID4 string primary key"""

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
