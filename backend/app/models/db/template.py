"""CaseTemplate ORM model"""

from __future__ import annotations

from sqlalchemy import Boolean, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.db.base import Base, JSONBOrJSON, PrimaryKeyMixin, TimestampMixin


class CaseTemplateORM(PrimaryKeyMixin, TimestampMixin, Base):
    """Reusable property preset"""

    __tablename__ = "case_templates"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    property_input: Mapped[dict] = mapped_column(JSONBOrJSON, nullable=False)
    created_by: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    team_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("teams.id", ondelete="SET NULL"), nullable=True
    )
    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (
        Index("ix_case_templates_created_by", "created_by"),
        Index("ix_case_templates_team_id", "team_id"),
        Index("ix_case_templates_is_public", "is_public"),
    )

    def __repr__(self) -> str:
        return f"<CaseTemplateORM {self.name}>"
