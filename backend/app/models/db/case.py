"""Case ORM model

Normalized columns for filtering/sorting + JSON snapshots of the input and
the evaluation. The evaluation snapshot is stored verbatim, including its
rulesetVersion.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.db.base import Base, JSONBOrJSON, PrimaryKeyMixin, TimestampMixin, utcnow

if TYPE_CHECKING:
    from app.models.db.evidence import EvidenceORM


class CaseORM(PrimaryKeyMixin, TimestampMixin, Base):
    """Evaluated property case"""

    __tablename__ = "cases"

    share_id: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)

    # Snapshots
    property_input: Mapped[dict] = mapped_column(JSONBOrJSON, nullable=False)
    evaluation_result: Mapped[dict] = mapped_column(JSONBOrJSON, nullable=False)
    evaluation_history: Mapped[list] = mapped_column(JSONBOrJSON, nullable=False, default=list)

    # Denormalized from the snapshots (WHERE / ORDER BY)
    municipality: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    overall_status: Mapped[str] = mapped_column(String(10), nullable=False)
    confidence: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    ruleset_version: Mapped[str] = mapped_column(String(50), nullable=False)

    # Ownership
    user_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    team_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("teams.id", ondelete="SET NULL"), nullable=True
    )

    # Pipeline
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="new")
    status_updated_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    status_updated_by: Mapped[str | None] = mapped_column(String(36), nullable=True)
    assigned_to: Mapped[str | None] = mapped_column(String(36), nullable=True)
    scheduled_date: Mapped[datetime | None] = mapped_column(nullable=True)
    submitted_date: Mapped[datetime | None] = mapped_column(nullable=True)
    completed_date: Mapped[datetime | None] = mapped_column(nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    tags: Mapped[list] = mapped_column(JSONBOrJSON, nullable=False, default=list)

    evidence: Mapped[list[EvidenceORM]] = relationship(
        "EvidenceORM", back_populates="case", cascade="all, delete-orphan"
    )

    __table_args__ = (
        Index("ix_cases_user_id", "user_id"),
        Index("ix_cases_team_id", "team_id"),
        Index("ix_cases_status", "status"),
        Index("ix_cases_overall_status", "overall_status"),
        Index("ix_cases_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<CaseORM {self.id} {self.status}/{self.overall_status}>"
