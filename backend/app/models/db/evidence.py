"""Evidence ORM model

Metadata of a file attached to a case. The bytes live in EVIDENCE_DIR.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.db.base import Base, PrimaryKeyMixin, utcnow

if TYPE_CHECKING:
    from app.models.db.case import CaseORM


class EvidenceORM(PrimaryKeyMixin, Base):
    """Case attachment"""

    __tablename__ = "evidence"

    case_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("cases.id", ondelete="CASCADE"), nullable=False
    )
    type: Mapped[str] = mapped_column(String(10), nullable=False)  # photo / document
    filename: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)
    original_filename: Mapped[str] = mapped_column(String(255), nullable=False)
    mime_type: Mapped[str] = mapped_column(String(100), nullable=False)
    size: Mapped[int] = mapped_column(BigInteger, nullable=False)
    url: Mapped[str] = mapped_column(String(500), nullable=False)
    uploaded_by: Mapped[str] = mapped_column(String(36), nullable=False)
    uploaded_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)

    case: Mapped[CaseORM] = relationship("CaseORM", back_populates="evidence")

    __table_args__ = (Index("ix_evidence_case_id", "case_id"),)

    def __repr__(self) -> str:
        return f"<EvidenceORM {self.filename} case={self.case_id}>"
