"""Account ORM models: users, teams, team membership"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.db.base import Base, PrimaryKeyMixin, TimestampMixin, utcnow


class UserORM(PrimaryKeyMixin, TimestampMixin, Base):
    """User account"""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    image: Mapped[str | None] = mapped_column(String(500), nullable=True)
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)  # pbkdf2_sha256$...
    api_token_hash: Mapped[str | None] = mapped_column(String(64), unique=True, nullable=True)  # sha256 hex
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="member")
    team_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("teams.id", ondelete="SET NULL"), nullable=True
    )
    team_role: Mapped[str | None] = mapped_column(String(20), nullable=True)

    __table_args__ = (Index("ix_users_team_id", "team_id"),)

    def __repr__(self) -> str:
        return f"<UserORM {self.email}>"


class TeamORM(PrimaryKeyMixin, TimestampMixin, Base):
    """Team (shared cases and templates)"""

    __tablename__ = "teams"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    owner_id: Mapped[str] = mapped_column(String(36), nullable=False)
    plan: Mapped[str] = mapped_column(String(10), nullable=False, default="free")

    members: Mapped[list[TeamMemberORM]] = relationship(
        "TeamMemberORM", back_populates="team", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<TeamORM {self.name}>"


class TeamMemberORM(PrimaryKeyMixin, Base):
    """Team membership"""

    __tablename__ = "team_members"

    team_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("teams.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="member")
    joined_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)

    team: Mapped[TeamORM] = relationship("TeamORM", back_populates="members")

    __table_args__ = (
        UniqueConstraint("team_id", "user_id", name="uq_team_members_team_user"),
    )

    def __repr__(self) -> str:
        return f"<TeamMemberORM team={self.team_id} user={self.user_id} {self.role}>"
