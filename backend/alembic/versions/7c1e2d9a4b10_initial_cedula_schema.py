"""initial_cedula_schema

Accounts (teams, users, team_members), evaluated cases, case templates and
case evidence.

Revision ID: 7c1e2d9a4b10
Revises:
Create Date: 2026-10-19 10:12:31.402117
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "7c1e2d9a4b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# JSONB on PostgreSQL, JSON elsewhere (same as JSONBOrJSON)
JSON_TYPE = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    """Create the initial schema"""

    # --- teams ---
    op.create_table(
        "teams",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("owner_id", sa.String(36), nullable=False),
        sa.Column("plan", sa.String(10), nullable=False, server_default="free"),
        *_timestamps(),
    )

    # --- users ---
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("email", sa.String(255), unique=True, nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("image", sa.String(500), nullable=True),
        sa.Column("password_hash", sa.String(255), nullable=True),
        sa.Column("api_token_hash", sa.String(64), unique=True, nullable=True),
        sa.Column("role", sa.String(20), nullable=False, server_default="member"),
        sa.Column("team_id", sa.String(36), sa.ForeignKey("teams.id", ondelete="SET NULL"), nullable=True),
        sa.Column("team_role", sa.String(20), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_users_team_id", "users", ["team_id"])

    # --- team_members ---
    op.create_table(
        "team_members",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("team_id", sa.String(36), sa.ForeignKey("teams.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default="member"),
        sa.Column("joined_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("team_id", "user_id", name="uq_team_members_team_user"),
    )

    # --- cases ---
    op.create_table(
        "cases",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("share_id", sa.String(32), unique=True, nullable=False),
        sa.Column("property_input", JSON_TYPE, nullable=False),
        sa.Column("evaluation_result", JSON_TYPE, nullable=False),
        sa.Column("evaluation_history", JSON_TYPE, nullable=False),
        sa.Column("municipality", sa.String(100), nullable=False, server_default=""),
        sa.Column("overall_status", sa.String(10), nullable=False),
        sa.Column("confidence", sa.Integer, nullable=False, server_default="0"),
        sa.Column("ruleset_version", sa.String(50), nullable=False),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("team_id", sa.String(36), sa.ForeignKey("teams.id", ondelete="SET NULL"), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="new"),
        sa.Column("status_updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("status_updated_by", sa.String(36), nullable=True),
        sa.Column("assigned_to", sa.String(36), nullable=True),
        sa.Column("scheduled_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("submitted_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completed_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("tags", JSON_TYPE, nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_cases_user_id", "cases", ["user_id"])
    op.create_index("ix_cases_team_id", "cases", ["team_id"])
    op.create_index("ix_cases_status", "cases", ["status"])
    op.create_index("ix_cases_overall_status", "cases", ["overall_status"])
    op.create_index("ix_cases_created_at", "cases", ["created_at"])

    # --- case_templates ---
    op.create_table(
        "case_templates",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column("property_input", JSON_TYPE, nullable=False),
        sa.Column("created_by", sa.String(36), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("team_id", sa.String(36), sa.ForeignKey("teams.id", ondelete="SET NULL"), nullable=True),
        sa.Column("is_public", sa.Boolean, nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index("ix_case_templates_created_by", "case_templates", ["created_by"])
    op.create_index("ix_case_templates_team_id", "case_templates", ["team_id"])
    op.create_index("ix_case_templates_is_public", "case_templates", ["is_public"])

    # --- evidence ---
    op.create_table(
        "evidence",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("case_id", sa.String(36), sa.ForeignKey("cases.id", ondelete="CASCADE"), nullable=False),
        sa.Column("type", sa.String(10), nullable=False),
        sa.Column("filename", sa.String(200), unique=True, nullable=False),
        sa.Column("original_filename", sa.String(255), nullable=False),
        sa.Column("mime_type", sa.String(100), nullable=False),
        sa.Column("size", sa.BigInteger, nullable=False),
        sa.Column("url", sa.String(500), nullable=False),
        sa.Column("uploaded_by", sa.String(36), nullable=False),
        sa.Column("uploaded_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("description", sa.String(500), nullable=True),
    )
    op.create_index("ix_evidence_case_id", "evidence", ["case_id"])


def downgrade() -> None:
    """Drop the initial schema"""
    op.drop_index("ix_evidence_case_id", table_name="evidence")
    op.drop_table("evidence")

    op.drop_index("ix_case_templates_is_public", table_name="case_templates")
    op.drop_index("ix_case_templates_team_id", table_name="case_templates")
    op.drop_index("ix_case_templates_created_by", table_name="case_templates")
    op.drop_table("case_templates")

    op.drop_index("ix_cases_created_at", table_name="cases")
    op.drop_index("ix_cases_overall_status", table_name="cases")
    op.drop_index("ix_cases_status", table_name="cases")
    op.drop_index("ix_cases_team_id", table_name="cases")
    op.drop_index("ix_cases_user_id", table_name="cases")
    op.drop_table("cases")

    op.drop_table("team_members")

    op.drop_index("ix_users_team_id", table_name="users")
    op.drop_table("users")

    op.drop_table("teams")
