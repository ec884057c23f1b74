"""ORM model package

Re-exports every ORM class so Alembic and init_db see the full metadata
via `from app.models.db import Base`.
"""

from app.models.db.base import Base
from app.models.db.account import TeamMemberORM, TeamORM, UserORM
from app.models.db.case import CaseORM
from app.models.db.evidence import EvidenceORM
from app.models.db.template import CaseTemplateORM

__all__ = [
    "Base",
    "UserORM",
    "TeamORM",
    "TeamMemberORM",
    "CaseORM",
    "EvidenceORM",
    "CaseTemplateORM",
]
