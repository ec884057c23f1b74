"""Case tracking, account, template and evidence DTOs

Pydantic value objects shared by the service and API layers.
ORM models live in app.models.db; conversion in app.models.db.converters.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.models.evaluation import EvaluationResult
from app.models.property import PropertyInput


class CaseStatus(str, Enum):
    """Case pipeline (any transition allowed)"""

    NEW = "new"
    WAITING = "waiting"  # waiting for documents / owner
    SCHEDULED = "scheduled"  # technician visit booked
    READY = "ready"  # ready to file
    SUBMITTED = "submitted"  # filed with the administration
    DONE = "done"


class UserRole(str, Enum):
    OWNER = "owner"
    ADMIN = "admin"
    MEMBER = "member"
    VIEWER = "viewer"


class TeamPlan(str, Enum):
    FREE = "free"
    SOLO = "solo"
    TEAM = "team"


class EvidenceType(str, Enum):
    PHOTO = "photo"
    DOCUMENT = "document"


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Case(CamelModel):
    """Evaluated property with its tracking state"""

    id: str
    share_id: str
    property_input: PropertyInput
    evaluation_result: EvaluationResult
    evaluation_history: list[EvaluationResult] = Field(default_factory=list)
    created_at: datetime

    user_id: str | None = None  # owner
    team_id: str | None = None
    status: CaseStatus = CaseStatus.NEW
    status_updated_at: datetime
    status_updated_by: str | None = None
    assigned_to: str | None = None
    scheduled_date: datetime | None = None
    submitted_date: datetime | None = None
    completed_date: datetime | None = None
    notes: str | None = None
    tags: list[str] = Field(default_factory=list)


class User(CamelModel):
    """Account (password hash and token never leave the service layer)"""

    id: str
    email: str
    name: str
    image: str | None = None
    role: UserRole = UserRole.MEMBER
    team_id: str | None = None
    team_role: UserRole | None = None
    created_at: datetime
    updated_at: datetime


class Team(CamelModel):
    id: str
    name: str
    owner_id: str
    plan: TeamPlan = TeamPlan.FREE
    created_at: datetime
    updated_at: datetime


class TeamMember(CamelModel):
    id: str
    team_id: str
    user_id: str
    role: UserRole
    joined_at: datetime


class CaseTemplate(CamelModel):
    """Reusable PropertyInput preset"""

    id: str
    name: str
    description: str | None = None
    property_input: PropertyInput
    created_by: str
    team_id: str | None = None  # None = personal
    is_public: bool = False
    created_at: datetime
    updated_at: datetime


class Evidence(CamelModel):
    """File attached to a case"""

    id: str
    case_id: str
    type: EvidenceType
    filename: str  # stored name inside EVIDENCE_DIR
    original_filename: str
    mime_type: str
    size: int  # bytes
    url: str
    uploaded_by: str
    uploaded_at: datetime
    description: str | None = None
