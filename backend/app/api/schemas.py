"""API request/response schemas

Requests are validated here (shape, ranges, sanitization) before anything
reaches the services. Responses reuse the DTOs from app.models where they
already are the public shape; everything serializes camelCase.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.models.case import CaseStatus, TeamPlan, User, UserRole
from app.models.property import PropertyInput, PropertyType, UseCase
from app.services.sanitize import (
    MAX_TAGS,
    is_valid_email,
    is_valid_uuid,
    sanitize_string,
    sanitize_tags,
)


class _Request(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


# ── Property ──────────────────────────────────────────────────


class PropertyPayload(PropertyInput):
    """PropertyInput as accepted from clients (ranges + sanitized text)"""

    model_config = ConfigDict(extra="forbid")

    municipality: str = Field(min_length=2, max_length=100)
    region: str = Field(min_length=2, max_length=100)
    address: str | None = Field(default=None, max_length=200)

    property_type: PropertyType
    use_case: UseCase

    useful_area: float | None = Field(default=None, ge=1, le=10_000)
    total_area: float | None = Field(default=None, ge=1, le=100_000)
    ceiling_height: float | None = Field(default=None, ge=0.5, le=10)
    num_rooms: int | None = Field(default=None, ge=1, le=100)
    num_bedrooms: int | None = Field(default=None, ge=0, le=50)
    num_bathrooms: int | None = Field(default=None, ge=0, le=20)
    num_floors: int | None = Field(default=None, ge=1, le=50)
    year_built: int | None = Field(default=None, ge=1000)
    intended_occupancy: int | None = Field(default=None, ge=1, le=50)

    notes: str | None = Field(default=None, max_length=2000)

    @field_validator("municipality", "region", mode="before")
    @classmethod
    def _clean_name(cls, v):
        return sanitize_string(v, 100) if isinstance(v, str) else v

    @field_validator("address", mode="before")
    @classmethod
    def _clean_address(cls, v):
        return (sanitize_string(v, 200) or None) if isinstance(v, str) else v

    @field_validator("notes", mode="before")
    @classmethod
    def _clean_notes(cls, v):
        return (sanitize_string(v, 2000) or None) if isinstance(v, str) else v

    @field_validator("year_built")
    @classmethod
    def _not_in_future(cls, v: int | None) -> int | None:
        if v is not None and v > datetime.now(timezone.utc).year:
            raise ValueError("yearBuilt cannot be in the future")
        return v


# ── Ruleset ───────────────────────────────────────────────────


class RuleInfo(BaseModel):
    """Catalog entry (static metadata)"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    description: str
    evidence_needed: list[str]


class RulesetResponse(BaseModel):
    version: str
    rules: list[RuleInfo]


# ── Cases ─────────────────────────────────────────────────────


class CaseCreateRequest(_Request):
    """New case. Verdicts are computed server-side, so only the input is accepted."""

    property_input: PropertyPayload


class CaseUpdateRequest(_Request):
    """Partial update; only the fields present in the body are applied"""

    status: CaseStatus | None = None
    assigned_to: str | None = None
    scheduled_date: datetime | None = None
    submitted_date: datetime | None = None
    completed_date: datetime | None = None
    notes: str | None = Field(default=None, max_length=2000)
    tags: list[str] | None = Field(default=None, max_length=MAX_TAGS)
    team_id: str | None = None

    @field_validator("assigned_to")
    @classmethod
    def _uuid(cls, v: str | None) -> str | None:
        if v and not is_valid_uuid(v):
            raise ValueError("assignedTo must be a valid id")
        return v or None

    @field_validator("team_id")
    @classmethod
    def _non_blank(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            raise ValueError("teamId must be a non-empty string or null")
        return v

    @field_validator("tags")
    @classmethod
    def _clean_tags(cls, v: list[str] | None) -> list[str] | None:
        return sanitize_tags(v) if v is not None else None

    def changes(self) -> dict:
        """Fields explicitly sent, keyed by attribute name"""
        return self.model_dump(exclude_unset=True)


# ── Templates ─────────────────────────────────────────────────


class TemplateCreateRequest(_Request):
    name: str = Field(min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    property_input: PropertyPayload
    team_id: str | None = None
    is_public: bool = False

    @field_validator("name", mode="before")
    @classmethod
    def _clean_name(cls, v):
        return sanitize_string(v) if isinstance(v, str) else v


# ── Accounts ──────────────────────────────────────────────────


class RegisterRequest(_Request):
    email: str = Field(max_length=255)
    name: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=8, max_length=128)

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        v = v.strip().lower()
        if not is_valid_email(v):
            raise ValueError("Invalid email format")
        return v


class LoginRequest(_Request):
    email: str
    password: str


class TokenResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    access_token: str
    token_type: str = "bearer"
    user: User


class TeamCreateRequest(_Request):
    name: str = Field(min_length=1, max_length=100)
    plan: TeamPlan = TeamPlan.FREE


class MemberAddRequest(_Request):
    email: str
    role: UserRole = UserRole.MEMBER
