"""Pydantic DTO ↔ SQLAlchemy ORM conversion

DTOs never know about the ORM; the ORM is a pure persistence layer.
JSON snapshots are written in wire form (camelCase, absent fields omitted)
so a stored case reads back exactly as it was evaluated.
"""

from __future__ import annotations

from app.models.case import Case, CaseTemplate, Evidence, Team, TeamMember, User
from app.models.db.account import TeamMemberORM, TeamORM, UserORM
from app.models.db.case import CaseORM
from app.models.db.evidence import EvidenceORM
from app.models.db.template import CaseTemplateORM
from app.models.evaluation import EvaluationResult
from app.models.property import PropertyInput


# ──────────────────────────────────────────
# Pydantic → ORM
# ──────────────────────────────────────────


def case_to_orm(
    prop: PropertyInput,
    evaluation: EvaluationResult,
    *,
    share_id: str,
    user_id: str | None = None,
    team_id: str | None = None,
) -> CaseORM:
    """PropertyInput + EvaluationResult → new CaseORM"""
    orm = CaseORM(
        share_id=share_id,
        user_id=user_id,
        team_id=team_id,
        evaluation_history=[],
        tags=[],
    )
    apply_evaluation(orm, prop, evaluation)
    return orm


def apply_evaluation(orm: CaseORM, prop: PropertyInput, evaluation: EvaluationResult) -> None:
    """Write input/evaluation snapshots and their denormalized columns"""
    orm.property_input = prop.to_wire()
    orm.evaluation_result = evaluation.to_wire()
    orm.municipality = prop.municipality
    orm.overall_status = evaluation.overall_status.value
    orm.confidence = evaluation.confidence
    orm.ruleset_version = evaluation.ruleset_version


def template_to_orm(
    name: str,
    prop: PropertyInput,
    *,
    created_by: str,
    description: str | None = None,
    team_id: str | None = None,
    is_public: bool = False,
) -> CaseTemplateORM:
    return CaseTemplateORM(
        name=name,
        description=description,
        property_input=prop.to_wire(),
        created_by=created_by,
        team_id=team_id,
        is_public=is_public,
    )


# ──────────────────────────────────────────
# ORM → Pydantic
# ──────────────────────────────────────────


def case_orm_to_dto(orm: CaseORM) -> Case:
    """CaseORM → Case (JSON snapshots restored as-is)"""
    return Case(
        id=orm.id,
        share_id=orm.share_id,
        property_input=PropertyInput.model_validate(orm.property_input),
        evaluation_result=EvaluationResult.model_validate(orm.evaluation_result),
        evaluation_history=[
            EvaluationResult.model_validate(e) for e in (orm.evaluation_history or [])
        ],
        created_at=orm.created_at,
        user_id=orm.user_id,
        team_id=orm.team_id,
        status=orm.status,
        status_updated_at=orm.status_updated_at,
        status_updated_by=orm.status_updated_by,
        assigned_to=orm.assigned_to,
        scheduled_date=orm.scheduled_date,
        submitted_date=orm.submitted_date,
        completed_date=orm.completed_date,
        notes=orm.notes,
        tags=list(orm.tags or []),
    )


def template_orm_to_dto(orm: CaseTemplateORM) -> CaseTemplate:
    return CaseTemplate(
        id=orm.id,
        name=orm.name,
        description=orm.description,
        property_input=PropertyInput.model_validate(orm.property_input),
        created_by=orm.created_by,
        team_id=orm.team_id,
        is_public=orm.is_public,
        created_at=orm.created_at,
        updated_at=orm.updated_at,
    )


def evidence_orm_to_dto(orm: EvidenceORM) -> Evidence:
    return Evidence.model_validate(orm)


def user_orm_to_dto(orm: UserORM) -> User:
    """UserORM → User (password hash / token dropped)"""
    return User.model_validate(orm)


def team_orm_to_dto(orm: TeamORM) -> Team:
    return Team.model_validate(orm)


def member_orm_to_dto(orm: TeamMemberORM) -> TeamMember:
    return TeamMember.model_validate(orm)
