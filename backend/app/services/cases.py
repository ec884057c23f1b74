"""Case service

Evaluate → persist → track. The server always runs the evaluation itself;
callers hand in a PropertyInput, never a verdict.

Access model:
  - read: anonymous, or the owner (another logged-in user gets 403)
  - write: an authenticated owner, or anyone when the case has no owner
  - team assignment: only to the caller's own team
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.config import settings
from app.models.case import CaseStatus
from app.models.db.account import UserORM
from app.models.db.base import utcnow
from app.models.db.case import CaseORM
from app.models.db.converters import apply_evaluation, case_to_orm
from app.models.evaluation import EvaluationResult
from app.models.property import PropertyInput
from app.services.accounts import AccessDeniedError, TeamAccessError
from app.services.rules import HabitabilityEvaluator
from app.services.sanitize import sanitize_string, sanitize_tags
from app.services.security import generate_share_id

logger = logging.getLogger(__name__)

MAX_NOTES_LENGTH = 2000

_UPDATABLE_FIELDS = frozenset({
    "status",
    "assigned_to",
    "scheduled_date",
    "submitted_date",
    "completed_date",
    "notes",
    "tags",
    "team_id",
})


class CaseNotFoundError(Exception):
    """No case with that id / share id"""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Case not found: {key}")


# ── Lookup ───────────────────────────────────────────────────


def get_case(db: Session, case_id: str) -> CaseORM:
    case = db.get(CaseORM, case_id)
    if case is None:
        raise CaseNotFoundError(case_id)
    return case


def get_case_by_share_id(db: Session, share_id: str) -> CaseORM:
    case = db.scalar(select(CaseORM).where(CaseORM.share_id == share_id))
    if case is None:
        raise CaseNotFoundError(share_id)
    return case


def list_cases(db: Session, user: UserORM | None, scope: str = "user") -> list[CaseORM]:
    """Newest first. Anonymous callers get nothing; scope=team needs a team."""
    if user is None:
        return []
    query = select(CaseORM).order_by(CaseORM.created_at.desc())
    if scope == "team":
        if not user.team_id:
            return []
        query = query.where(CaseORM.team_id == user.team_id)
    else:
        query = query.where(CaseORM.user_id == user.id)
    return list(db.scalars(query))


# ── Access checks ────────────────────────────────────────────


def check_read_access(case: CaseORM, user: UserORM | None) -> None:
    if user is not None and case.user_id and case.user_id != user.id:
        raise AccessDeniedError("Not the owner of this case")


def check_write_access(case: CaseORM, user: UserORM) -> None:
    if case.user_id and case.user_id != user.id:
        raise AccessDeniedError("Not the owner of this case")


# ── Commands ─────────────────────────────────────────────────


def _new_share_id(db: Session) -> str:
    while True:
        share_id = generate_share_id(settings.SHARE_ID_LENGTH)
        if db.scalar(select(CaseORM.id).where(CaseORM.share_id == share_id)) is None:
            return share_id


def create_case(
    db: Session,
    prop: PropertyInput,
    evaluator: HabitabilityEvaluator,
    user: UserORM | None = None,
) -> CaseORM:
    """Evaluate a property and store it as a new case"""
    evaluation = evaluator.evaluate(prop)
    case = case_to_orm(
        prop,
        evaluation,
        share_id=_new_share_id(db),
        user_id=user.id if user else None,
        team_id=user.team_id if user else None,
    )
    db.add(case)
    db.commit()
    db.refresh(case)
    logger.info(
        "Case created: %s (%s, %d%%, %s)",
        case.id, case.overall_status, case.confidence, case.ruleset_version,
    )
    return case


def reevaluate_case(db: Session, case: CaseORM, evaluator: HabitabilityEvaluator) -> CaseORM:
    """Re-run the current catalog on the stored input

    The previous result moves to evaluation_history (oldest first).
    """
    prop = PropertyInput.model_validate(case.property_input)
    previous = EvaluationResult.model_validate(case.evaluation_result)
    evaluation = evaluator.evaluate(prop)

    # JSON columns only track reassignment
    case.evaluation_history = [*(case.evaluation_history or []), previous.to_wire()]
    apply_evaluation(case, prop, evaluation)
    db.commit()
    db.refresh(case)
    logger.info(
        "Case re-evaluated: %s %s → %s (%s → %s)",
        case.id, previous.overall_status.value, case.overall_status,
        previous.ruleset_version, case.ruleset_version,
    )
    return case


def update_case(db: Session, case: CaseORM, changes: dict[str, Any], user: UserORM) -> CaseORM:
    """Apply a partial update (keys are CaseORM attribute names)

    A status change stamps status_updated_at / status_updated_by.

    Raises:
        ValueError: unknown field or invalid value
        TeamAccessError: team_id is not the caller's team
    """
    unknown = set(changes) - _UPDATABLE_FIELDS
    if unknown:
        raise ValueError(f"Fields not updatable: {', '.join(sorted(unknown))}")

    if "team_id" in changes:
        team_id = changes["team_id"]
        if team_id is not None and team_id != user.team_id:
            raise TeamAccessError("Cases can only be assigned to your own team")
        case.team_id = team_id

    if "status" in changes and changes["status"] is not None:
        status = CaseStatus(changes["status"]).value
        if status != case.status:
            logger.info("Case %s: %s → %s by %s", case.id, case.status, status, user.id)
        case.status = status
        case.status_updated_at = utcnow()
        case.status_updated_by = user.id

    for field in ("assigned_to", "scheduled_date", "submitted_date", "completed_date"):
        if field in changes:
            setattr(case, field, changes[field])

    if "notes" in changes:
        case.notes = sanitize_string(changes["notes"], MAX_NOTES_LENGTH) or None

    if "tags" in changes:
        case.tags = sanitize_tags(changes["tags"] or [])

    db.commit()
    db.refresh(case)
    return case
