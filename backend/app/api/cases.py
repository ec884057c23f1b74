"""Case API router

Endpoints:
- GET   /api/cases                    — caller's cases (?scope=team)
- POST  /api/cases                    — validate, evaluate, store
- GET   /api/cases/{case_id}          — case detail
- PATCH /api/cases/{case_id}          — tracking fields
- POST  /api/cases/{case_id}/reevaluate — re-run the current catalog
- GET   /api/share/{share_id}         — public read-only view
- GET   /api/pdf/{case_id}            — PDF report
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from app.api.dependencies import (
    get_current_user,
    get_db,
    get_evaluator,
    rate_limit,
    require_user,
)
from app.api.schemas import CaseCreateRequest, CaseUpdateRequest
from app.config import settings
from app.models.case import Case
from app.models.db.account import UserORM
from app.models.db.case import CaseORM
from app.models.db.converters import case_orm_to_dto
from app.services.accounts import AccessDeniedError
from app.services.cases import (
    CaseNotFoundError,
    check_read_access,
    check_write_access,
    create_case,
    get_case,
    get_case_by_share_id,
    list_cases,
    reevaluate_case,
    update_case,
)
from app.services.report import render_case_report
from app.services.rules import HabitabilityEvaluator
from app.services.sanitize import is_valid_share_id, is_valid_uuid

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["cases"])


# ── Helpers ───────────────────────────────────────────────────


def _load_case(db: Session, case_id: str) -> CaseORM:
    if not is_valid_uuid(case_id):
        raise HTTPException(status_code=400, detail="Invalid ID format")
    try:
        return get_case(db, case_id)
    except CaseNotFoundError as e:
        raise HTTPException(status_code=404, detail="Case not found") from e


def _readable_case(db: Session, case_id: str, user: UserORM | None) -> CaseORM:
    case = _load_case(db, case_id)
    try:
        check_read_access(case, user)
    except AccessDeniedError as e:
        raise HTTPException(status_code=403, detail=str(e)) from e
    return case


def _writable_case(db: Session, case_id: str, user: UserORM) -> CaseORM:
    case = _load_case(db, case_id)
    try:
        check_write_access(case, user)
    except AccessDeniedError as e:
        raise HTTPException(status_code=403, detail=str(e)) from e
    return case


# ── /api/cases ────────────────────────────────────────────────


@router.get("/cases", response_model=list[Case], dependencies=[Depends(rate_limit("read", 200))])
def list_my_cases(
    scope: str = Query("user", pattern="^(user|team)$"),
    db: Session = Depends(get_db),
    user: UserORM | None = Depends(get_current_user),
):
    """Caller's cases, newest first (anonymous ⇒ empty list)"""
    return [case_orm_to_dto(c) for c in list_cases(db, user, scope)]


@router.post(
    "/cases",
    response_model=Case,
    status_code=201,
    dependencies=[Depends(rate_limit("cases"))],
)
def create_new_case(
    request: CaseCreateRequest,
    db: Session = Depends(get_db),
    user: UserORM | None = Depends(get_current_user),
    evaluator: HabitabilityEvaluator = Depends(get_evaluator),
):
    """Evaluate and store a property"""
    case = create_case(db, request.property_input, evaluator, user)
    return case_orm_to_dto(case)


@router.get("/cases/{case_id}", response_model=Case, dependencies=[Depends(rate_limit("read", 200))])
def get_case_detail(
    case_id: str,
    db: Session = Depends(get_db),
    user: UserORM | None = Depends(get_current_user),
):
    return case_orm_to_dto(_readable_case(db, case_id, user))


@router.patch("/cases/{case_id}", response_model=Case, dependencies=[Depends(rate_limit("cases"))])
def patch_case(
    case_id: str,
    request: CaseUpdateRequest,
    db: Session = Depends(get_db),
    user: UserORM = Depends(require_user),
):
    """Status pipeline, assignment, dates, notes, tags, team"""
    case = _writable_case(db, case_id, user)
    try:
        case = update_case(db, case, request.changes(), user)
    except AccessDeniedError as e:
        raise HTTPException(status_code=403, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return case_orm_to_dto(case)


@router.post(
    "/cases/{case_id}/reevaluate",
    response_model=Case,
    dependencies=[Depends(rate_limit("cases"))],
)
def reevaluate(
    case_id: str,
    db: Session = Depends(get_db),
    user: UserORM = Depends(require_user),
    evaluator: HabitabilityEvaluator = Depends(get_evaluator),
):
    """Re-run the current catalog; the previous result goes to evaluationHistory"""
    case = _writable_case(db, case_id, user)
    return case_orm_to_dto(reevaluate_case(db, case, evaluator))


# ── Share / PDF ───────────────────────────────────────────────


@router.get("/share/{share_id}", response_model=Case, dependencies=[Depends(rate_limit("read", 200))])
def get_shared_case(share_id: str, db: Session = Depends(get_db)):
    """Public view by share id (no login)"""
    if not is_valid_share_id(share_id, settings.SHARE_ID_LENGTH):
        raise HTTPException(status_code=400, detail="Invalid share ID format")
    try:
        case = get_case_by_share_id(db, share_id.lower())
    except CaseNotFoundError as e:
        raise HTTPException(status_code=404, detail="Case not found") from e
    return case_orm_to_dto(case)


@router.get(
    "/pdf/{case_id}",
    response_class=Response,
    dependencies=[Depends(rate_limit("pdf", 50))],
)
def download_report(
    case_id: str,
    db: Session = Depends(get_db),
    user: UserORM | None = Depends(get_current_user),
):
    """PDF report of a case"""
    case = _readable_case(db, case_id, user)
    pdf = render_case_report(case_orm_to_dto(case))
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="cedula-report-{case.id}.pdf"'},
    )
