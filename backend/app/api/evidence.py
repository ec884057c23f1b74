"""Evidence API router

Endpoints:
- GET    /api/evidence?caseId=...       — list a case's files
- POST   /api/evidence                  — upload (multipart: caseId, file, description, type)
- GET    /api/evidence/{evidence_id}/file — download
- DELETE /api/evidence/{evidence_id}
"""

import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, Response, UploadFile
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session

from app.api.dependencies import (
    get_current_user,
    get_db,
    get_evidence_store,
    rate_limit,
    require_user,
)
from app.models.case import Evidence, EvidenceType
from app.models.db.account import UserORM
from app.models.db.case import CaseORM
from app.models.db.converters import evidence_orm_to_dto
from app.services.accounts import AccessDeniedError
from app.services.cases import CaseNotFoundError, check_read_access, check_write_access, get_case
from app.services.evidence import EvidenceNotFoundError, EvidenceRejectedError, EvidenceStore
from app.services.sanitize import is_valid_uuid

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/evidence", tags=["evidence"])


def _case_for(db: Session, case_id: str, user: UserORM | None, *, write: bool) -> CaseORM:
    if not is_valid_uuid(case_id):
        raise HTTPException(status_code=400, detail="Invalid ID format")
    try:
        case = get_case(db, case_id)
    except CaseNotFoundError as e:
        raise HTTPException(status_code=404, detail="Case not found") from e
    try:
        if write:
            check_write_access(case, user)
        else:
            check_read_access(case, user)
    except AccessDeniedError as e:
        raise HTTPException(status_code=403, detail=str(e)) from e
    return case


def _load_evidence(db: Session, store: EvidenceStore, evidence_id: str):
    try:
        return store.get(db, evidence_id)
    except EvidenceNotFoundError as e:
        raise HTTPException(status_code=404, detail="Evidence not found") from e


@router.get("", response_model=list[Evidence], dependencies=[Depends(rate_limit("read", 200))])
def list_evidence(
    case_id: str = Query(..., alias="caseId"),
    db: Session = Depends(get_db),
    user: UserORM | None = Depends(get_current_user),
    store: EvidenceStore = Depends(get_evidence_store),
):
    case = _case_for(db, case_id, user, write=False)
    return [evidence_orm_to_dto(e) for e in store.list_for_case(db, case.id)]


@router.post(
    "",
    response_model=Evidence,
    status_code=201,
    dependencies=[Depends(rate_limit("evidence-upload", 20))],
)
def upload_evidence(
    case_id: str = Form(..., alias="caseId"),
    file: UploadFile = File(...),
    description: str | None = Form(None, max_length=500),
    evidence_type: EvidenceType | None = Form(None, alias="type"),
    db: Session = Depends(get_db),
    user: UserORM = Depends(require_user),
    store: EvidenceStore = Depends(get_evidence_store),
):
    """Attach a file to a case"""
    case = _case_for(db, case_id, user, write=True)

    # one byte past the limit is enough to reject
    content = file.file.read(store.max_bytes + 1)
    try:
        evidence = store.save(
            db,
            case,
            user,
            original_filename=file.filename or "",
            mime_type=file.content_type or "",
            content=content,
            description=description,
            evidence_type=evidence_type,
        )
    except EvidenceRejectedError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return evidence_orm_to_dto(evidence)


@router.get("/{evidence_id}/file", dependencies=[Depends(rate_limit("read", 200))])
def download_evidence(
    evidence_id: str,
    db: Session = Depends(get_db),
    user: UserORM | None = Depends(get_current_user),
    store: EvidenceStore = Depends(get_evidence_store),
):
    evidence = _load_evidence(db, store, evidence_id)
    _case_for(db, evidence.case_id, user, write=False)

    path = store.path_for(evidence.filename)
    if not path.exists():
        logger.error("Evidence file missing on disk: %s", path)
        raise HTTPException(status_code=404, detail="Evidence file not found")
    return FileResponse(path, media_type=evidence.mime_type, filename=evidence.original_filename)


@router.delete("/{evidence_id}", status_code=204, response_class=Response)
def delete_evidence(
    evidence_id: str,
    db: Session = Depends(get_db),
    user: UserORM = Depends(require_user),
    store: EvidenceStore = Depends(get_evidence_store),
):
    evidence = _load_evidence(db, store, evidence_id)
    try:
        store.delete(db, evidence, user)
    except AccessDeniedError as e:
        raise HTTPException(status_code=403, detail=str(e)) from e
    return Response(status_code=204)
