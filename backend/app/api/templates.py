"""Template API router

Endpoints:
- GET    /api/templates?scope=user|team|public
- POST   /api/templates
- DELETE /api/templates/{template_id}
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from app.api.dependencies import get_current_user, get_db, rate_limit, require_user
from app.api.schemas import TemplateCreateRequest
from app.models.case import CaseTemplate
from app.models.db.account import UserORM
from app.models.db.converters import template_orm_to_dto
from app.services.accounts import AccessDeniedError
from app.services.templates import (
    TemplateNotFoundError,
    create_template,
    delete_template,
    list_templates,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/templates", tags=["templates"])


@router.get("", response_model=list[CaseTemplate], dependencies=[Depends(rate_limit("read", 200))])
def get_templates(
    scope: str = Query("user", pattern="^(user|team|public)$"),
    db: Session = Depends(get_db),
    user: UserORM | None = Depends(get_current_user),
):
    return [template_orm_to_dto(t) for t in list_templates(db, user, scope)]


@router.post(
    "",
    response_model=CaseTemplate,
    status_code=201,
    dependencies=[Depends(rate_limit("templates", 50))],
)
def post_template(
    request: TemplateCreateRequest,
    db: Session = Depends(get_db),
    user: UserORM = Depends(require_user),
):
    try:
        template = create_template(
            db,
            user,
            request.name,
            request.property_input,
            description=request.description,
            team_id=request.team_id,
            is_public=request.is_public,
        )
    except AccessDeniedError as e:
        raise HTTPException(status_code=403, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return template_orm_to_dto(template)


@router.delete("/{template_id}", status_code=204, response_class=Response)
def remove_template(
    template_id: str,
    db: Session = Depends(get_db),
    user: UserORM = Depends(require_user),
):
    try:
        delete_template(db, template_id, user)
    except TemplateNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except AccessDeniedError as e:
        raise HTTPException(status_code=403, detail=str(e)) from e
    return Response(status_code=204)
