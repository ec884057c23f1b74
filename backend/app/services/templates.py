"""Case templates: reusable PropertyInput presets"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.db.account import UserORM
from app.models.db.converters import template_to_orm
from app.models.db.template import CaseTemplateORM
from app.models.property import PropertyInput
from app.services.accounts import AccessDeniedError, TeamAccessError
from app.services.sanitize import sanitize_string

logger = logging.getLogger(__name__)

TEMPLATE_SCOPES = ("user", "team", "public")


class TemplateNotFoundError(Exception):
    def __init__(self, template_id: str) -> None:
        self.template_id = template_id
        super().__init__(f"Template not found: {template_id}")


def list_templates(db: Session, user: UserORM | None, scope: str = "user") -> list[CaseTemplateORM]:
    """Templates visible in a scope

    - public: every public template (no login needed)
    - team: the caller's team templates; callers without a team get
      their personal ones
    - user: the caller's personal (team-less) templates
    """
    query = select(CaseTemplateORM).order_by(CaseTemplateORM.created_at.desc())
    if scope == "public":
        return list(db.scalars(query.where(CaseTemplateORM.is_public.is_(True))))
    if user is None:
        return []
    if scope == "team" and user.team_id:
        return list(db.scalars(query.where(CaseTemplateORM.team_id == user.team_id)))
    return list(
        db.scalars(
            query.where(
                CaseTemplateORM.created_by == user.id,
                CaseTemplateORM.team_id.is_(None),
            )
        )
    )


def create_template(
    db: Session,
    user: UserORM,
    name: str,
    prop: PropertyInput,
    *,
    description: str | None = None,
    team_id: str | None = None,
    is_public: bool = False,
) -> CaseTemplateORM:
    """Store a preset for the caller (or the caller's team)

    Raises:
        ValueError: empty name after sanitization
        TeamAccessError: team_id is not the caller's team
    """
    clean_name = sanitize_string(name, 100)
    if not clean_name:
        raise ValueError("Template name must be between 1 and 100 characters")
    if team_id is not None and team_id != user.team_id:
        raise TeamAccessError("Templates can only be shared with your own team")

    template = template_to_orm(
        clean_name,
        prop,
        created_by=user.id,
        description=sanitize_string(description, 500) or None,
        team_id=team_id,
        is_public=is_public,
    )
    db.add(template)
    db.commit()
    db.refresh(template)
    logger.info("Template created: %s by %s", template.id, user.id)
    return template


def delete_template(db: Session, template_id: str, user: UserORM) -> None:
    """Delete a template; creator only

    Raises:
        TemplateNotFoundError / AccessDeniedError
    """
    template = db.get(CaseTemplateORM, template_id)
    if template is None:
        raise TemplateNotFoundError(template_id)
    if template.created_by != user.id:
        raise AccessDeniedError("Only the creator can delete a template")
    db.delete(template)
    db.commit()
    logger.info("Template deleted: %s", template_id)
