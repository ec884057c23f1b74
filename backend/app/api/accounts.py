"""Accounts and teams API router

Endpoints:
- POST /api/auth/register
- POST /api/auth/login
- GET  /api/auth/me
- POST /api/teams
- GET  /api/teams/{team_id}/members
- POST /api/teams/{team_id}/members
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.api.dependencies import get_db, rate_limit, require_user
from app.api.schemas import (
    LoginRequest,
    MemberAddRequest,
    RegisterRequest,
    TeamCreateRequest,
    TokenResponse,
)
from app.models.case import Team, TeamMember, User
from app.models.db.account import UserORM
from app.models.db.converters import member_orm_to_dto, team_orm_to_dto, user_orm_to_dto
from app.services.accounts import (
    AuthenticationError,
    DuplicateEmailError,
    TeamAccessError,
    TeamNotFoundError,
    UserNotFoundError,
    add_member,
    authenticate,
    create_team,
    issue_token,
    list_members,
    register_user,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["accounts"])


def _token_response(db: Session, user: UserORM) -> TokenResponse:
    token = issue_token(db, user)
    return TokenResponse(access_token=token, user=user_orm_to_dto(user))


# ── Auth ──────────────────────────────────────────────────────


@router.post(
    "/auth/register",
    response_model=TokenResponse,
    status_code=201,
    dependencies=[Depends(rate_limit("auth", 20))],
)
def register(request: RegisterRequest, db: Session = Depends(get_db)):
    try:
        user = register_user(db, request.email, request.name, request.password)
    except DuplicateEmailError as e:
        raise HTTPException(status_code=400, detail="Email already registered") from e
    return _token_response(db, user)


@router.post("/auth/login", response_model=TokenResponse, dependencies=[Depends(rate_limit("auth", 20))])
def login(request: LoginRequest, db: Session = Depends(get_db)):
    try:
        user = authenticate(db, request.email, request.password)
    except AuthenticationError as e:
        raise HTTPException(
            status_code=401, detail=str(e), headers={"WWW-Authenticate": "Bearer"}
        ) from e
    return _token_response(db, user)


@router.get("/auth/me", response_model=User)
def me(user: UserORM = Depends(require_user)):
    return user_orm_to_dto(user)


# ── Teams ─────────────────────────────────────────────────────


@router.post("/teams", response_model=Team, status_code=201)
def post_team(
    request: TeamCreateRequest,
    db: Session = Depends(get_db),
    user: UserORM = Depends(require_user),
):
    """Create a team; the caller becomes its owner"""
    return team_orm_to_dto(create_team(db, user, request.name, request.plan))


@router.get("/teams/{team_id}/members", response_model=list[TeamMember])
def get_members(
    team_id: str,
    db: Session = Depends(get_db),
    user: UserORM = Depends(require_user),
):
    try:
        members = list_members(db, team_id, user)
    except TeamNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except TeamAccessError as e:
        raise HTTPException(status_code=403, detail=str(e)) from e
    return [member_orm_to_dto(m) for m in members]


@router.post("/teams/{team_id}/members", response_model=TeamMember, status_code=201)
def post_member(
    team_id: str,
    request: MemberAddRequest,
    db: Session = Depends(get_db),
    user: UserORM = Depends(require_user),
):
    """Add a registered user to the team (owners / admins)"""
    try:
        member = add_member(db, team_id, user, request.email, request.role)
    except (TeamNotFoundError, UserNotFoundError) as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except TeamAccessError as e:
        raise HTTPException(status_code=403, detail=str(e)) from e
    return member_orm_to_dto(member)
