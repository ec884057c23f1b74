"""Accounts and teams

Registration, login (bearer API token) and team membership.
Functions take the caller's Session and commit on success.
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.case import TeamPlan, UserRole
from app.models.db.account import TeamMemberORM, TeamORM, UserORM
from app.services.sanitize import sanitize_string
from app.services.security import generate_token, hash_password, hash_token, verify_password

logger = logging.getLogger(__name__)

_TEAM_MANAGERS = frozenset({UserRole.OWNER.value, UserRole.ADMIN.value})


# ── Exceptions ───────────────────────────────────────────────


class AuthenticationError(Exception):
    """Wrong email / password or unknown token"""

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


class DuplicateEmailError(Exception):
    """Email already registered"""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"Email already registered: {email}")


class AccessDeniedError(Exception):
    """Authenticated, but not allowed to touch the resource"""

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message)


class TeamAccessError(AccessDeniedError):
    """Not a member (or not a manager) of the team"""


class TeamNotFoundError(Exception):
    def __init__(self, team_id: str) -> None:
        self.team_id = team_id
        super().__init__(f"Team not found: {team_id}")


class UserNotFoundError(Exception):
    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"User not found: {email}")


# ── Users ────────────────────────────────────────────────────


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def get_user_by_email(db: Session, email: str) -> UserORM | None:
    return db.scalar(select(UserORM).where(UserORM.email == _normalize_email(email)))


def get_user_by_token(db: Session, token: str) -> UserORM | None:
    if not token:
        return None
    return db.scalar(select(UserORM).where(UserORM.api_token_hash == hash_token(token)))


def issue_token(db: Session, user: UserORM) -> str:
    """Give the user a fresh bearer token and return it

    Only the digest is persisted, so the raw token is available here only.
    Any previous token stops working.
    """
    token = generate_token()
    user.api_token_hash = hash_token(token)
    db.commit()
    db.refresh(user)
    return token


def register_user(db: Session, email: str, name: str, password: str) -> UserORM:
    """Create an account (no token yet; see issue_token)

    Raises:
        DuplicateEmailError: email already in use
    """
    email = _normalize_email(email)
    if get_user_by_email(db, email) is not None:
        raise DuplicateEmailError(email)

    user = UserORM(
        email=email,
        name=sanitize_string(name, 100),
        password_hash=hash_password(password),
        role=UserRole.MEMBER.value,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("User registered: %s", user.id)
    return user


def authenticate(db: Session, email: str, password: str) -> UserORM:
    """Check credentials

    Raises:
        AuthenticationError: unknown email or wrong password
    """
    user = get_user_by_email(db, email)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Login failed for %s", _normalize_email(email))
        raise AuthenticationError()
    return user


# ── Teams ────────────────────────────────────────────────────


def get_team(db: Session, team_id: str) -> TeamORM:
    team = db.get(TeamORM, team_id)
    if team is None:
        raise TeamNotFoundError(team_id)
    return team


def _membership(db: Session, team_id: str, user_id: str) -> TeamMemberORM | None:
    return db.scalar(
        select(TeamMemberORM).where(
            TeamMemberORM.team_id == team_id,
            TeamMemberORM.user_id == user_id,
        )
    )


def create_team(db: Session, owner: UserORM, name: str, plan: TeamPlan = TeamPlan.FREE) -> TeamORM:
    """New team owned by `owner`; the owner joins it as OWNER"""
    team = TeamORM(name=sanitize_string(name, 100), owner_id=owner.id, plan=TeamPlan(plan).value)
    db.add(team)
    db.flush()

    db.add(TeamMemberORM(team_id=team.id, user_id=owner.id, role=UserRole.OWNER.value))
    owner.team_id = team.id
    owner.team_role = UserRole.OWNER.value
    db.commit()
    db.refresh(team)
    logger.info("Team created: %s (owner=%s)", team.id, owner.id)
    return team


def list_members(db: Session, team_id: str, user: UserORM) -> list[TeamMemberORM]:
    """Members of a team, visible to members only

    Raises:
        TeamNotFoundError / TeamAccessError
    """
    get_team(db, team_id)
    if _membership(db, team_id, user.id) is None:
        raise TeamAccessError("Not a member of this team")
    return list(
        db.scalars(
            select(TeamMemberORM)
            .where(TeamMemberORM.team_id == team_id)
            .order_by(TeamMemberORM.joined_at)
        )
    )


def add_member(
    db: Session,
    team_id: str,
    actor: UserORM,
    email: str,
    role: UserRole = UserRole.MEMBER,
) -> TeamMemberORM:
    """Add (or re-role) a user by email; owners and admins only

    A user belongs to one team at a time: joining moves their team_id.

    Raises:
        TeamNotFoundError / TeamAccessError / UserNotFoundError
    """
    role = UserRole(role)
    team = get_team(db, team_id)
    actor_membership = _membership(db, team.id, actor.id)
    if actor_membership is None or actor_membership.role not in _TEAM_MANAGERS:
        raise TeamAccessError("Only team owners and admins can add members")
    if role == UserRole.OWNER and actor.id != team.owner_id:
        raise TeamAccessError("Only the team owner can grant the owner role")

    user = get_user_by_email(db, email)
    if user is None:
        raise UserNotFoundError(_normalize_email(email))

    member = _membership(db, team.id, user.id)
    if member is None:
        member = TeamMemberORM(team_id=team.id, user_id=user.id, role=role.value)
        db.add(member)
    else:
        member.role = role.value

    user.team_id = team.id
    user.team_role = role.value
    db.commit()
    db.refresh(member)
    logger.info("Team %s: %s joined as %s", team.id, user.id, role.value)
    return member
