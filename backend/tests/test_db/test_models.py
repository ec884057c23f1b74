"""ORM model CRUD + constraint tests

Runs on SQLite in-memory. No PostgreSQL needed.
"""

from __future__ import annotations

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from app.models.db import CaseORM, CaseTemplateORM, EvidenceORM, TeamMemberORM, TeamORM, UserORM


def _make_user(**overrides) -> UserORM:
    defaults = {"email": "jordi@example.cat", "name": "Jordi"}
    defaults.update(overrides)
    return UserORM(**defaults)


def _make_case(**overrides) -> CaseORM:
    defaults = {
        "share_id": "0123456789abcdef",
        "property_input": {"municipality": "Girona", "hasKitchen": True},
        "evaluation_result": {"overallStatus": "risk", "confidence": 81},
        "municipality": "Girona",
        "overall_status": "risk",
        "confidence": 81,
        "ruleset_version": "2.0.0-catalonia",
    }
    defaults.update(overrides)
    return CaseORM(**defaults)


def _make_evidence(case_id: str, **overrides) -> EvidenceORM:
    defaults = {
        "case_id": case_id,
        "type": "photo",
        "filename": "1700000000000-cuina.jpg",
        "original_filename": "cuina.jpg",
        "mime_type": "image/jpeg",
        "size": 2048,
        "url": "/api/evidence/x/file",
        "uploaded_by": "someone",
    }
    defaults.update(overrides)
    return EvidenceORM(**defaults)


class TestUserORM:
    """users table"""

    def test_defaults(self, db_session):
        user = _make_user()
        db_session.add(user)
        db_session.commit()

        assert len(user.id) == 36
        assert user.role == "member"
        assert user.team_id is None
        assert user.created_at is not None

    def test_unique_email(self, db_session):
        db_session.add(_make_user())
        db_session.commit()
        db_session.add(_make_user(name="Other"))
        with pytest.raises(IntegrityError):
            db_session.commit()


class TestTeamORM:
    """teams / team_members"""

    def test_members_cascade(self, db_session):
        user = _make_user()
        db_session.add(user)
        db_session.flush()
        team = TeamORM(name="Gestoria Puig", owner_id=user.id)
        team.members.append(TeamMemberORM(user_id=user.id, role="owner"))
        db_session.add(team)
        db_session.commit()

        assert team.plan == "free"
        assert db_session.scalar(select(TeamMemberORM)).team is team

        db_session.delete(team)
        db_session.commit()
        assert db_session.scalars(select(TeamMemberORM)).all() == []

    def test_unique_membership(self, db_session):
        user = _make_user()
        db_session.add(user)
        db_session.flush()
        team = TeamORM(name="Equip", owner_id=user.id)
        db_session.add(team)
        db_session.flush()

        db_session.add(TeamMemberORM(team_id=team.id, user_id=user.id))
        db_session.commit()
        db_session.add(TeamMemberORM(team_id=team.id, user_id=user.id, role="admin"))
        with pytest.raises(IntegrityError):
            db_session.commit()


class TestCaseORM:
    """cases table"""

    def test_create_and_read(self, db_session):
        db_session.add(_make_case())
        db_session.commit()

        case = db_session.scalar(select(CaseORM).where(CaseORM.share_id == "0123456789abcdef"))
        assert case.status == "new"
        assert case.tags == []
        assert case.evaluation_history == []
        assert case.status_updated_at is not None
        assert case.property_input["hasKitchen"] is True

    def test_unique_share_id(self, db_session):
        db_session.add(_make_case())
        db_session.commit()
        db_session.add(_make_case())
        with pytest.raises(IntegrityError):
            db_session.commit()

    def test_json_list_reassignment_persists(self, db_session):
        case = _make_case()
        db_session.add(case)
        db_session.commit()

        case.evaluation_history = case.evaluation_history + [{"overallStatus": "fail"}]
        case.tags = ["urgent"]
        db_session.commit()
        db_session.expire_all()

        stored = db_session.scalar(select(CaseORM))
        assert stored.evaluation_history == [{"overallStatus": "fail"}]
        assert stored.tags == ["urgent"]

    def test_owner_deletion_keeps_case(self, db_session):
        user = _make_user()
        db_session.add(user)
        db_session.flush()
        db_session.add(_make_case(user_id=user.id))
        db_session.commit()

        db_session.delete(user)
        db_session.commit()
        db_session.expire_all()
        assert db_session.scalar(select(CaseORM)).user_id is None


class TestEvidenceORM:
    """evidence table"""

    def test_case_relationship_and_cascade(self, db_session):
        case = _make_case()
        db_session.add(case)
        db_session.flush()
        db_session.add(_make_evidence(case.id))
        db_session.commit()

        db_session.refresh(case)
        assert len(case.evidence) == 1
        assert case.evidence[0].case is case

        db_session.delete(case)
        db_session.commit()
        assert db_session.scalars(select(EvidenceORM)).all() == []

    def test_unique_filename(self, db_session):
        case = _make_case()
        db_session.add(case)
        db_session.flush()
        db_session.add(_make_evidence(case.id))
        db_session.commit()
        db_session.add(_make_evidence(case.id))
        with pytest.raises(IntegrityError):
            db_session.commit()


class TestCaseTemplateORM:
    """case_templates table"""

    def test_defaults(self, db_session):
        user = _make_user()
        db_session.add(user)
        db_session.flush()
        template = CaseTemplateORM(
            name="Pis estàndard",
            property_input={"municipality": "Reus"},
            created_by=user.id,
        )
        db_session.add(template)
        db_session.commit()

        assert template.is_public is False
        assert template.team_id is None

    def test_creator_required(self, db_session):
        db_session.add(CaseTemplateORM(name="Orfe", property_input={}, created_by="missing-user"))
        with pytest.raises(IntegrityError):
            db_session.commit()
