"""Request schema and wire model tests"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from app.api.schemas import (
    CaseCreateRequest,
    CaseUpdateRequest,
    PropertyPayload,
    RegisterRequest,
    TemplateCreateRequest,
)
from app.models.case import CaseStatus
from app.models.property import PropertyInput
from conftest import make_property_payload


# ── PropertyInput wire format ─────────────────────────────────


class TestPropertyInputWire:
    def test_camel_case_aliases(self):
        prop = PropertyInput.model_validate(make_property_payload(hasWC=True, hasShowerOrBath=False))
        assert prop.useful_area == 60
        assert prop.has_wc is True
        assert prop.has_shower_or_bath is False

    def test_snake_case_also_accepted(self):
        prop = PropertyInput(
            municipality="Tarragona",
            region="Tarragonès",
            property_type="house",
            use_case="renovation",
            has_kitchen=True,
            has_bathroom=True,
            has_natural_light=True,
            has_ventilation=True,
            has_heating=False,
        )
        assert prop.property_type == "house"

    def test_to_wire_drops_absent_keeps_false(self):
        prop = PropertyInput.model_validate(make_property_payload(hasGas=False))
        wire = prop.to_wire()
        assert wire["hasGas"] is False
        assert "hasGasInstallation" not in wire
        assert "hasWC" not in wire
        assert wire["usefulArea"] == 60

    def test_get_field_by_wire_name(self):
        prop = PropertyInput.model_validate(make_property_payload(hasWC=False))
        assert prop.get_field("hasWC") is False
        assert prop.is_present("hasWC")
        assert not prop.is_present("hasHotWater")


# ── PropertyPayload ───────────────────────────────────────────


class TestPropertyPayload:
    def test_valid(self):
        prop = PropertyPayload.model_validate(make_property_payload())
        assert prop.use_case == "segunda-ocupacion"

    def test_unknown_use_case_rejected(self):
        with pytest.raises(ValidationError):
            PropertyPayload.model_validate(make_property_payload(useCase="lloguer"))

    def test_missing_core_flag_rejected(self):
        body = make_property_payload()
        del body["hasKitchen"]
        with pytest.raises(ValidationError):
            PropertyPayload.model_validate(body)

    @pytest.mark.parametrize(
        "field, value",
        [
            ("usefulArea", 0),
            ("usefulArea", 10_001),
            ("ceilingHeight", 0.2),
            ("numRooms", 0),
            ("intendedOccupancy", 51),
            ("numFloors", 0),
            ("yearBuilt", 999),
        ],
    )
    def test_out_of_range(self, field, value):
        with pytest.raises(ValidationError):
            PropertyPayload.model_validate(make_property_payload(**{field: value}))

    def test_future_year_rejected(self):
        next_year = datetime.now(timezone.utc).year + 1
        with pytest.raises(ValidationError):
            PropertyPayload.model_validate(make_property_payload(yearBuilt=next_year))

    def test_text_sanitized(self):
        prop = PropertyPayload.model_validate(
            make_property_payload(
                municipality="  <b>Sabadell</b> ",
                address="<script>Carrer Major 1</script>",
                notes="   ",
            )
        )
        assert prop.municipality == "bSabadell/b"
        assert prop.address == "scriptCarrer Major 1/script"
        assert prop.notes is None

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            PropertyPayload.model_validate(make_property_payload(swimmingPool=True))


# ── Cases ─────────────────────────────────────────────────────


class TestCaseRequests:
    def test_client_evaluation_rejected(self):
        with pytest.raises(ValidationError):
            CaseCreateRequest.model_validate(
                {
                    "propertyInput": make_property_payload(),
                    "evaluationResult": {"overallStatus": "pass"},
                }
            )

    def test_update_changes_only_sent_fields(self):
        req = CaseUpdateRequest.model_validate({"status": "scheduled", "notes": None})
        assert req.changes() == {"status": CaseStatus.SCHEDULED, "notes": None}

    def test_update_rejects_bad_status(self):
        with pytest.raises(ValidationError):
            CaseUpdateRequest.model_validate({"status": "archived"})

    def test_update_rejects_bad_assignee(self):
        with pytest.raises(ValidationError):
            CaseUpdateRequest.model_validate({"assignedTo": "not-a-uuid"})

    def test_update_rejects_blank_team(self):
        with pytest.raises(ValidationError):
            CaseUpdateRequest.model_validate({"teamId": "  "})

    def test_update_tags(self):
        req = CaseUpdateRequest.model_validate({"tags": [" urgent ", "<>", "Gràcia"]})
        assert req.tags == ["urgent", "Gràcia"]

    def test_update_too_many_tags(self):
        with pytest.raises(ValidationError):
            CaseUpdateRequest.model_validate({"tags": [f"t{i}" for i in range(21)]})

    def test_update_notes_too_long(self):
        with pytest.raises(ValidationError):
            CaseUpdateRequest.model_validate({"notes": "x" * 2001})


# ── Templates / accounts ──────────────────────────────────────


class TestOtherRequests:
    def test_template_name_sanitized(self):
        req = TemplateCreateRequest.model_validate(
            {"name": " <i>Pis tipus</i> ", "propertyInput": make_property_payload()}
        )
        assert req.name == "iPis tipus/i"
        assert req.is_public is False

    def test_template_empty_name(self):
        with pytest.raises(ValidationError):
            TemplateCreateRequest.model_validate(
                {"name": "<>", "propertyInput": make_property_payload()}
            )

    def test_register_lowercases_email(self):
        req = RegisterRequest.model_validate(
            {"email": " Anna@Example.CAT ", "name": "Anna", "password": "12345678"}
        )
        assert req.email == "anna@example.cat"

    @pytest.mark.parametrize(
        "body",
        [
            {"email": "no-at-sign", "name": "Anna", "password": "12345678"},
            {"email": "anna@example.cat", "name": "Anna", "password": "short"},
            {"email": "anna@example.cat", "name": "", "password": "12345678"},
        ],
    )
    def test_register_invalid(self, body):
        with pytest.raises(ValidationError):
            RegisterRequest.model_validate(body)
