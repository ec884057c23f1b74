"""Rule catalog tests

Each check_* function against the thresholds and confidence levels it
promises, plus the catalog contract (ids, order, evidence names).
"""

import pytest

from app.models.evaluation import RuleSeverity
from app.models.property import PropertyInput
from app.services.rules.catalog import (
    RULES,
    RULES_BY_ID,
    RULESET_VERSION,
    UNSTATED_FLAG_CONFIDENCE,
    check_access_circulation,
    check_bathroom_details,
    check_bathroom_required,
    check_drainage_system,
    check_electrical_installation,
    check_energy_certificate,
    check_gas_installation,
    check_heating,
    check_kitchen_details,
    check_kitchen_required,
    check_min_ceiling_height,
    check_min_useful_area,
    check_minimum_room_size,
    check_minimum_rooms,
    check_natural_light,
    check_occupancy_density,
    check_ventilation,
    check_water_supply,
)


# ──────────────────────────────────────
# Helpers
# ──────────────────────────────────────


def _make_property(**overrides) -> PropertyInput:
    """Minimal property: core facilities present, nothing measured"""
    defaults = {
        "municipality": "Girona",
        "region": "Gironès",
        "property_type": "flat",
        "use_case": "segunda-ocupacion",
        "has_kitchen": True,
        "has_bathroom": True,
        "has_natural_light": True,
        "has_ventilation": True,
        "has_heating": True,
    }
    defaults.update(overrides)
    return PropertyInput(**defaults)


# ============================================================
# Catalog contract
# ============================================================


class TestCatalogContract:
    """Membership and order are versioned"""

    def test_ids_and_order_pinned_to_version(self):
        """Changing this list requires bumping RULESET_VERSION"""
        assert RULESET_VERSION == "2.0.0-catalonia"
        assert [r.id for r in RULES] == [
            "min-useful-area",
            "min-ceiling-height",
            "kitchen-required",
            "bathroom-required",
            "natural-light",
            "ventilation",
            "occupancy-density",
            "minimum-rooms",
            "minimum-room-size",
            "heating",
            "kitchen-details",
            "bathroom-details",
            "water-supply",
            "drainage-system",
            "electrical-installation",
            "energy-certificate",
            "access-circulation",
            "gas-installation",
        ]

    def test_ids_unique(self):
        assert len(RULES_BY_ID) == len(RULES)

    def test_evidence_names_are_input_fields(self):
        """Every evidenceNeeded entry is a wire name of PropertyInput"""
        wire_names = {
            info.alias or name for name, info in PropertyInput.model_fields.items()
        }
        for rule in RULES:
            assert rule.evidence_needed, rule.id
            for field in rule.evidence_needed:
                assert field in wire_names, f"{rule.id}: {field}"

    def test_rules_have_catalan_metadata(self):
        for rule in RULES:
            assert rule.name
            assert rule.description


# ============================================================
# Area and dimensions
# ============================================================


class TestMinUsefulArea:
    """min-useful-area: 30 m² first occupancy, 36 m² otherwise"""

    def test_missing_area_unknown(self):
        out = check_min_useful_area(_make_property())
        assert out.severity == RuleSeverity.UNKNOWN
        assert out.confidence == 0

    def test_zero_area_treated_as_missing(self):
        out = check_min_useful_area(_make_property(useful_area=0))
        assert out.severity == RuleSeverity.UNKNOWN

    @pytest.mark.parametrize(
        "use_case, area, expected",
        [
            ("primera-ocupacion", 30, RuleSeverity.PASS),
            ("primera-ocupacion", 29.9, RuleSeverity.FAIL),
            ("segunda-ocupacion", 36, RuleSeverity.PASS),
            ("segunda-ocupacion", 35, RuleSeverity.FAIL),
            ("renovation", 36, RuleSeverity.PASS),
            ("renovation", 32, RuleSeverity.FAIL),
        ],
    )
    def test_threshold_by_use_case(self, use_case, area, expected):
        out = check_min_useful_area(_make_property(use_case=use_case, useful_area=area))
        assert out.severity == expected
        assert out.confidence == 100

    def test_unknown_use_case_falls_back_to_stricter_minimum(self):
        out = check_min_useful_area(_make_property(use_case="lloguer-turistic", useful_area=33))
        assert out.severity == RuleSeverity.FAIL
        assert "36 m²" in out.message

    def test_fail_message_mentions_area_and_minimum(self):
        out = check_min_useful_area(_make_property(useful_area=20))
        assert "20 m²" in out.message
        assert "36 m²" in out.message
        assert out.fix_guidance


class TestMinCeilingHeight:
    """min-ceiling-height: 2.5 m"""

    def test_missing_unknown(self):
        out = check_min_ceiling_height(_make_property())
        assert out.severity == RuleSeverity.UNKNOWN
        assert out.confidence == 0

    def test_exact_threshold_passes(self):
        out = check_min_ceiling_height(_make_property(ceiling_height=2.5))
        assert out.severity == RuleSeverity.PASS
        assert out.confidence == 100

    def test_below_fails(self):
        out = check_min_ceiling_height(_make_property(ceiling_height=2.4))
        assert out.severity == RuleSeverity.FAIL
        assert "2.4 m" in out.message


# ============================================================
# Mandatory spaces and comfort
# ============================================================


class TestMandatorySpaces:
    """kitchen-required / bathroom-required are hard requirements"""

    def test_kitchen(self):
        assert check_kitchen_required(_make_property()).severity == RuleSeverity.PASS
        out = check_kitchen_required(_make_property(has_kitchen=False))
        assert out.severity == RuleSeverity.FAIL
        assert out.confidence == 100

    def test_bathroom(self):
        assert check_bathroom_required(_make_property()).severity == RuleSeverity.PASS
        out = check_bathroom_required(_make_property(has_bathroom=False))
        assert out.severity == RuleSeverity.FAIL
        assert out.confidence == 100


class TestSoftRequirements:
    """Light, ventilation, heating: never FAIL"""

    @pytest.mark.parametrize(
        "check, field, pass_conf, risk_conf",
        [
            (check_natural_light, "has_natural_light", 80, 50),
            (check_ventilation, "has_ventilation", 80, 50),
            (check_heating, "has_heating", 90, 60),
        ],
    )
    def test_pass_and_risk(self, check, field, pass_conf, risk_conf):
        ok = check(_make_property(**{field: True}))
        assert ok.severity == RuleSeverity.PASS
        assert ok.confidence == pass_conf

        missing = check(_make_property(**{field: False}))
        assert missing.severity == RuleSeverity.RISK
        assert missing.confidence == risk_conf
        assert missing.fix_guidance


# ============================================================
# Occupancy and room heuristics
# ============================================================


class TestOccupancyDensity:
    """occupancy-density: 9 m²/person"""

    def test_needs_area_and_occupancy(self):
        assert check_occupancy_density(_make_property(useful_area=50)).severity == RuleSeverity.UNKNOWN
        assert check_occupancy_density(_make_property(intended_occupancy=2)).severity == RuleSeverity.UNKNOWN

    def test_adequate(self):
        out = check_occupancy_density(_make_property(useful_area=36, intended_occupancy=4))
        assert out.severity == RuleSeverity.PASS
        assert out.confidence == 90
        assert "9.0 m²/persona" in out.message

    def test_too_dense_is_risk_with_recommendation(self):
        out = check_occupancy_density(_make_property(useful_area=40, intended_occupancy=5))
        assert out.severity == RuleSeverity.RISK
        assert out.confidence == 80
        assert "45 m²" in out.fix_guidance


class TestMinimumRooms:
    """minimum-rooms: max(2, occupants)"""

    def test_needs_rooms_and_occupancy(self):
        out = check_minimum_rooms(_make_property(num_rooms=3))
        assert out.severity == RuleSeverity.UNKNOWN

    def test_floor_of_two_rooms(self):
        out = check_minimum_rooms(_make_property(num_rooms=1, intended_occupancy=1))
        assert out.severity == RuleSeverity.RISK
        assert "2+" in out.message

    def test_rooms_per_occupant(self):
        assert check_minimum_rooms(_make_property(num_rooms=4, intended_occupancy=4)).severity == RuleSeverity.PASS
        assert check_minimum_rooms(_make_property(num_rooms=3, intended_occupancy=4)).severity == RuleSeverity.RISK


class TestMinimumRoomSize:
    """minimum-room-size: 8 m² single space, 6 m² average otherwise"""

    def test_needs_area_and_rooms(self):
        out = check_minimum_room_size(_make_property(num_rooms=2))
        assert out.severity == RuleSeverity.UNKNOWN
        assert out.confidence == 0

    def test_single_space_below_8_fails(self):
        out = check_minimum_room_size(_make_property(num_rooms=1, useful_area=7))
        assert out.severity == RuleSeverity.FAIL
        assert out.confidence == 90

    def test_single_space_at_8_passes(self):
        out = check_minimum_room_size(_make_property(num_rooms=1, useful_area=8))
        assert out.severity == RuleSeverity.PASS

    def test_small_average_is_risk(self):
        out = check_minimum_room_size(_make_property(num_rooms=5, useful_area=25))
        assert out.severity == RuleSeverity.RISK
        assert "5.0 m²" in out.message

    def test_average_ok(self):
        out = check_minimum_room_size(_make_property(num_rooms=3, useful_area=60))
        assert out.severity == RuleSeverity.PASS


# ============================================================
# Detailed facilities
# ============================================================


class TestKitchenDetails:
    """kitchen-details: water, drainage, cooking appliance"""

    def test_no_kitchen_vacuous_pass(self):
        out = check_kitchen_details(_make_property(has_kitchen=False))
        assert out.severity == RuleSeverity.PASS
        assert out.confidence == 100

    def test_all_confirmed(self):
        out = check_kitchen_details(
            _make_property(has_running_water=True, has_drainage=True, has_cooking_appliance=True)
        )
        assert out.severity == RuleSeverity.PASS
        assert out.confidence == 95

    def test_unstated_flags_fail_with_lower_confidence(self):
        out = check_kitchen_details(_make_property(has_running_water=True))
        assert out.severity == RuleSeverity.FAIL
        assert out.confidence == UNSTATED_FLAG_CONFIDENCE
        assert "desguàs" in out.message
        assert "fogó" in out.message
        assert "aigua corrent" not in out.message

    def test_explicit_false_fails_with_full_confidence(self):
        out = check_kitchen_details(
            _make_property(has_running_water=True, has_drainage=False, has_cooking_appliance=True)
        )
        assert out.severity == RuleSeverity.FAIL
        assert out.confidence == 100


class TestBathroomDetails:
    """bathroom-details: WC, shower/bath, water, drainage"""

    def test_no_bathroom_vacuous_pass(self):
        out = check_bathroom_details(_make_property(has_bathroom=False))
        assert out.severity == RuleSeverity.PASS

    def test_all_confirmed(self):
        out = check_bathroom_details(
            _make_property(
                has_wc=True, has_shower_or_bath=True, has_running_water=True, has_drainage=True
            )
        )
        assert out.severity == RuleSeverity.PASS

    def test_missing_wc(self):
        out = check_bathroom_details(
            _make_property(
                has_wc=False, has_shower_or_bath=True, has_running_water=True, has_drainage=True
            )
        )
        assert out.severity == RuleSeverity.FAIL
        assert "vàter" in out.message
        assert out.confidence == 100


class TestSupplies:
    """water-supply, drainage-system, electrical-installation"""

    def test_water_needs_hot_and_running(self):
        assert check_water_supply(
            _make_property(has_running_water=True, has_hot_water=True)
        ).severity == RuleSeverity.PASS
        out = check_water_supply(_make_property(has_running_water=True))
        assert out.severity == RuleSeverity.FAIL
        assert "aigua calenta" in out.message

    def test_drainage(self):
        assert check_drainage_system(_make_property(has_drainage=True)).severity == RuleSeverity.PASS
        assert check_drainage_system(_make_property()).confidence == UNSTATED_FLAG_CONFIDENCE
        assert check_drainage_system(_make_property(has_drainage=False)).confidence == 100

    def test_electrical(self):
        assert check_electrical_installation(
            _make_property(has_electrical_installation=True)
        ).severity == RuleSeverity.PASS
        assert check_electrical_installation(_make_property()).severity == RuleSeverity.FAIL


class TestEnergyCertificate:
    """Advisory: RISK at worst"""

    def test_present(self):
        assert check_energy_certificate(
            _make_property(has_energy_certificate=True)
        ).severity == RuleSeverity.PASS

    @pytest.mark.parametrize("value", [None, False])
    def test_absent_is_risk(self, value):
        out = check_energy_certificate(_make_property(has_energy_certificate=value))
        assert out.severity == RuleSeverity.RISK


class TestAccessCirculation:
    """access-circulation: multi-storey homes need a check"""

    def test_unknown_without_floors(self):
        assert check_access_circulation(_make_property()).severity == RuleSeverity.UNKNOWN

    def test_single_floor_passes(self):
        out = check_access_circulation(_make_property(num_floors=1))
        assert out.severity == RuleSeverity.PASS
        assert out.confidence < 100

    def test_multi_floor_risk(self):
        out = check_access_circulation(_make_property(num_floors=3))
        assert out.severity == RuleSeverity.RISK
        assert out.confidence < 100


class TestGasInstallation:
    """gas-installation: only relevant with gas"""

    @pytest.mark.parametrize("has_gas", [None, False])
    def test_no_gas_vacuous_pass(self, has_gas):
        out = check_gas_installation(_make_property(has_gas=has_gas))
        assert out.severity == RuleSeverity.PASS

    def test_certified(self):
        out = check_gas_installation(_make_property(has_gas=True, has_gas_installation=True))
        assert out.severity == RuleSeverity.PASS

    def test_uncertified_fails(self):
        out = check_gas_installation(_make_property(has_gas=True))
        assert out.severity == RuleSeverity.FAIL
