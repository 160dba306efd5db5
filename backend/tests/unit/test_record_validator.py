"""Unit tests for asset and inspection validation rules."""

from datetime import date

from equipment_registry.application.services.record_validator import (
    validate_asset,
    validate_inspection,
)
from equipment_registry.domain.entities import Asset, InspectionType

NOW = date(2024, 6, 1)


def _existing(**overrides) -> Asset:
    values = dict(
        name="Drill",
        type="PSB 500",
        manufacturer="Bosch",
        year=2019,
        serial_number="SN-100",
        revision_number="r-001",
    )
    values.update(overrides)
    return Asset(**values)


def _candidate(**overrides) -> dict:
    values = {
        "name": "Extension cord 10 m",
        "year": 2021,
        "serial_number": "SN-200",
        "revision_number": "R-002",
    }
    values.update(overrides)
    return values


def _full_inspection(**overrides) -> dict:
    values = {
        "date": date(2024, 5, 20),
        "inspector": "Jan Novak",
        "type": InspectionType.FULL_INSPECTION,
        "protective_conductor_resistance": 0.12,
        "insulation_resistance": 250.0,
    }
    values.update(overrides)
    return values


# ── Assets ───────────────────────────────────────────────────────────


def test_valid_asset_has_no_errors():
    assert validate_asset(_candidate(), [_existing()], NOW) == {}


def test_required_fields():
    errors = validate_asset({}, [], NOW)
    assert set(errors) == {"name", "revision_number", "serial_number", "year"}


def test_short_name_is_rejected():
    errors = validate_asset(_candidate(name="  ab "), [], NOW)
    assert "name" in errors


def test_revision_number_collision_is_case_insensitive():
    errors = validate_asset(_candidate(revision_number=" R-001 "), [_existing()], NOW)
    assert errors["revision_number"] == "This revision number already exists."


def test_serial_number_collision():
    errors = validate_asset(_candidate(serial_number="sn-100"), [_existing()], NOW)
    assert errors["serial_number"] == "This serial number already exists."


def test_na_serial_number_may_repeat():
    existing = _existing(serial_number="N/A")
    assert validate_asset(_candidate(serial_number="N/A"), [existing], NOW) == {}
    assert validate_asset(_candidate(serial_number="n/a"), [existing], NOW) == {}


def test_editing_excludes_own_record():
    existing = _existing()
    candidate = _candidate(
        id=existing.id,
        revision_number=existing.revision_number,
        serial_number=existing.serial_number,
    )
    assert validate_asset(candidate, [existing], NOW) == {}


def test_year_bounds():
    assert "year" in validate_asset(_candidate(year=1949), [], NOW)
    assert "year" in validate_asset(_candidate(year=2025), [], NOW)
    assert validate_asset(_candidate(year=1950), [], NOW) == {}
    assert validate_asset(_candidate(year=2024), [], NOW) == {}
    assert "year" in validate_asset(_candidate(year="abc"), [], NOW)


def test_year_must_be_whole():
    errors = validate_asset(_candidate(year=2000.5), [], NOW)
    assert errors["year"] == "Year of manufacture must be between 1950 and 2024."
    assert "year" in validate_asset(_candidate(year=float("nan")), [], NOW)
    assert validate_asset(_candidate(year=2000.0), [], NOW) == {}
    assert validate_asset(_candidate(year="2001"), [], NOW) == {}


def test_year_lower_bound_is_configurable():
    assert "year" in validate_asset(_candidate(year=1990), [], NOW, min_year=2000)


def test_accepts_entities_as_candidates():
    candidate = _existing(revision_number="R-050", serial_number="SN-050")
    assert validate_asset(candidate, [_existing()], NOW) == {}


# ── Inspections ──────────────────────────────────────────────────────


def test_valid_full_inspection():
    assert validate_inspection(_full_inspection(), NOW) == {}


def test_full_inspection_requires_resistances():
    errors = validate_inspection(_full_inspection(protective_conductor_resistance=None), NOW)
    assert errors == {
        "protective_conductor_resistance": (
            "Protective conductor resistance is required for a full inspection."
        )
    }


def test_zero_resistance_counts_as_missing_on_full_inspection():
    errors = validate_inspection(_full_inspection(insulation_resistance=0), NOW)
    assert "insulation_resistance" in errors


def test_routine_check_may_omit_resistances():
    candidate = _full_inspection(
        type=InspectionType.ROUTINE_CHECK,
        protective_conductor_resistance=None,
        insulation_resistance=None,
    )
    assert validate_inspection(candidate, NOW) == {}


def test_negative_measurements_are_rejected():
    errors = validate_inspection(_full_inspection(leakage_current=-0.5), NOW)
    assert errors == {"leakage_current": "Value cannot be negative."}

    errors = validate_inspection(
        _full_inspection(type=InspectionType.ROUTINE_CHECK, insulation_resistance=-1), NOW
    )
    assert errors == {"insulation_resistance": "Value cannot be negative."}


def test_future_date_is_rejected():
    errors = validate_inspection(_full_inspection(date=date(2024, 6, 2)), NOW)
    assert errors == {"date": "Date cannot be in the future."}


def test_today_is_accepted():
    assert validate_inspection(_full_inspection(date=NOW), NOW) == {}


def test_unparsable_date_is_reported_as_missing():
    errors = validate_inspection(_full_inspection(date="not-a-date"), NOW)
    assert errors == {"date": "Date is required."}


def test_inspector_name_length():
    assert "inspector" in validate_inspection(_full_inspection(inspector="  "), NOW)
    assert "inspector" in validate_inspection(_full_inspection(inspector="Al"), NOW)
