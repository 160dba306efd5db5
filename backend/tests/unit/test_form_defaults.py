"""Unit tests for new-asset and new-inspection form defaults."""

from datetime import date, datetime, timezone

from equipment_registry.application.services.form_defaults import (
    asset_form_defaults,
    inspection_form_defaults,
    instrument_from,
)
from equipment_registry.domain.entities import (
    AssetCategory,
    AssetStatus,
    CheckResult,
    Inspection,
    InspectionType,
    LastUsedInstrument,
    ProtectionClass,
    UsageGroup,
)

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def test_asset_form_defaults():
    defaults = asset_form_defaults(NOW)
    assert defaults.protection_class == ProtectionClass.I
    assert defaults.usage_group == UsageGroup.A
    assert defaults.category == AssetCategory.HAND_HELD
    assert defaults.status == AssetStatus.PLANNED
    assert defaults.year == 2024


def test_inspection_form_defaults_without_memory():
    defaults = inspection_form_defaults(NOW, "Jana Horakova")
    assert defaults.date == date(2024, 6, 1)
    assert defaults.inspector == "Jana Horakova"
    assert defaults.type == InspectionType.FULL_INSPECTION
    assert defaults.visual_check == CheckResult.PASS
    assert defaults.functional_test == CheckResult.PASS
    assert defaults.overall_result == CheckResult.PASS
    assert defaults.measuring_instrument_name == ""
    assert defaults.measuring_instrument_calib_date is None


def test_inspection_form_defaults_carry_last_instrument():
    last = LastUsedInstrument(
        measuring_instrument_name="Metrel MI 3309",
        measuring_instrument_serial="MT-77",
        measuring_instrument_calib_date=date(2024, 2, 1),
    )
    defaults = inspection_form_defaults(NOW, last_instrument=last)
    assert defaults.measuring_instrument_name == "Metrel MI 3309"
    assert defaults.measuring_instrument_serial == "MT-77"
    assert defaults.measuring_instrument_calib_date == date(2024, 2, 1)


def test_instrument_from_requires_some_field():
    bare = Inspection(
        asset_id="a1",
        date=date(2024, 6, 1),
        inspector="Jan Novak",
        type=InspectionType.ROUTINE_CHECK,
    )
    assert instrument_from(bare) is None

    bare.measuring_instrument_calib_date = date(2024, 1, 1)
    assert instrument_from(bare).measuring_instrument_calib_date == date(2024, 1, 1)
