"""Prefilled values for new asset and inspection forms."""

from datetime import date, datetime

from equipment_registry.application.schemas.asset import (
    AssetFormDefaults,
    InspectionFormDefaults,
)
from equipment_registry.application.services.compliance_scheduler import to_date
from equipment_registry.domain.entities import Inspection, LastUsedInstrument


def asset_form_defaults(now: date | datetime) -> AssetFormDefaults:
    return AssetFormDefaults(year=to_date(now).year)


def inspection_form_defaults(
    now: date | datetime,
    inspector_name: str = "",
    last_instrument: LastUsedInstrument | None = None,
) -> InspectionFormDefaults:
    """Defaults for a new inspection: today, a full inspection, everything passing.

    Measuring instrument fields are carried over from the last saved inspection.
    """
    instrument = last_instrument or LastUsedInstrument()
    return InspectionFormDefaults(
        date=to_date(now),
        inspector=inspector_name,
        measuring_instrument_name=instrument.measuring_instrument_name or "",
        measuring_instrument_serial=instrument.measuring_instrument_serial or "",
        measuring_instrument_calib_date=instrument.measuring_instrument_calib_date,
    )


def instrument_from(inspection: Inspection) -> LastUsedInstrument | None:
    """Instrument worth remembering from an inspection, or None if it names none."""
    instrument = LastUsedInstrument(
        measuring_instrument_name=inspection.measuring_instrument_name,
        measuring_instrument_serial=inspection.measuring_instrument_serial,
        measuring_instrument_calib_date=inspection.measuring_instrument_calib_date,
    )
    return None if instrument.is_empty() else instrument
