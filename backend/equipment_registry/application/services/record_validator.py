"""Record validator: field and cross-field rules for asset and inspection input.

Validators never raise. They return a mapping of field name → message and an
empty mapping means the candidate is valid. Candidates may be plain mappings
(e.g. raw form state), domain entities or request DTOs; a missing key or
attribute counts as an absent value.
"""

from collections.abc import Iterable, Mapping
from datetime import date, datetime
from enum import Enum
from typing import Any

from equipment_registry.application.services.compliance_scheduler import to_date
from equipment_registry.domain.entities import Asset, InspectionType

MIN_MANUFACTURE_YEAR = 1950
MIN_TEXT_LENGTH = 3
UNIQUENESS_EXEMPT_SERIAL = "n/a"


def _get(candidate: Any, name: str) -> Any:
    if isinstance(candidate, Mapping):
        return candidate.get(name)
    return getattr(candidate, name, None)


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _normalize(value: Any) -> str:
    return _text(value).lower()


def _enum_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str) and not value.strip():
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _is_taken(
    value: str,
    field: str,
    existing_assets: Iterable[Asset],
    own_id: str | None,
) -> bool:
    return any(
        _normalize(getattr(asset, field)) == value and asset.id != own_id
        for asset in existing_assets
    )


def validate_asset(
    candidate: Any,
    existing_assets: Iterable[Asset],
    now: date | datetime,
    *,
    min_year: int = MIN_MANUFACTURE_YEAR,
) -> dict[str, str]:
    """Validate an asset candidate against the current collection.

    The candidate's own ``id`` (when editing) is excluded from uniqueness checks.
    """
    errors: dict[str, str] = {}
    existing = list(existing_assets)
    own_id = _get(candidate, "id")

    name = _text(_get(candidate, "name"))
    if not name:
        errors["name"] = "Name is required."
    elif len(name) < MIN_TEXT_LENGTH:
        errors["name"] = f"Name must be at least {MIN_TEXT_LENGTH} characters long."

    revision = _normalize(_get(candidate, "revision_number"))
    if not revision:
        errors["revision_number"] = "Revision number is required."
    elif _is_taken(revision, "revision_number", existing, own_id):
        errors["revision_number"] = "This revision number already exists."

    serial = _normalize(_get(candidate, "serial_number"))
    if not serial:
        errors["serial_number"] = "Serial number is required."
    elif serial != UNIQUENESS_EXEMPT_SERIAL and _is_taken(
        serial, "serial_number", existing, own_id
    ):
        errors["serial_number"] = "This serial number already exists."

    current_year = to_date(now).year
    raw_year = _get(candidate, "year")
    if raw_year is None or (isinstance(raw_year, str) and not raw_year.strip()):
        errors["year"] = "Year of manufacture is required."
    else:
        year = _number(raw_year)
        if year is None or not year.is_integer() or not (min_year <= year <= current_year):
            errors["year"] = (
                f"Year of manufacture must be between {min_year} and {current_year}."
            )

    return errors


def _check_measurement(
    errors: dict[str, str],
    field: str,
    value: Any,
    *,
    required: bool,
    label: str,
) -> None:
    number = _number(value)
    if required and (number is None or number == 0):
        errors[field] = f"{label} is required for a full inspection."
    elif number is not None and number < 0:
        errors[field] = "Value cannot be negative."


def validate_inspection(candidate: Any, now: date | datetime) -> dict[str, str]:
    """Validate an inspection candidate.

    A full inspection must carry both resistance measurements (zero counts as
    missing); a routine check may omit them. Leakage current is always optional.
    """
    errors: dict[str, str] = {}

    inspection_date = to_date(_get(candidate, "date"))
    if inspection_date is None:
        errors["date"] = "Date is required."
    elif inspection_date > to_date(now):
        errors["date"] = "Date cannot be in the future."

    if len(_text(_get(candidate, "inspector"))) < MIN_TEXT_LENGTH:
        errors["inspector"] = (
            f"Inspector name is required (at least {MIN_TEXT_LENGTH} characters)."
        )

    full = _enum_value(_get(candidate, "type")) == InspectionType.FULL_INSPECTION.value
    _check_measurement(
        errors,
        "protective_conductor_resistance",
        _get(candidate, "protective_conductor_resistance"),
        required=full,
        label="Protective conductor resistance",
    )
    _check_measurement(
        errors,
        "insulation_resistance",
        _get(candidate, "insulation_resistance"),
        required=full,
        label="Insulation resistance",
    )
    _check_measurement(
        errors,
        "leakage_current",
        _get(candidate, "leakage_current"),
        required=False,
        label="Leakage current",
    )

    return errors
