"""Pydantic DTOs (Data Transfer Objects) for assets and inspections.

On the wire every field uses its camelCase alias (``serialNumber``,
``nextInspectionDate``, ...); Python code may populate by field name too.
"""

import datetime as dt

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from equipment_registry.domain.entities import (
    Asset,
    AssetCategory,
    AssetStatus,
    CheckResult,
    Inspection,
    InspectionType,
    ProtectionClass,
    UsageGroup,
)

_CAMEL_CONFIG = {
    "alias_generator": to_camel,
    "populate_by_name": True,
    "from_attributes": True,
}


class InspectionSchema(BaseModel):
    """Full inspection record as stored, exported and returned to the client."""

    id: str
    asset_id: str
    date: dt.date
    inspector: str
    type: InspectionType
    visual_check: CheckResult = CheckResult.PASS
    functional_test: CheckResult = CheckResult.PASS
    overall_result: CheckResult = CheckResult.PASS
    protective_conductor_resistance: float | None = Field(None, ge=0)
    insulation_resistance: float | None = Field(None, ge=0)
    leakage_current: float | None = Field(None, ge=0)
    measuring_instrument_name: str | None = None
    measuring_instrument_serial: str | None = None
    measuring_instrument_calib_date: dt.date | None = None
    notes: str | None = None

    model_config = _CAMEL_CONFIG

    def to_entity(self) -> Inspection:
        return Inspection(**self.model_dump())


class AssetSchema(BaseModel):
    """Full asset record, including its inspection log."""

    id: str
    name: str
    type: str = ""
    manufacturer: str = ""
    year: int
    serial_number: str
    revision_number: str
    protection_class: ProtectionClass = ProtectionClass.I
    usage_group: UsageGroup = UsageGroup.A
    category: AssetCategory = AssetCategory.HAND_HELD
    status: AssetStatus = AssetStatus.PLANNED
    next_inspection_date: dt.date | None = None
    created_at: dt.datetime
    location: str | None = None
    notes: str | None = None
    inspections: list[InspectionSchema] = Field(default_factory=list)

    model_config = _CAMEL_CONFIG

    @field_validator("next_inspection_date", mode="before")
    @classmethod
    def _blank_date_is_absent(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, value: dt.datetime) -> dt.datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=dt.timezone.utc)
        return value

    def to_entity(self) -> Asset:
        data = self.model_dump(exclude={"inspections"})
        return Asset(
            **data,
            inspections=[insp.to_entity() for insp in self.inspections],
        )


class AssetCreate(BaseModel):
    """Asset form payload.

    Fields are deliberately lenient; the record validator reports missing or
    out-of-range values as field errors instead of rejecting the payload.
    """

    name: str = ""
    type: str = ""
    manufacturer: str = ""
    year: int | None = None
    serial_number: str = ""
    revision_number: str = ""
    protection_class: ProtectionClass = ProtectionClass.I
    usage_group: UsageGroup = UsageGroup.A
    category: AssetCategory = AssetCategory.HAND_HELD
    location: str | None = None
    notes: str | None = None

    model_config = _CAMEL_CONFIG


class AssetUpdate(AssetCreate):
    """Asset edit payload: may also change status and the next inspection date by hand."""

    status: AssetStatus = AssetStatus.PLANNED
    next_inspection_date: dt.date | None = None


class InspectionCreate(BaseModel):
    """Inspection form payload; validated by the record validator."""

    date: dt.date | None = None
    inspector: str = ""
    type: InspectionType = InspectionType.FULL_INSPECTION
    visual_check: CheckResult = CheckResult.PASS
    functional_test: CheckResult = CheckResult.PASS
    overall_result: CheckResult = CheckResult.PASS
    protective_conductor_resistance: float | None = None
    insulation_resistance: float | None = None
    leakage_current: float | None = None
    measuring_instrument_name: str | None = None
    measuring_instrument_serial: str | None = None
    measuring_instrument_calib_date: dt.date | None = None
    notes: str | None = None

    model_config = _CAMEL_CONFIG


class AssetFormDefaults(BaseModel):
    """Prefilled values for a new asset form."""

    protection_class: ProtectionClass = ProtectionClass.I
    usage_group: UsageGroup = UsageGroup.A
    category: AssetCategory = AssetCategory.HAND_HELD
    status: AssetStatus = AssetStatus.PLANNED
    year: int

    model_config = _CAMEL_CONFIG


class InspectionFormDefaults(BaseModel):
    """Prefilled values for a new inspection form."""

    date: dt.date
    inspector: str = ""
    type: InspectionType = InspectionType.FULL_INSPECTION
    visual_check: CheckResult = CheckResult.PASS
    functional_test: CheckResult = CheckResult.PASS
    overall_result: CheckResult = CheckResult.PASS
    measuring_instrument_name: str = ""
    measuring_instrument_serial: str = ""
    measuring_instrument_calib_date: dt.date | None = None

    model_config = _CAMEL_CONFIG
