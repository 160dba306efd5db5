"""Domain entities for inspected electrical equipment and its inspection log."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from uuid import uuid4


class ProtectionClass(str, Enum):
    """Electrical protection design class."""

    I = "I"  # noqa: E741
    II = "II"
    III = "III"


class UsageGroup(str, Enum):
    """Deployment context; drives whether and how often inspection is required."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"


class AssetCategory(str, Enum):
    """Physical form factor of the asset."""

    HAND_HELD = "HandHeld"
    OTHER = "Other"
    EXTENSION_CORD = "ExtensionCord"


class AssetStatus(str, Enum):
    """Operational lifecycle state of an asset."""

    PLANNED = "Planned"
    IN_OPERATION = "InOperation"
    IN_REPAIR = "InRepair"
    DECOMMISSIONED = "Decommissioned"


class InspectionType(str, Enum):
    """Depth of an inspection."""

    ROUTINE_CHECK = "RoutineCheck"
    FULL_INSPECTION = "FullInspection"


class CheckResult(str, Enum):
    """Outcome of a single check or of the whole inspection."""

    PASS = "Pass"
    FAIL = "Fail"


class UrgencyTier(str, Enum):
    """How pressing an asset's next inspection is."""

    OK = "Ok"
    DUE_SOON = "DueSoon"
    OVERDUE = "Overdue"
    PLANNED = "Planned"


@dataclass
class Inspection:
    """A single inspection logged against an asset.

    Measured quantities are unit-bearing and nullable:
        protective_conductor_resistance  Ω
        insulation_resistance            MΩ
        leakage_current                  mA
    """

    asset_id: str
    date: date
    inspector: str
    type: InspectionType
    visual_check: CheckResult = CheckResult.PASS
    functional_test: CheckResult = CheckResult.PASS
    overall_result: CheckResult = CheckResult.PASS
    id: str = field(default_factory=lambda: str(uuid4()))
    protective_conductor_resistance: float | None = None
    insulation_resistance: float | None = None
    leakage_current: float | None = None
    measuring_instrument_name: str | None = None
    measuring_instrument_serial: str | None = None
    measuring_instrument_calib_date: date | None = None
    notes: str | None = None


@dataclass
class Asset:
    """Core domain entity: a piece of equipment subject to periodic inspection.

    ``next_inspection_date`` of ``None`` means the asset has no periodic
    inspection obligation (or has never been inspected). Inspections are
    append-only; their order carries no meaning and the latest one is always
    re-derived by date.
    """

    name: str
    type: str
    manufacturer: str
    year: int
    serial_number: str
    revision_number: str
    protection_class: ProtectionClass = ProtectionClass.I
    usage_group: UsageGroup = UsageGroup.A
    category: AssetCategory = AssetCategory.HAND_HELD
    status: AssetStatus = AssetStatus.PLANNED
    id: str = field(default_factory=lambda: str(uuid4()))
    next_inspection_date: date | None = None
    location: str | None = None
    notes: str | None = None
    inspections: list[Inspection] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def latest_inspection(self) -> Inspection | None:
        """Return the inspection with the most recent date, if any."""
        if not self.inspections:
            return None
        return max(self.inspections, key=lambda insp: insp.date)


@dataclass
class LastUsedInstrument:
    """Measuring instrument remembered from the most recent inspection."""

    measuring_instrument_name: str | None = None
    measuring_instrument_serial: str | None = None
    measuring_instrument_calib_date: date | None = None

    def is_empty(self) -> bool:
        return not (
            self.measuring_instrument_name
            or self.measuring_instrument_serial
            or self.measuring_instrument_calib_date
        )
