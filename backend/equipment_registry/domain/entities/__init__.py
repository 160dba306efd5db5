from .asset import (
    Asset,
    AssetCategory,
    AssetStatus,
    CheckResult,
    Inspection,
    InspectionType,
    LastUsedInstrument,
    ProtectionClass,
    UrgencyTier,
    UsageGroup,
)
from .settings import OperatorInfo
from .user import Capability, UserRole

__all__ = [
    "Asset",
    "AssetCategory",
    "AssetStatus",
    "CheckResult",
    "Inspection",
    "InspectionType",
    "LastUsedInstrument",
    "OperatorInfo",
    "ProtectionClass",
    "UrgencyTier",
    "UsageGroup",
    "Capability",
    "UserRole",
]
