from .asset import (
    AssetCreate,
    AssetFormDefaults,
    AssetSchema,
    AssetUpdate,
    InspectionCreate,
    InspectionFormDefaults,
    InspectionSchema,
)
from .roster import PageResponse, RosterResponse, SummaryResponse
from .settings import OperatorInfoSchema

__all__ = [
    "AssetCreate",
    "AssetFormDefaults",
    "AssetSchema",
    "AssetUpdate",
    "InspectionCreate",
    "InspectionFormDefaults",
    "InspectionSchema",
    "OperatorInfoSchema",
    "PageResponse",
    "RosterResponse",
    "SummaryResponse",
]
