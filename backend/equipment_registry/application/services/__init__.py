from .asset_service import AssetService
from .compliance_scheduler import (
    classify_urgency,
    compute_next_inspection_date,
    derive_status,
    record_inspection,
)
from .permissions import ensure_capability, has_capability
from .query_engine import (
    AssetFilters,
    Page,
    RosterSummary,
    RosterView,
    SortKey,
    SummaryTile,
    paginate,
    query_assets,
    summarize,
)
from .record_validator import validate_asset, validate_inspection

__all__ = [
    "AssetService",
    "classify_urgency",
    "compute_next_inspection_date",
    "derive_status",
    "record_inspection",
    "ensure_capability",
    "has_capability",
    "AssetFilters",
    "Page",
    "RosterSummary",
    "RosterView",
    "SortKey",
    "SummaryTile",
    "paginate",
    "query_assets",
    "summarize",
    "validate_asset",
    "validate_inspection",
]
