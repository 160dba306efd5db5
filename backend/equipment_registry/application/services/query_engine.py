"""Query engine: filter, sort, paginate and summarize the asset roster.

Filtering is a conjunction of stages applied in a fixed order:

  1. Summary tile     (status bucket, due soon, recently inspected/created)
  2. Free-text search (name, serial number, revision number)
  3. Status equality
  4. Advanced filters (manufacturer, type, year, location, category,
                       inspection type/result, next-inspection date range)

A stage whose parameter is absent is skipped. Every function is total: empty
collections and out-of-range pages produce well-defined results.
"""

import logging
import math
import unicodedata
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace
from datetime import date, datetime, time, timedelta, timezone
from enum import Enum

from equipment_registry.application.services.compliance_scheduler import (
    DUE_SOON_DAYS,
    is_due_soon,
    to_date,
)
from equipment_registry.domain.entities import (
    Asset,
    AssetCategory,
    AssetStatus,
    CheckResult,
    Inspection,
    InspectionType,
)

logger = logging.getLogger(__name__)

RECENT_DAYS = 7
DEFAULT_PAGE_SIZE = 9
MAX_PAGE_LABELS = 7
ELLIPSIS = "…"

PageLabel = int | str
AssetPredicate = Callable[[Asset], bool]


class SummaryTile(str, Enum):
    """Top-level roster filters; at most one is active at a time."""

    TOTAL = "total"
    PLANNED = "planned"
    IN_OPERATION = "inOperation"
    IN_REPAIR = "inRepair"
    DECOMMISSIONED = "decommissioned"
    DUE_IN_30_DAYS = "dueIn30Days"
    INSPECTIONS_LAST_WEEK = "inspectionsLastWeek"
    NEW_ASSETS_LAST_WEEK = "newAssetsLastWeek"


class SortKey(str, Enum):
    NAME = "name"
    NEXT_INSPECTION_DATE = "nextInspectionDate"


_TILE_STATUS: dict[SummaryTile, AssetStatus] = {
    SummaryTile.PLANNED: AssetStatus.PLANNED,
    SummaryTile.IN_OPERATION: AssetStatus.IN_OPERATION,
    SummaryTile.IN_REPAIR: AssetStatus.IN_REPAIR,
    SummaryTile.DECOMMISSIONED: AssetStatus.DECOMMISSIONED,
}


@dataclass(frozen=True)
class AssetFilters:
    """Roster filter parameters. ``None`` or an empty string disables a stage."""

    summary_tile: SummaryTile | None = None
    search: str = ""
    status: AssetStatus | None = None
    manufacturer: str = ""
    type: str = ""
    year: int | None = None
    location: str = ""
    category: AssetCategory | None = None
    inspection_type: InspectionType | None = None
    inspection_result: CheckResult | None = None
    next_inspection_from: date | None = None
    next_inspection_to: date | None = None


@dataclass(frozen=True)
class RosterSummary:
    """Counts over the whole (unfiltered) collection."""

    total: int
    per_status: dict[AssetStatus, int]
    due_in_30_days: int
    inspections_last_week: int
    new_assets_last_week: int


@dataclass(frozen=True)
class Page:
    """One window of an ordered roster."""

    items: list[Asset]
    page: int
    page_size: int
    total: int
    total_pages: int
    start_index: int
    end_index: int
    has_previous: bool
    has_next: bool
    page_labels: list[PageLabel] = field(default_factory=list)


# ── Filtering ────────────────────────────────────────────────────────


def _contains(haystack: str | None, needle: str) -> bool:
    return haystack is not None and needle.lower() in haystack.lower()


def _as_instant(value: date | datetime) -> datetime:
    if isinstance(value, datetime):
        return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


def _inspected_since(inspection: Inspection, now: date | datetime, recent_days: int) -> bool:
    """Inspection date falls within the trailing window, today included."""
    day = to_date(inspection.date)
    return day is not None and day > to_date(now) - timedelta(days=recent_days)


def _created_since(asset: Asset, now: date | datetime, recent_days: int) -> bool:
    """Asset was registered at most ``recent_days`` x 24 hours before ``now``."""
    return _as_instant(asset.created_at) >= _as_instant(now) - timedelta(days=recent_days)


def _tile_predicate(
    tile: SummaryTile,
    now: date | datetime,
    due_soon_days: int,
    recent_days: int,
) -> AssetPredicate:
    if tile in _TILE_STATUS:
        wanted = _TILE_STATUS[tile]
        return lambda asset: asset.status == wanted
    if tile == SummaryTile.DUE_IN_30_DAYS:
        return lambda asset: is_due_soon(
            asset.next_inspection_date, now, due_soon_days=due_soon_days
        )
    if tile == SummaryTile.INSPECTIONS_LAST_WEEK:
        return lambda asset: any(
            _inspected_since(insp, now, recent_days) for insp in asset.inspections
        )
    if tile == SummaryTile.NEW_ASSETS_LAST_WEEK:
        return lambda asset: _created_since(asset, now, recent_days)
    return lambda asset: True


def build_predicates(
    filters: AssetFilters,
    now: date | datetime,
    *,
    due_soon_days: int = DUE_SOON_DAYS,
    recent_days: int = RECENT_DAYS,
) -> list[AssetPredicate]:
    """Return the active filter stages in pipeline order."""
    stages: list[AssetPredicate] = []

    if filters.summary_tile is not None:
        stages.append(_tile_predicate(filters.summary_tile, now, due_soon_days, recent_days))

    query = filters.search.strip()
    if query:
        stages.append(
            lambda a: _contains(a.name, query)
            or _contains(a.serial_number, query)
            or _contains(a.revision_number, query)
        )

    if filters.status is not None:
        stages.append(lambda a: a.status == filters.status)

    if filters.manufacturer:
        stages.append(lambda a: _contains(a.manufacturer, filters.manufacturer))
    if filters.type:
        stages.append(lambda a: _contains(a.type, filters.type))
    if filters.year is not None:
        stages.append(lambda a: a.year == filters.year)
    if filters.location:
        stages.append(lambda a: _contains(a.location, filters.location))
    if filters.category is not None:
        stages.append(lambda a: a.category == filters.category)
    if filters.inspection_type is not None:
        stages.append(
            lambda a: any(i.type == filters.inspection_type for i in a.inspections)
        )
    if filters.inspection_result is not None:
        stages.append(
            lambda a: any(i.overall_result == filters.inspection_result for i in a.inspections)
        )
    if filters.next_inspection_from is not None or filters.next_inspection_to is not None:
        stages.append(
            lambda a: _due_within(
                a, filters.next_inspection_from, filters.next_inspection_to
            )
        )

    return stages


def _due_within(asset: Asset, lower: date | None, upper: date | None) -> bool:
    # Assets without a valid due date never satisfy an active bound.
    due = to_date(asset.next_inspection_date)
    if due is None:
        return False
    if lower is not None and due < lower:
        return False
    if upper is not None and due > upper:
        return False
    return True


def filter_assets(
    assets: Sequence[Asset],
    filters: AssetFilters,
    now: date | datetime,
    *,
    due_soon_days: int = DUE_SOON_DAYS,
    recent_days: int = RECENT_DAYS,
) -> list[Asset]:
    result = list(assets)
    for stage in build_predicates(
        filters, now, due_soon_days=due_soon_days, recent_days=recent_days
    ):
        result = [asset for asset in result if stage(asset)]
    return result


def toggle_summary_tile(
    active: SummaryTile | None, selected: SummaryTile
) -> SummaryTile | None:
    """Select a tile; selecting the already active tile clears it."""
    return None if active == selected else selected


# ── Sorting ──────────────────────────────────────────────────────────


def collation_key(name: str) -> tuple[str, str]:
    """Accent- and case-insensitive ordering key, falling back to the raw text."""
    decomposed = unicodedata.normalize("NFKD", name or "")
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), name or ""


def _name_sort_key(asset: Asset) -> tuple:
    return (*collation_key(asset.name), asset.id)


def _due_date_sort_key(asset: Asset) -> tuple:
    due = to_date(asset.next_inspection_date)
    return (due is None, due or date.min, *collation_key(asset.name), asset.id)


def sort_assets(
    assets: Sequence[Asset], sort_key: SortKey = SortKey.NEXT_INSPECTION_DATE
) -> list[Asset]:
    """Sort deterministically.

    By due date: earliest first, assets without a valid date last, ties broken
    by name and finally by id so no two distinct assets compare equal.
    """
    if SortKey(sort_key) == SortKey.NAME:
        return sorted(assets, key=_name_sort_key)
    return sorted(assets, key=_due_date_sort_key)


def query_assets(
    assets: Sequence[Asset],
    filters: AssetFilters | None,
    sort_key: SortKey,
    now: date | datetime,
    *,
    due_soon_days: int = DUE_SOON_DAYS,
    recent_days: int = RECENT_DAYS,
) -> list[Asset]:
    """Apply the filter pipeline then sort; the visible roster before paging."""
    filters = filters or AssetFilters()
    filtered = filter_assets(
        assets, filters, now, due_soon_days=due_soon_days, recent_days=recent_days
    )
    logger.debug("Roster query: %d of %d assets match", len(filtered), len(assets))
    return sort_assets(filtered, sort_key)


# ── Summary ──────────────────────────────────────────────────────────


def summarize(
    assets: Sequence[Asset],
    now: date | datetime,
    *,
    due_soon_days: int = DUE_SOON_DAYS,
    recent_days: int = RECENT_DAYS,
) -> RosterSummary:
    """Summary counts, always computed over the unfiltered collection.

    ``inspections_last_week`` counts inspections, not assets.
    """
    per_status = {status: 0 for status in AssetStatus}
    for asset in assets:
        per_status[asset.status] += 1

    return RosterSummary(
        total=len(assets),
        per_status=per_status,
        due_in_30_days=sum(
            1
            for a in assets
            if is_due_soon(a.next_inspection_date, now, due_soon_days=due_soon_days)
        ),
        inspections_last_week=sum(
            1
            for a in assets
            for insp in a.inspections
            if _inspected_since(insp, now, recent_days)
        ),
        new_assets_last_week=sum(1 for a in assets if _created_since(a, now, recent_days)),
    )


# ── Pagination ───────────────────────────────────────────────────────


def count_pages(total: int, page_size: int) -> int:
    return math.ceil(max(total, 0) / max(page_size, 1))


def page_window(current: int, total_pages: int) -> list[PageLabel]:
    """Page labels for display, with at most one ellipsis per side.

    >>> page_window(5, 10)
    [1, '…', 4, 5, 6, '…', 10]
    """
    if total_pages <= MAX_PAGE_LABELS:
        return list(range(1, total_pages + 1))
    if current < 5:
        return [1, 2, 3, 4, 5, ELLIPSIS, total_pages]
    if current > total_pages - 4:
        return [1, ELLIPSIS, *range(total_pages - 4, total_pages + 1)]
    return [1, ELLIPSIS, current - 1, current, current + 1, ELLIPSIS, total_pages]


def change_page(current: int, requested: int, total_pages: int) -> int:
    """Move to ``requested``; a page outside ``[1, total_pages]`` is ignored."""
    if 1 <= requested <= total_pages:
        return requested
    return current


def paginate(
    ordered_assets: Sequence[Asset],
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> Page:
    """Slice one page from an ordered roster, clamping ``page`` into range."""
    page_size = max(page_size, 1)
    total = len(ordered_assets)
    pages = count_pages(total, page_size)
    page = min(max(page, 1), max(pages, 1))

    offset = (page - 1) * page_size
    items = list(ordered_assets[offset : offset + page_size])
    start = 0 if total == 0 else offset + 1
    end = 0 if total == 0 else min(offset + page_size, total)

    return Page(
        items=items,
        page=page,
        page_size=page_size,
        total=total,
        total_pages=pages,
        start_index=start,
        end_index=end,
        has_previous=page > 1,
        has_next=page < pages,
        page_labels=page_window(page, pages),
    )


# ── Roster view state ────────────────────────────────────────────────


@dataclass
class RosterView:
    """Caller-held roster parameters; any filter or sort change resets to page 1."""

    filters: AssetFilters = field(default_factory=AssetFilters)
    sort_key: SortKey = SortKey.NEXT_INSPECTION_DATE
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def set_filters(self, filters: AssetFilters) -> None:
        if filters != self.filters:
            self.filters = filters
            self.page = 1

    def set_sort(self, sort_key: SortKey) -> None:
        if SortKey(sort_key) != self.sort_key:
            self.sort_key = SortKey(sort_key)
            self.page = 1

    def toggle_tile(self, tile: SummaryTile) -> None:
        active = toggle_summary_tile(self.filters.summary_tile, tile)
        self.set_filters(replace(self.filters, summary_tile=active))

    def go_to_page(self, requested: int, total_items: int) -> int:
        self.page = change_page(self.page, requested, count_pages(total_items, self.page_size))
        return self.page

    def render(self, assets: Sequence[Asset], now: date | datetime) -> Page:
        ordered = query_assets(assets, self.filters, self.sort_key, now)
        return paginate(ordered, self.page, self.page_size)


# ── Lookups ──────────────────────────────────────────────────────────


def find_by_code(assets: Sequence[Asset], code: str) -> Asset | None:
    """Match a decoded barcode/QR string against asset revision numbers."""
    wanted = (code or "").strip()
    if not wanted:
        return None
    return next((a for a in assets if a.revision_number == wanted), None)


def last_used_revision_number(assets: Sequence[Asset]) -> str | None:
    """Revision number of the most recently created asset."""
    if not assets:
        return None
    newest = max(assets, key=lambda a: a.created_at)
    return newest.revision_number
