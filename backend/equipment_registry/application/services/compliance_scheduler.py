"""Compliance scheduler: next-due-date rules, status derivation and urgency.

Everything here is a pure function of its arguments. "Now" is always passed
in by the caller so results are deterministic.

Inspection intervals (months) by category and usage group. Usage group A
carries no periodic obligation at all:

    category        B   C   D   E
    HandHeld        6   6   6  12
    ExtensionCord   6   6   6  24
    Other           6  12  12  24
"""

import logging
from collections.abc import Sequence
from dataclasses import replace
from datetime import date, datetime, timedelta

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

from equipment_registry.domain.entities import (
    Asset,
    AssetCategory,
    AssetStatus,
    CheckResult,
    Inspection,
    UrgencyTier,
    UsageGroup,
)

logger = logging.getLogger(__name__)

DUE_SOON_DAYS = 30

INSPECTION_INTERVAL_MONTHS: dict[tuple[AssetCategory, UsageGroup], int] = {
    (AssetCategory.HAND_HELD, UsageGroup.B): 6,
    (AssetCategory.HAND_HELD, UsageGroup.C): 6,
    (AssetCategory.HAND_HELD, UsageGroup.D): 6,
    (AssetCategory.HAND_HELD, UsageGroup.E): 12,
    (AssetCategory.EXTENSION_CORD, UsageGroup.B): 6,
    (AssetCategory.EXTENSION_CORD, UsageGroup.C): 6,
    (AssetCategory.EXTENSION_CORD, UsageGroup.D): 6,
    (AssetCategory.EXTENSION_CORD, UsageGroup.E): 24,
    (AssetCategory.OTHER, UsageGroup.B): 6,
    (AssetCategory.OTHER, UsageGroup.C): 12,
    (AssetCategory.OTHER, UsageGroup.D): 12,
    (AssetCategory.OTHER, UsageGroup.E): 24,
}

_STATUS_BY_RESULT: dict[CheckResult, AssetStatus] = {
    CheckResult.PASS: AssetStatus.IN_OPERATION,
    CheckResult.FAIL: AssetStatus.IN_REPAIR,
}


def to_date(value: date | datetime | str | None) -> date | None:
    """Coerce a date-like value to a calendar date.

    Datetimes are truncated to their date part. Strings are parsed as ISO-8601.
    Anything absent or unparsable yields ``None``.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return isoparse(text).date()
        except (ValueError, OverflowError):
            return None
    return None


def interval_months(usage_group: UsageGroup, category: AssetCategory) -> int | None:
    """Months between inspections, or None when there is no periodic obligation."""
    if usage_group == UsageGroup.A:
        return None
    return INSPECTION_INTERVAL_MONTHS.get((category, usage_group))


def compute_next_inspection_date(
    usage_group: UsageGroup,
    category: AssetCategory,
    last_inspection_date: date | datetime | str | None,
) -> date | None:
    """Return the date the next periodic inspection is due.

    Month arithmetic clamps to the end of the target month, so an inspection
    on 31 August with a 6-month interval is due on the last day of February.
    """
    months = interval_months(usage_group, category)
    if months is None:
        return None
    last = to_date(last_inspection_date)
    if last is None:
        return None
    return last + relativedelta(months=months)


def derive_status(overall_result: CheckResult) -> AssetStatus:
    """Map an inspection outcome to the asset's resulting operational status."""
    return _STATUS_BY_RESULT[CheckResult(overall_result)]


def classify_urgency(
    next_inspection_date: date | datetime | str | None,
    now: date | datetime,
    *,
    due_soon_days: int = DUE_SOON_DAYS,
) -> UrgencyTier:
    """Classify how pressing an inspection is relative to ``now``.

    Both ends of the due-soon window (today and today + ``due_soon_days``)
    count as due soon.
    """
    due = to_date(next_inspection_date)
    if due is None:
        return UrgencyTier.PLANNED
    today = to_date(now)
    if due < today:
        return UrgencyTier.OVERDUE
    if due <= today + timedelta(days=due_soon_days):
        return UrgencyTier.DUE_SOON
    return UrgencyTier.OK


def is_due_soon(
    next_inspection_date: date | datetime | str | None,
    now: date | datetime,
    *,
    due_soon_days: int = DUE_SOON_DAYS,
) -> bool:
    return (
        classify_urgency(next_inspection_date, now, due_soon_days=due_soon_days)
        == UrgencyTier.DUE_SOON
    )


def apply_inspection(asset: Asset, inspection: Inspection) -> Asset:
    """Return a copy of ``asset`` with the inspection appended and schedule refreshed."""
    return replace(
        asset,
        inspections=[*asset.inspections, inspection],
        next_inspection_date=compute_next_inspection_date(
            asset.usage_group, asset.category, inspection.date
        ),
        status=derive_status(inspection.overall_result),
    )


def record_inspection(
    assets: Sequence[Asset],
    asset_id: str,
    inspection: Inspection,
) -> list[Asset]:
    """Append an inspection to the matching asset within a collection.

    An unknown ``asset_id`` leaves the collection unchanged.
    """
    if not any(asset.id == asset_id for asset in assets):
        logger.warning("Inspection for unknown asset %s ignored", asset_id)
        return list(assets)
    return [
        apply_inspection(asset, inspection) if asset.id == asset_id else asset
        for asset in assets
    ]
