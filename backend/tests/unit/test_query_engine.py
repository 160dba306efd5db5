"""Unit tests for the roster query engine: filters, ordering, paging and summary."""

import itertools
from dataclasses import replace
from datetime import date, datetime, timedelta, timezone

import pytest

from equipment_registry.application.services.query_engine import (
    ELLIPSIS,
    AssetFilters,
    RosterView,
    SortKey,
    SummaryTile,
    change_page,
    filter_assets,
    find_by_code,
    last_used_revision_number,
    page_window,
    paginate,
    query_assets,
    sort_assets,
    summarize,
    toggle_summary_tile,
)
from equipment_registry.domain.entities import (
    Asset,
    AssetCategory,
    AssetStatus,
    CheckResult,
    Inspection,
    InspectionType,
)

NOW = datetime(2024, 6, 1, 9, 0, tzinfo=timezone.utc)
TODAY = NOW.date()


def _asset(name: str, **overrides) -> Asset:
    values = dict(
        name=name,
        type="Drill",
        manufacturer="Bosch",
        year=2020,
        serial_number=f"SN-{name}",
        revision_number=f"R-{name}",
        created_at=datetime(2023, 1, 1, tzinfo=timezone.utc),
    )
    values.update(overrides)
    return Asset(**values)


def _inspection(asset: Asset, day: date, **overrides) -> Inspection:
    values = dict(
        asset_id=asset.id,
        date=day,
        inspector="Jan Novak",
        type=InspectionType.FULL_INSPECTION,
    )
    values.update(overrides)
    return Inspection(**values)


@pytest.fixture
def roster() -> list[Asset]:
    grinder = _asset(
        "Grinder",
        manufacturer="Makita",
        status=AssetStatus.IN_OPERATION,
        next_inspection_date=TODAY + timedelta(days=10),
        location="Workshop",
    )
    grinder.inspections.append(_inspection(grinder, TODAY - timedelta(days=3)))

    cord = _asset(
        "Extension cord",
        type="Cord 25 m",
        category=AssetCategory.EXTENSION_CORD,
        status=AssetStatus.IN_REPAIR,
        next_inspection_date=TODAY - timedelta(days=2),
        location="Warehouse",
    )
    cord.inspections.append(
        _inspection(
            cord,
            TODAY - timedelta(days=40),
            type=InspectionType.ROUTINE_CHECK,
            overall_result=CheckResult.FAIL,
        )
    )
    cord.inspections.append(_inspection(cord, TODAY - timedelta(days=200)))

    drill = _asset(
        "Drill",
        year=2018,
        status=AssetStatus.IN_OPERATION,
        next_inspection_date=TODAY + timedelta(days=90),
    )
    new_saw = _asset("Circular saw", created_at=NOW - timedelta(days=2))
    old_lamp = _asset("Lamp", status=AssetStatus.DECOMMISSIONED)
    return [grinder, cord, drill, new_saw, old_lamp]


# ── Filtering ────────────────────────────────────────────────────────


def test_no_filters_returns_everything(roster):
    assert len(filter_assets(roster, AssetFilters(), NOW)) == len(roster)


def test_search_matches_name_serial_or_revision(roster):
    names = {a.name for a in filter_assets(roster, AssetFilters(search="grind"), NOW)}
    assert names == {"Grinder"}
    names = {a.name for a in filter_assets(roster, AssetFilters(search="r-drill"), NOW)}
    assert names == {"Drill"}
    names = {a.name for a in filter_assets(roster, AssetFilters(search="  sn-lamp "), NOW)}
    assert names == {"Lamp"}


@pytest.mark.parametrize(
    ("tile", "expected"),
    [
        (SummaryTile.TOTAL, {"Grinder", "Extension cord", "Drill", "Circular saw", "Lamp"}),
        (SummaryTile.PLANNED, {"Circular saw"}),
        (SummaryTile.IN_OPERATION, {"Grinder", "Drill"}),
        (SummaryTile.IN_REPAIR, {"Extension cord"}),
        (SummaryTile.DECOMMISSIONED, {"Lamp"}),
        (SummaryTile.DUE_IN_30_DAYS, {"Grinder"}),
        (SummaryTile.INSPECTIONS_LAST_WEEK, {"Grinder"}),
        (SummaryTile.NEW_ASSETS_LAST_WEEK, {"Circular saw"}),
    ],
)
def test_summary_tiles(roster, tile, expected):
    filtered = filter_assets(roster, AssetFilters(summary_tile=tile), NOW)
    assert {a.name for a in filtered} == expected


def test_advanced_filters(roster):
    def names(**kwargs) -> set[str]:
        return {a.name for a in filter_assets(roster, AssetFilters(**kwargs), NOW)}

    assert names(manufacturer="mak") == {"Grinder"}
    assert names(type="cord") == {"Extension cord"}
    assert names(year=2018) == {"Drill"}
    assert names(location="ware") == {"Extension cord"}
    assert names(category=AssetCategory.EXTENSION_CORD) == {"Extension cord"}
    assert names(status=AssetStatus.IN_OPERATION) == {"Grinder", "Drill"}


def test_inspection_filters_match_any_inspection(roster):
    # The cord's latest inspection is a failed routine check, but an older
    # full inspection still matches.
    filtered = filter_assets(
        roster, AssetFilters(inspection_type=InspectionType.FULL_INSPECTION), NOW
    )
    assert {a.name for a in filtered} == {"Grinder", "Extension cord"}

    filtered = filter_assets(roster, AssetFilters(inspection_result=CheckResult.FAIL), NOW)
    assert {a.name for a in filtered} == {"Extension cord"}


def test_date_range_excludes_assets_without_due_date(roster):
    filtered = filter_assets(
        roster,
        AssetFilters(next_inspection_from=TODAY - timedelta(days=5)),
        NOW,
    )
    assert {a.name for a in filtered} == {"Grinder", "Extension cord", "Drill"}

    filtered = filter_assets(
        roster,
        AssetFilters(
            next_inspection_from=TODAY,
            next_inspection_to=TODAY + timedelta(days=10),
        ),
        NOW,
    )
    assert {a.name for a in filtered} == {"Grinder"}


def test_filter_stages_commute(roster):
    singles = [
        AssetFilters(summary_tile=SummaryTile.IN_OPERATION),
        AssetFilters(search="r"),
        AssetFilters(manufacturer="bosch"),
        AssetFilters(next_inspection_to=TODAY + timedelta(days=60)),
        AssetFilters(inspection_type=InspectionType.FULL_INSPECTION),
    ]
    for size in range(1, len(singles) + 1):
        for subset in itertools.combinations(singles, size):
            combined = AssetFilters()
            for single in subset:
                combined = replace(
                    combined,
                    **{
                        key: value
                        for key, value in vars(single).items()
                        if value not in (None, "")
                    },
                )
            sequential = list(roster)
            for single in reversed(subset):
                sequential = filter_assets(sequential, single, NOW)
            expected = filter_assets(roster, combined, NOW)
            assert [a.id for a in sequential] == [a.id for a in expected]


def test_toggle_summary_tile():
    assert toggle_summary_tile(None, SummaryTile.PLANNED) == SummaryTile.PLANNED
    assert toggle_summary_tile(SummaryTile.PLANNED, SummaryTile.PLANNED) is None
    assert toggle_summary_tile(SummaryTile.PLANNED, SummaryTile.TOTAL) == SummaryTile.TOTAL


# ── Sorting ──────────────────────────────────────────────────────────


def test_sort_by_due_date_puts_missing_dates_last(roster):
    ordered = sort_assets(roster, SortKey.NEXT_INSPECTION_DATE)
    assert [a.name for a in ordered] == [
        "Extension cord",
        "Grinder",
        "Drill",
        "Circular saw",
        "Lamp",
    ]


def test_sort_by_name_ignores_case_and_accents():
    assets = [_asset("zebra"), _asset("Čerpadlo"), _asset("apple"), _asset("Cable")]
    assert [a.name for a in sort_assets(assets, SortKey.NAME)] == [
        "apple",
        "Cable",
        "Čerpadlo",
        "zebra",
    ]


def test_sort_is_total_and_idempotent():
    due = TODAY + timedelta(days=5)
    twins = [_asset("Same", next_inspection_date=due) for _ in range(3)]
    assets = twins + [_asset("Same"), _asset("Other", next_inspection_date=due)]

    once = sort_assets(assets)
    assert [a.id for a in sort_assets(once)] == [a.id for a in once]
    assert [a.id for a in sort_assets(list(reversed(assets)))] == [a.id for a in once]
    assert once[0].name == "Other"
    assert once[-1].next_inspection_date is None


def test_query_assets_filters_then_sorts(roster):
    result = query_assets(
        roster, AssetFilters(status=AssetStatus.IN_OPERATION), SortKey.NAME, NOW
    )
    assert [a.name for a in result] == ["Drill", "Grinder"]


# ── Summary ──────────────────────────────────────────────────────────


def test_summary_counts_whole_collection(roster):
    summary = summarize(roster, NOW)
    assert summary.total == 5
    assert summary.per_status == {
        AssetStatus.PLANNED: 1,
        AssetStatus.IN_OPERATION: 2,
        AssetStatus.IN_REPAIR: 1,
        AssetStatus.DECOMMISSIONED: 1,
    }
    assert summary.due_in_30_days == 1
    assert summary.inspections_last_week == 1
    assert summary.new_assets_last_week == 1


def test_summary_counts_inspections_not_assets():
    asset = _asset("Grinder")
    asset.inspections.extend(
        [_inspection(asset, TODAY), _inspection(asset, TODAY - timedelta(days=6))]
    )
    assert summarize([asset], NOW).inspections_last_week == 2


def test_summary_of_empty_collection():
    summary = summarize([], NOW)
    assert summary.total == 0
    assert all(count == 0 for count in summary.per_status.values())


def test_trailing_week_excludes_records_just_past_the_window():
    now = datetime(2024, 7, 8, 12, 0, tzinfo=timezone.utc)
    asset = _asset("Grinder", created_at=datetime(2024, 7, 1, 0, 30, tzinfo=timezone.utc))
    asset.inspections.append(_inspection(asset, date(2024, 7, 1)))

    summary = summarize([asset], now)
    assert summary.inspections_last_week == 0
    assert summary.new_assets_last_week == 0

    for tile in (SummaryTile.INSPECTIONS_LAST_WEEK, SummaryTile.NEW_ASSETS_LAST_WEEK):
        assert filter_assets([asset], AssetFilters(summary_tile=tile), now) == []


def test_trailing_week_keeps_records_inside_the_window():
    now = datetime(2024, 7, 8, 12, 0, tzinfo=timezone.utc)
    asset = _asset("Grinder", created_at=now - timedelta(days=7))
    asset.inspections.append(_inspection(asset, date(2024, 7, 2)))

    summary = summarize([asset], now)
    assert summary.inspections_last_week == 1
    assert summary.new_assets_last_week == 1

    for tile in (SummaryTile.INSPECTIONS_LAST_WEEK, SummaryTile.NEW_ASSETS_LAST_WEEK):
        assert filter_assets([asset], AssetFilters(summary_tile=tile), now) == [asset]


# ── Pagination ───────────────────────────────────────────────────────


@pytest.fixture
def twenty_three() -> list[Asset]:
    return [_asset(f"Asset {i:02d}") for i in range(1, 24)]


def test_first_page(twenty_three):
    page = paginate(twenty_three, 1, 9)
    assert [a.name for a in page.items] == [f"Asset {i:02d}" for i in range(1, 10)]
    assert page.total_pages == 3
    assert (page.start_index, page.end_index) == (1, 9)
    assert page.has_previous is False
    assert page.has_next is True


def test_last_page(twenty_three):
    page = paginate(twenty_three, 3, 9)
    assert [a.name for a in page.items] == [f"Asset {i:02d}" for i in range(19, 24)]
    assert (page.start_index, page.end_index) == (19, 23)
    assert page.has_previous is True
    assert page.has_next is False


def test_out_of_range_page_change_is_ignored():
    assert change_page(2, 99, 3) == 2
    assert change_page(2, 0, 3) == 2
    assert change_page(2, 3, 3) == 3


def test_paginate_clamps_page(twenty_three):
    assert paginate(twenty_three, 99, 9).page == 3
    assert paginate(twenty_three, -1, 9).page == 1


def test_empty_roster_page():
    page = paginate([], 1, 9)
    assert page.items == []
    assert page.total_pages == 0
    assert (page.start_index, page.end_index) == (0, 0)
    assert page.has_previous is False
    assert page.has_next is False


@pytest.mark.parametrize(
    ("current", "total", "expected"),
    [
        (1, 10, [1, 2, 3, 4, 5, ELLIPSIS, 10]),
        (10, 10, [1, ELLIPSIS, 6, 7, 8, 9, 10]),
        (5, 10, [1, ELLIPSIS, 4, 5, 6, ELLIPSIS, 10]),
        (4, 10, [1, 2, 3, 4, 5, ELLIPSIS, 10]),
        (7, 10, [1, ELLIPSIS, 6, 7, 8, 9, 10]),
        (3, 7, [1, 2, 3, 4, 5, 6, 7]),
        (1, 1, [1]),
        (1, 0, []),
    ],
)
def test_page_window(current, total, expected):
    assert page_window(current, total) == expected


# ── Roster view state ────────────────────────────────────────────────


def test_roster_view_resets_page_on_change(twenty_three):
    view = RosterView()
    assert view.go_to_page(3, len(twenty_three)) == 3
    assert view.go_to_page(99, len(twenty_three)) == 3

    view.set_sort(SortKey.NAME)
    assert view.page == 1

    view.go_to_page(2, len(twenty_three))
    view.toggle_tile(SummaryTile.PLANNED)
    assert view.page == 1
    assert view.filters.summary_tile == SummaryTile.PLANNED

    view.toggle_tile(SummaryTile.PLANNED)
    assert view.filters.summary_tile is None


def test_roster_view_render(twenty_three):
    view = RosterView(sort_key=SortKey.NAME)
    view.go_to_page(2, len(twenty_three))
    page = view.render(twenty_three, NOW)
    assert page.page == 2
    assert page.items[0].name == "Asset 10"


# ── Lookups ──────────────────────────────────────────────────────────


def test_find_by_code(roster):
    assert find_by_code(roster, "  R-Drill\n").name == "Drill"
    assert find_by_code(roster, "r-drill") is None
    assert find_by_code(roster, "") is None


def test_last_used_revision_number(roster):
    assert last_used_revision_number(roster) == "R-Circular saw"
    assert last_used_revision_number([]) is None
