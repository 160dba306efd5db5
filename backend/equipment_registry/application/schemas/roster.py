"""Pydantic DTOs for roster pages and summary tiles."""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from equipment_registry.application.schemas.asset import AssetSchema
from equipment_registry.application.services.query_engine import Page, RosterSummary

_CAMEL_CONFIG = {
    "alias_generator": to_camel,
    "populate_by_name": True,
}


class SummaryResponse(BaseModel):
    """Counts over the whole collection, independent of the active filter."""

    total: int
    per_status: dict[str, int]
    due_in_30_days: int
    inspections_last_week: int
    new_assets_last_week: int

    model_config = _CAMEL_CONFIG

    @classmethod
    def from_summary(cls, summary: RosterSummary) -> "SummaryResponse":
        return cls(
            total=summary.total,
            per_status={status.value: count for status, count in summary.per_status.items()},
            due_in_30_days=summary.due_in_30_days,
            inspections_last_week=summary.inspections_last_week,
            new_assets_last_week=summary.new_assets_last_week,
        )


class PageResponse(BaseModel):
    """One page of the filtered, sorted roster."""

    items: list[AssetSchema]
    page: int
    page_size: int
    total: int
    total_pages: int
    start_index: int
    end_index: int
    has_previous: bool
    has_next: bool
    page_labels: list[int | str]

    model_config = _CAMEL_CONFIG

    @classmethod
    def from_page(cls, page: Page) -> "PageResponse":
        return cls(
            items=[AssetSchema.model_validate(a, from_attributes=True) for a in page.items],
            page=page.page,
            page_size=page.page_size,
            total=page.total,
            total_pages=page.total_pages,
            start_index=page.start_index,
            end_index=page.end_index,
            has_previous=page.has_previous,
            has_next=page.has_next,
            page_labels=list(page.page_labels),
        )


class RosterResponse(BaseModel):
    """Roster page together with the summary tiles."""

    page: PageResponse
    summary: SummaryResponse

    model_config = _CAMEL_CONFIG
