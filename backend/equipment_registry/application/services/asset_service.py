"""Application service (use case) for the asset roster and its inspection log."""

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Any

from equipment_registry.application.interfaces import AssetRepository, SettingsStore
from equipment_registry.application.schemas.asset import (
    AssetCreate,
    AssetUpdate,
    InspectionCreate,
    InspectionFormDefaults,
)
from equipment_registry.application.services import roster_export
from equipment_registry.application.services.compliance_scheduler import (
    DUE_SOON_DAYS,
    apply_inspection,
)
from equipment_registry.application.services.form_defaults import (
    inspection_form_defaults,
    instrument_from,
)
from equipment_registry.application.services.query_engine import (
    DEFAULT_PAGE_SIZE,
    RECENT_DAYS,
    AssetFilters,
    Page,
    RosterSummary,
    SortKey,
    find_by_code,
    last_used_revision_number,
    paginate,
    query_assets,
    summarize,
)
from equipment_registry.application.services.record_validator import (
    MIN_MANUFACTURE_YEAR,
    validate_asset,
    validate_inspection,
)
from equipment_registry.domain.entities import Asset, AssetStatus, Inspection
from equipment_registry.domain.exceptions import EntityNotFoundError, RecordValidationError

logger = logging.getLogger(__name__)

_ASSET_TEXT_FIELDS = (
    "name",
    "type",
    "manufacturer",
    "serial_number",
    "revision_number",
    "location",
    "notes",
)


_OPTIONAL_TEXT_FIELDS = frozenset({"location", "notes"})


def _trimmed(data: dict[str, Any], fields: tuple[str, ...]) -> dict[str, Any]:
    """Strip text fields; optional free text left blank becomes None."""
    cleaned: dict[str, Any] = {}
    for key, value in data.items():
        if key in fields and isinstance(value, str):
            value = value.strip()
            if not value and key in _OPTIONAL_TEXT_FIELDS:
                value = None
        cleaned[key] = value
    return cleaned


class AssetService:
    """Orchestrates roster reads and validated writes. Depends on the repository port (DI).

    Writes are gated on the record validator; recording an inspection refreshes
    the asset's next inspection date and status before it is persisted.
    """

    def __init__(
        self,
        repository: AssetRepository,
        settings_store: SettingsStore | None = None,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        due_soon_days: int = DUE_SOON_DAYS,
        recent_days: int = RECENT_DAYS,
        min_year: int = MIN_MANUFACTURE_YEAR,
    ):
        self._repository = repository
        self._settings_store = settings_store
        self._page_size = page_size
        self._due_soon_days = due_soon_days
        self._recent_days = recent_days
        self._min_year = min_year

    # ── Reads ────────────────────────────────────────────────────────

    async def list_assets(self) -> list[Asset]:
        return await self._repository.list_all()

    async def get_asset(self, asset_id: str) -> Asset:
        asset = await self._repository.get_by_id(asset_id)
        if asset is None:
            raise EntityNotFoundError("Asset", asset_id)
        return asset

    async def roster(
        self,
        filters: AssetFilters,
        sort_key: SortKey,
        page: int,
        now: date | datetime,
    ) -> tuple[Page, RosterSummary]:
        """Filtered, sorted page plus summary counts over the whole collection."""
        assets = await self._repository.list_all()
        ordered = self._query(assets, filters, sort_key, now)
        return paginate(ordered, page, self._page_size), self._summarize(assets, now)

    async def summary(self, now: date | datetime) -> RosterSummary:
        return self._summarize(await self._repository.list_all(), now)

    async def find_by_code(self, code: str) -> Asset | None:
        return find_by_code(await self._repository.list_all(), code)

    async def last_used_revision_number(self) -> str | None:
        return last_used_revision_number(await self._repository.list_all())

    # ── Asset writes ─────────────────────────────────────────────────

    async def create_asset(self, data: AssetCreate, now: datetime) -> Asset:
        values = _trimmed(data.model_dump(), _ASSET_TEXT_FIELDS)
        existing = await self._repository.list_all()
        errors = validate_asset(values, existing, now, min_year=self._min_year)
        if errors:
            raise RecordValidationError("Asset", errors)

        asset = Asset(
            **values,
            status=AssetStatus.PLANNED,
            next_inspection_date=None,
            created_at=now,
        )
        created = await self._repository.create(asset)
        logger.info("Asset created: id=%s revision=%s", created.id, created.revision_number)
        return created

    async def update_asset(self, asset_id: str, data: AssetUpdate, now: datetime) -> Asset:
        current = await self.get_asset(asset_id)
        values = _trimmed(data.model_dump(), _ASSET_TEXT_FIELDS)
        # Lifecycle fields left out of the payload keep their stored values.
        for key in ("status", "next_inspection_date"):
            if key not in data.model_fields_set:
                values[key] = getattr(current, key)

        existing = await self._repository.list_all()
        errors = validate_asset(
            {**values, "id": asset_id}, existing, now, min_year=self._min_year
        )
        if errors:
            raise RecordValidationError("Asset", errors)

        updated = await self._repository.update(replace(current, **values))
        logger.info("Asset updated: id=%s", asset_id)
        return updated

    async def delete_asset(self, asset_id: str) -> bool:
        await self.get_asset(asset_id)
        deleted = await self._repository.delete(asset_id)
        logger.info("Asset deleted: id=%s", asset_id)
        return deleted

    # ── Inspections ──────────────────────────────────────────────────

    async def record_inspection(
        self, asset_id: str, data: InspectionCreate, now: date | datetime
    ) -> Asset | None:
        """Validate and append an inspection, refreshing schedule and status.

        An unknown ``asset_id`` is a no-op and returns None.
        """
        values = _trimmed(data.model_dump(), ("inspector", "notes"))
        errors = validate_inspection(values, now)
        if errors:
            raise RecordValidationError("Inspection", errors)

        asset = await self._repository.get_by_id(asset_id)
        if asset is None:
            logger.warning("Inspection submitted for unknown asset %s ignored", asset_id)
            return None

        inspection = Inspection(asset_id=asset_id, **values)
        updated = await self._repository.add_inspection(
            apply_inspection(asset, inspection), inspection
        )
        logger.info(
            "Inspection recorded: asset=%s result=%s next_due=%s status=%s",
            asset_id,
            inspection.overall_result.value,
            updated.next_inspection_date,
            updated.status.value,
        )

        instrument = instrument_from(inspection)
        if instrument is not None and self._settings_store is not None:
            self._settings_store.save_last_used_instrument(instrument)
        return updated

    def inspection_defaults(
        self, now: date | datetime, inspector_name: str = ""
    ) -> InspectionFormDefaults:
        last = self._settings_store.get_last_used_instrument() if self._settings_store else None
        return inspection_form_defaults(now, inspector_name, last)

    # ── Import / export ──────────────────────────────────────────────

    async def export_csv(
        self, filters: AssetFilters, sort_key: SortKey, now: date | datetime
    ) -> str:
        assets = await self._repository.list_all()
        return roster_export.export_csv(self._query(assets, filters, sort_key, now))

    async def export_json(self) -> str:
        return roster_export.export_json(await self._repository.list_all())

    async def import_assets(self, payload: str | bytes | list[Any]) -> int:
        """Replace the whole collection with an exported document. Returns the count."""
        assets = roster_export.parse_import(payload)
        await self._repository.replace_all(assets)
        logger.info("Imported %d assets (collection replaced)", len(assets))
        return len(assets)

    # ── Helpers ──────────────────────────────────────────────────────

    def _query(
        self,
        assets: list[Asset],
        filters: AssetFilters,
        sort_key: SortKey,
        now: date | datetime,
    ) -> list[Asset]:
        return query_assets(
            assets,
            filters,
            sort_key,
            now,
            due_soon_days=self._due_soon_days,
            recent_days=self._recent_days,
        )

    def _summarize(self, assets: list[Asset], now: date | datetime) -> RosterSummary:
        return summarize(
            assets, now, due_soon_days=self._due_soon_days, recent_days=self._recent_days
        )


