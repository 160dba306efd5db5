"""Concrete repository implementation for Asset backed by SQLAlchemy."""

from datetime import datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from equipment_registry.application.interfaces import AssetRepository
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
from equipment_registry.infrastructure.database.models import AssetModel, InspectionModel


def _as_utc(value: datetime) -> datetime:
    # SQLite drops the offset on DateTime(timezone=True) columns.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SQLAlchemyAssetRepository(AssetRepository):
    """Implements the AssetRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    # ── Mapping ──────────────────────────────────────────────────────

    def _inspection_to_entity(self, model: InspectionModel) -> Inspection:
        return Inspection(
            id=model.id,
            asset_id=model.asset_id,
            date=model.date,
            inspector=model.inspector,
            type=InspectionType(model.type),
            visual_check=CheckResult(model.visual_check),
            functional_test=CheckResult(model.functional_test),
            overall_result=CheckResult(model.overall_result),
            protective_conductor_resistance=model.protective_conductor_resistance,
            insulation_resistance=model.insulation_resistance,
            leakage_current=model.leakage_current,
            measuring_instrument_name=model.measuring_instrument_name,
            measuring_instrument_serial=model.measuring_instrument_serial,
            measuring_instrument_calib_date=model.measuring_instrument_calib_date,
            notes=model.notes,
        )

    def _inspection_to_model(self, entity: Inspection, asset_id: str) -> InspectionModel:
        return InspectionModel(
            id=entity.id,
            asset_id=asset_id,
            date=entity.date,
            inspector=entity.inspector,
            type=entity.type.value,
            visual_check=entity.visual_check.value,
            functional_test=entity.functional_test.value,
            overall_result=entity.overall_result.value,
            protective_conductor_resistance=entity.protective_conductor_resistance,
            insulation_resistance=entity.insulation_resistance,
            leakage_current=entity.leakage_current,
            measuring_instrument_name=entity.measuring_instrument_name,
            measuring_instrument_serial=entity.measuring_instrument_serial,
            measuring_instrument_calib_date=entity.measuring_instrument_calib_date,
            notes=entity.notes,
        )

    def _to_entity(self, model: AssetModel) -> Asset:
        """Map ORM model → domain entity."""
        return Asset(
            id=model.id,
            name=model.name,
            type=model.type,
            manufacturer=model.manufacturer,
            year=model.year,
            serial_number=model.serial_number,
            revision_number=model.revision_number,
            protection_class=ProtectionClass(model.protection_class),
            usage_group=UsageGroup(model.usage_group),
            category=AssetCategory(model.category),
            status=AssetStatus(model.status),
            next_inspection_date=model.next_inspection_date,
            location=model.location,
            notes=model.notes,
            inspections=[self._inspection_to_entity(i) for i in model.inspections],
            created_at=_as_utc(model.created_at),
        )

    def _to_model(self, entity: Asset) -> AssetModel:
        """Map domain entity → ORM model (for creation)."""
        return AssetModel(
            id=entity.id,
            name=entity.name,
            type=entity.type,
            manufacturer=entity.manufacturer,
            year=entity.year,
            serial_number=entity.serial_number,
            revision_number=entity.revision_number,
            protection_class=entity.protection_class.value,
            usage_group=entity.usage_group.value,
            category=entity.category.value,
            status=entity.status.value,
            next_inspection_date=entity.next_inspection_date,
            location=entity.location,
            notes=entity.notes,
            created_at=entity.created_at,
            inspections=[self._inspection_to_model(i, entity.id) for i in entity.inspections],
        )

    # ── Port implementation ──────────────────────────────────────────

    async def list_all(self) -> list[Asset]:
        stmt = select(AssetModel).order_by(AssetModel.created_at)
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def get_by_id(self, asset_id: str) -> Asset | None:
        result = await self._session.get(AssetModel, asset_id)
        return self._to_entity(result) if result else None

    async def create(self, asset: Asset) -> Asset:
        model = self._to_model(asset)
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def update(self, asset: Asset) -> Asset:
        model = await self._session.get(AssetModel, asset.id)
        if model is None:
            raise ValueError(f"Asset {asset.id} not found in database")
        model.name = asset.name
        model.type = asset.type
        model.manufacturer = asset.manufacturer
        model.year = asset.year
        model.serial_number = asset.serial_number
        model.revision_number = asset.revision_number
        model.protection_class = asset.protection_class.value
        model.usage_group = asset.usage_group.value
        model.category = asset.category.value
        model.status = asset.status.value
        model.next_inspection_date = asset.next_inspection_date
        model.location = asset.location
        model.notes = asset.notes
        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, asset_id: str) -> bool:
        model = await self._session.get(AssetModel, asset_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True

    async def add_inspection(self, asset: Asset, inspection: Inspection) -> Asset:
        model = await self._session.get(AssetModel, asset.id)
        if model is None:
            raise ValueError(f"Asset {asset.id} not found in database")
        model.inspections.append(self._inspection_to_model(inspection, asset.id))
        model.next_inspection_date = asset.next_inspection_date
        model.status = asset.status.value
        await self._session.flush()
        return self._to_entity(model)

    async def replace_all(self, assets: list[Asset]) -> None:
        await self._session.execute(delete(InspectionModel))
        await self._session.execute(delete(AssetModel))
        # Bulk deletes bypass the identity map; drop stale instances before re-adding ids.
        self._session.expunge_all()
        self._session.add_all([self._to_model(a) for a in assets])
        await self._session.flush()
