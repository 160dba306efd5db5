"""Asset repository mirrored to a single JSON file.

Serves as the local offline cache of the roster. The whole collection is held
in memory and rewritten on every change, in the same document format as the
JSON export, so a cache file can be imported elsewhere unchanged.
"""

import asyncio
import logging
from dataclasses import replace
from pathlib import Path

from equipment_registry.application.interfaces import AssetRepository
from equipment_registry.application.services.roster_export import export_json, parse_import
from equipment_registry.domain.entities import Asset, Inspection
from equipment_registry.domain.exceptions import ImportFormatError

logger = logging.getLogger(__name__)


class JsonFileAssetRepository(AssetRepository):
    """Implements the AssetRepository port on top of a JSON document."""

    def __init__(self, path: Path | str):
        self._path = Path(path)
        self._lock = asyncio.Lock()
        self._assets: list[Asset] | None = None

    # ── File access ──────────────────────────────────────────────────

    def _read(self) -> list[Asset]:
        """Read the cache file, returning [] if missing or corrupt."""
        if not self._path.exists():
            return []
        try:
            return parse_import(self._path.read_text("utf-8"))
        except (OSError, ImportFormatError):
            logger.warning("Could not read %s, starting with an empty roster", self._path)
            return []

    def _commit(self, assets: list[Asset]) -> None:
        """Write ``assets`` to disk, then make them the in-memory roster."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(export_json(assets), encoding="utf-8")
        self._assets = assets

    def _loaded(self) -> list[Asset]:
        if self._assets is None:
            self._assets = self._read()
        return self._assets

    def _index_of(self, asset_id: str) -> int | None:
        for index, asset in enumerate(self._loaded()):
            if asset.id == asset_id:
                return index
        return None

    # ── Port implementation ──────────────────────────────────────────

    async def list_all(self) -> list[Asset]:
        return list(self._loaded())

    async def get_by_id(self, asset_id: str) -> Asset | None:
        index = self._index_of(asset_id)
        return None if index is None else self._loaded()[index]

    async def create(self, asset: Asset) -> Asset:
        async with self._lock:
            self._commit([*self._loaded(), asset])
        return asset

    async def update(self, asset: Asset) -> Asset:
        async with self._lock:
            index = self._index_of(asset.id)
            if index is None:
                raise ValueError(f"Asset {asset.id} not found in cache")
            assets = list(self._loaded())
            stored = replace(asset, inspections=assets[index].inspections)
            assets[index] = stored
            self._commit(assets)
        return stored

    async def delete(self, asset_id: str) -> bool:
        async with self._lock:
            index = self._index_of(asset_id)
            if index is None:
                return False
            assets = list(self._loaded())
            del assets[index]
            self._commit(assets)
        return True

    async def add_inspection(self, asset: Asset, inspection: Inspection) -> Asset:
        async with self._lock:
            index = self._index_of(asset.id)
            if index is None:
                raise ValueError(f"Asset {asset.id} not found in cache")
            assets = list(self._loaded())
            current = assets[index]
            stored = replace(
                current,
                inspections=[*current.inspections, inspection],
                next_inspection_date=asset.next_inspection_date,
                status=asset.status,
            )
            assets[index] = stored
            self._commit(assets)
        return stored

    async def replace_all(self, assets: list[Asset]) -> None:
        async with self._lock:
            self._commit(list(assets))
