"""Abstract repository interface (port) for Asset persistence."""

from abc import ABC, abstractmethod

from equipment_registry.domain.entities import Asset, Inspection


class AssetRepository(ABC):
    """Port for asset persistence: implemented in the infrastructure layer.

    Inspections are owned by their asset: they are stored through
    ``add_inspection`` and removed only when the asset is deleted.
    """

    @abstractmethod
    async def list_all(self) -> list[Asset]:
        """Return every asset with its inspections."""
        ...

    @abstractmethod
    async def get_by_id(self, asset_id: str) -> Asset | None:
        """Retrieve a single asset by id."""
        ...

    @abstractmethod
    async def create(self, asset: Asset) -> Asset:
        """Persist a new asset and return it."""
        ...

    @abstractmethod
    async def update(self, asset: Asset) -> Asset:
        """Update an existing asset's own fields (not its inspections)."""
        ...

    @abstractmethod
    async def delete(self, asset_id: str) -> bool:
        """Delete an asset and its inspections. Returns True if deleted."""
        ...

    @abstractmethod
    async def add_inspection(self, asset: Asset, inspection: Inspection) -> Asset:
        """Append an inspection and store the asset's refreshed schedule and status."""
        ...

    @abstractmethod
    async def replace_all(self, assets: list[Asset]) -> None:
        """Replace the whole collection (used by JSON import)."""
        ...
