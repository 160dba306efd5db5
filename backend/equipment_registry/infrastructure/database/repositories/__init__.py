from .asset_repository import SQLAlchemyAssetRepository

__all__ = [
    "SQLAlchemyAssetRepository",
]
