from .asset_repository import AssetRepository
from .settings_store import SettingsStore

__all__ = [
    "AssetRepository",
    "SettingsStore",
]
