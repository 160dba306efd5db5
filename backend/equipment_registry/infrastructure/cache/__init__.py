from .json_asset_repository import JsonFileAssetRepository
from .json_settings_store import JsonSettingsStore

__all__ = [
    "JsonFileAssetRepository",
    "JsonSettingsStore",
]
