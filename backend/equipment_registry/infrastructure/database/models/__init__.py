from .asset import AssetModel, InspectionModel

__all__ = [
    "AssetModel",
    "InspectionModel",
]
