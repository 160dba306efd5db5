"""Domain entities for roles and the operations they may perform."""

from enum import Enum


class UserRole(str, Enum):
    """Role supplied by the identity provider for the current user."""

    ADMINISTRATOR = "Administrator"
    INSPECTOR = "Inspector"
    VIEWER = "Viewer"


class Capability(str, Enum):
    """A named operation that can be granted to a role."""

    VIEW = "view"
    CREATE_ASSET = "create_asset"
    EDIT_ASSET = "edit_asset"
    DELETE_ASSET = "delete_asset"
    RECORD_INSPECTION = "record_inspection"
    IMPORT_DATA = "import_data"
    EXPORT_DATA = "export_data"
    MANAGE_SETTINGS = "manage_settings"
