"""FastAPI dependency injection: wires infrastructure to application layer."""

from collections.abc import AsyncGenerator, Callable
from functools import lru_cache

from fastapi import Depends, Header, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from equipment_registry.application.interfaces import AssetRepository, SettingsStore
from equipment_registry.application.services import AssetService
from equipment_registry.application.services.permissions import ensure_capability
from equipment_registry.config import get_settings
from equipment_registry.domain.entities import Capability, UserRole
from equipment_registry.domain.exceptions import PermissionDeniedError
from equipment_registry.infrastructure.cache import JsonFileAssetRepository, JsonSettingsStore
from equipment_registry.infrastructure.database.repositories import SQLAlchemyAssetRepository
from equipment_registry.infrastructure.database.session import get_db_session


@lru_cache
def _json_repository(path: str) -> JsonFileAssetRepository:
    # One instance per file so its write lock is shared across requests.
    return JsonFileAssetRepository(path)


async def get_asset_repository(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AssetRepository, None]:
    """Provides the configured AssetRepository (database or JSON cache)."""
    settings = get_settings()
    if settings.storage_backend == "json":
        yield _json_repository(settings.json_cache_file)
    else:
        yield SQLAlchemyAssetRepository(session)


def get_settings_store() -> SettingsStore:
    return JsonSettingsStore(get_settings().settings_file)


async def get_asset_service(
    repository: AssetRepository = Depends(get_asset_repository),
    settings_store: SettingsStore = Depends(get_settings_store),
) -> AsyncGenerator[AssetService, None]:
    """Provides an AssetService instance with its repository wired up."""
    settings = get_settings()
    yield AssetService(
        repository,
        settings_store,
        page_size=settings.page_size,
        due_soon_days=settings.due_soon_days,
        recent_days=settings.recent_days,
        min_year=settings.min_manufacture_year,
    )


def get_current_role(x_user_role: str | None = Header(default=None)) -> str:
    """Role of the already-authenticated caller; Viewer when the header is absent."""
    if x_user_role is None or not x_user_role.strip():
        return UserRole.VIEWER.value
    return x_user_role.strip()


def get_current_user_name(x_user_name: str | None = Header(default=None)) -> str:
    return (x_user_name or "").strip()


def require_capability(capability: Capability) -> Callable[..., str]:
    """Build a dependency that rejects the request with 403 unless the role is allowed."""

    def _check(role: str = Depends(get_current_role)) -> str:
        try:
            ensure_capability(role, capability)
        except PermissionDeniedError as exc:
            raise HTTPException(status_code=403, detail=str(exc))
        return role

    return _check
