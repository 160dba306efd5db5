"""V1 API router: aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from equipment_registry.presentation.api.v1.endpoints.health import router as health_router
from equipment_registry.presentation.api.v1.endpoints.assets import router as assets_router
from equipment_registry.presentation.api.v1.endpoints.settings import router as settings_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(assets_router)
router.include_router(settings_router)
