"""Administrator settings endpoints."""

from fastapi import APIRouter, Depends

from equipment_registry.application.interfaces import SettingsStore
from equipment_registry.application.schemas import OperatorInfoSchema
from equipment_registry.domain.entities import Capability
from equipment_registry.infrastructure.dependencies import get_settings_store, require_capability

router = APIRouter(
    prefix="/settings",
    tags=["Settings"],
    dependencies=[Depends(require_capability(Capability.MANAGE_SETTINGS))],
)


@router.get("/operator", response_model=OperatorInfoSchema)
async def get_operator_info(
    store: SettingsStore = Depends(get_settings_store),
) -> OperatorInfoSchema:
    """Current operator details; empty fields until an administrator saves them."""
    return OperatorInfoSchema.model_validate(store.get_operator_info())


@router.put("/operator", response_model=OperatorInfoSchema)
async def update_operator_info(
    data: OperatorInfoSchema,
    store: SettingsStore = Depends(get_settings_store),
) -> OperatorInfoSchema:
    """Replace the operator details."""
    return OperatorInfoSchema.model_validate(store.save_operator_info(data.to_entity()))
