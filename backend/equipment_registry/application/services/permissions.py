"""Capability checks: a single gate callers invoke before delegating to the core.

The scheduler, validator, query engine and asset service stay permission-agnostic;
only the HTTP layer consults this module, through a request dependency.
"""

from equipment_registry.domain.entities import Capability, UserRole
from equipment_registry.domain.exceptions import PermissionDeniedError

ROLE_CAPABILITIES: dict[UserRole, frozenset[Capability]] = {
    UserRole.ADMINISTRATOR: frozenset(Capability),
    UserRole.INSPECTOR: frozenset({
        Capability.VIEW,
        Capability.CREATE_ASSET,
        Capability.RECORD_INSPECTION,
        Capability.EXPORT_DATA,
    }),
    UserRole.VIEWER: frozenset({
        Capability.VIEW,
        Capability.EXPORT_DATA,
    }),
}


def has_capability(role: UserRole | str | None, capability: Capability) -> bool:
    """Return True when ``role`` may perform ``capability``. Unknown roles may do nothing."""
    try:
        resolved = UserRole(role)
    except ValueError:
        return False
    return capability in ROLE_CAPABILITIES.get(resolved, frozenset())


def ensure_capability(role: UserRole | str | None, capability: Capability) -> None:
    """Raise PermissionDeniedError unless ``role`` may perform ``capability``."""
    if not has_capability(role, capability):
        role_name = role.value if isinstance(role, UserRole) else str(role)
        raise PermissionDeniedError(role_name, capability.value)
