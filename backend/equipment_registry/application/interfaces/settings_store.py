"""Abstract interface (port) for small persisted user preferences."""

from abc import ABC, abstractmethod

from equipment_registry.domain.entities import LastUsedInstrument, OperatorInfo


class SettingsStore(ABC):
    """Port for the operator details and the last used measuring instrument."""

    @abstractmethod
    def get_last_used_instrument(self) -> LastUsedInstrument | None:
        ...

    @abstractmethod
    def save_last_used_instrument(self, instrument: LastUsedInstrument) -> None:
        ...

    @abstractmethod
    def get_operator_info(self) -> OperatorInfo:
        """Return the stored operator, or an empty one when none was saved."""
        ...

    @abstractmethod
    def save_operator_info(self, info: OperatorInfo) -> OperatorInfo:
        ...
