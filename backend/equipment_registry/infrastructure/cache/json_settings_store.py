"""User preferences persisted to a JSON overrides file."""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from equipment_registry.application.interfaces import SettingsStore
from equipment_registry.domain.entities import LastUsedInstrument, OperatorInfo

logger = logging.getLogger(__name__)

LAST_USED_INSTRUMENT_KEY = "lastUsedInstrument"
OPERATOR_INFO_KEY = "operatorInfo"

_INSTRUMENT = TypeAdapter(LastUsedInstrument)
_OPERATOR = TypeAdapter(OperatorInfo)


class JsonSettingsStore(SettingsStore):
    """Stores the operator details and the last used measuring instrument in one file."""

    def __init__(self, path: Path | str):
        self._path = Path(path)

    def _read_overrides(self) -> dict[str, Any]:
        """Read the JSON overrides file, returning {} if missing or corrupt."""
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except (OSError, ValueError):
            logger.warning("Could not read %s, using defaults", self._path)
            return {}
        return data if isinstance(data, dict) else {}

    def _write_overrides(self, data: dict[str, Any]) -> None:
        """Persist overrides to the JSON file."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def get_last_used_instrument(self) -> LastUsedInstrument | None:
        raw = self._read_overrides().get(LAST_USED_INSTRUMENT_KEY)
        if raw is None:
            return None
        try:
            instrument = _INSTRUMENT.validate_python(raw)
        except ValidationError:
            logger.warning("Ignoring malformed %s in %s", LAST_USED_INSTRUMENT_KEY, self._path)
            return None
        return None if instrument.is_empty() else instrument

    def save_last_used_instrument(self, instrument: LastUsedInstrument) -> None:
        if instrument.is_empty():
            return
        overrides = self._read_overrides()
        overrides[LAST_USED_INSTRUMENT_KEY] = _INSTRUMENT.dump_python(instrument, mode="json")
        self._write_overrides(overrides)
        logger.info("Last used instrument remembered: %s", instrument.measuring_instrument_name)

    def get_operator_info(self) -> OperatorInfo:
        raw = self._read_overrides().get(OPERATOR_INFO_KEY)
        if raw is None:
            return OperatorInfo()
        try:
            return _OPERATOR.validate_python(raw)
        except ValidationError:
            logger.warning("Ignoring malformed %s in %s", OPERATOR_INFO_KEY, self._path)
            return OperatorInfo()

    def save_operator_info(self, info: OperatorInfo) -> OperatorInfo:
        overrides = self._read_overrides()
        overrides[OPERATOR_INFO_KEY] = _OPERATOR.dump_python(info, mode="json")
        self._write_overrides(overrides)
        logger.info("Operator details updated: %s", info.name)
        return info
