"""Roster export: CSV rows of the sorted roster and JSON document import/export."""

import csv
import io
import json
import logging
from collections.abc import Sequence
from typing import Any

from pydantic import TypeAdapter, ValidationError

from equipment_registry.application.schemas.asset import AssetSchema
from equipment_registry.domain.entities import Asset, AssetStatus
from equipment_registry.domain.exceptions import ImportFormatError

logger = logging.getLogger(__name__)

CSV_BOM = "\ufeff"

CSV_COLUMNS = [
    "Revision number",
    "Name",
    "Type",
    "Protection class",
    "Status",
    "Manufacturer",
    "Serial number",
    "Year",
    "Usage group",
    "Category",
    "Location",
    "Next inspection date",
]

_ASSET_LIST = TypeAdapter(list[AssetSchema])


def _csv_row(asset: Asset) -> list[str]:
    due = asset.next_inspection_date
    return [
        asset.revision_number,
        asset.name,
        asset.type,
        asset.protection_class.value,
        asset.status.value,
        asset.manufacturer,
        asset.serial_number,
        str(asset.year),
        asset.usage_group.value,
        asset.category.value,
        asset.location or "",
        due.isoformat() if due else AssetStatus.PLANNED.value,
    ]


def export_csv(assets: Sequence[Asset]) -> str:
    """Render the (already filtered and sorted) roster as CSV.

    Output starts with a UTF-8 BOM and quotes every field so spreadsheet
    applications keep leading zeros and diacritics intact.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_COLUMNS)
    for asset in assets:
        writer.writerow(_csv_row(asset))
    return CSV_BOM + buffer.getvalue()


def export_json(assets: Sequence[Asset]) -> str:
    """Serialize the full collection, inspections included, with camelCase keys."""
    documents = [AssetSchema.model_validate(a, from_attributes=True) for a in assets]
    return _ASSET_LIST.dump_json(documents, by_alias=True, indent=2).decode("utf-8")


def parse_import(payload: str | bytes | list[Any]) -> list[Asset]:
    """Parse an exported JSON document back into domain assets.

    The document must be a list of objects, each with at least ``id`` and
    ``name``. Anything else raises ImportFormatError.
    """
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise ImportFormatError(f"Invalid JSON: {exc.msg}") from exc

    if not isinstance(payload, list) or not all(
        isinstance(item, dict) and "id" in item and "name" in item for item in payload
    ):
        raise ImportFormatError("Expected a list of assets, each with 'id' and 'name'.")

    try:
        documents = _ASSET_LIST.validate_python(payload)
    except ValidationError as exc:
        raise ImportFormatError(f"Invalid asset document: {exc.error_count()} error(s)") from exc

    logger.info("Parsed %d assets from import document", len(documents))
    return [doc.to_entity() for doc in documents]
