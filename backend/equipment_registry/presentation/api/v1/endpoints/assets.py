"""Asset roster, inspection log and import/export endpoints."""

import datetime as dt

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from pydantic.alias_generators import to_camel

from equipment_registry.application.schemas import (
    AssetCreate,
    AssetFormDefaults,
    AssetSchema,
    AssetUpdate,
    InspectionCreate,
    InspectionFormDefaults,
    PageResponse,
    RosterResponse,
    SummaryResponse,
)
from equipment_registry.application.services import AssetFilters, AssetService, SortKey, SummaryTile
from equipment_registry.application.services.form_defaults import asset_form_defaults
from equipment_registry.domain.entities import (
    AssetCategory,
    AssetStatus,
    Capability,
    CheckResult,
    InspectionType,
)
from equipment_registry.domain.exceptions import (
    EntityNotFoundError,
    ImportFormatError,
    RecordValidationError,
)
from equipment_registry.infrastructure.dependencies import (
    get_asset_service,
    get_current_user_name,
    require_capability,
)

router = APIRouter(prefix="/assets", tags=["Assets"])

_can_view = [Depends(require_capability(Capability.VIEW))]
_can_export = [Depends(require_capability(Capability.EXPORT_DATA))]


def _now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def _validation_failed(exc: RecordValidationError) -> HTTPException:
    errors = {to_camel(field): message for field, message in exc.errors.items()}
    return HTTPException(
        status_code=422,
        detail={"errors": errors},
    )


def _not_found(exc: EntityNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


def roster_filters(
    summary_tile: SummaryTile | None = Query(None, alias="summaryTile"),
    search: str = Query("", description="Substring of name, serial number or revision number"),
    status_: AssetStatus | None = Query(None, alias="status"),
    manufacturer: str = Query(""),
    type_: str = Query("", alias="type"),
    year: int | None = Query(None),
    location: str = Query(""),
    category: AssetCategory | None = Query(None),
    inspection_type: InspectionType | None = Query(None, alias="inspectionType"),
    inspection_result: CheckResult | None = Query(None, alias="inspectionResult"),
    next_inspection_from: dt.date | None = Query(None, alias="nextInspectionFrom"),
    next_inspection_to: dt.date | None = Query(None, alias="nextInspectionTo"),
) -> AssetFilters:
    """Collect roster filter query parameters."""
    return AssetFilters(
        summary_tile=summary_tile,
        search=search,
        status=status_,
        manufacturer=manufacturer,
        type=type_,
        year=year,
        location=location,
        category=category,
        inspection_type=inspection_type,
        inspection_result=inspection_result,
        next_inspection_from=next_inspection_from,
        next_inspection_to=next_inspection_to,
    )


# ── Roster ───────────────────────────────────────────────────────────


@router.get("", response_model=RosterResponse, dependencies=_can_view)
async def list_assets(
    filters: AssetFilters = Depends(roster_filters),
    sort: SortKey = Query(SortKey.NEXT_INSPECTION_DATE),
    page: int = Query(1, ge=1),
    service: AssetService = Depends(get_asset_service),
) -> RosterResponse:
    """Retrieve one page of the filtered, sorted roster with the summary tiles."""
    roster_page, summary = await service.roster(filters, sort, page, _now())
    return RosterResponse(
        page=PageResponse.from_page(roster_page),
        summary=SummaryResponse.from_summary(summary),
    )


@router.get("/summary", response_model=SummaryResponse, dependencies=_can_view)
async def get_summary(
    service: AssetService = Depends(get_asset_service),
) -> SummaryResponse:
    """Counts over the whole collection."""
    return SummaryResponse.from_summary(await service.summary(_now()))


@router.get("/lookup", response_model=AssetSchema, dependencies=_can_view)
async def lookup_asset(
    code: str = Query(..., description="Decoded barcode / QR content"),
    service: AssetService = Depends(get_asset_service),
) -> AssetSchema:
    """Find the asset whose revision number matches a scanned code."""
    asset = await service.find_by_code(code)
    if asset is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No asset with revision number '{code.strip()}'",
        )
    return AssetSchema.model_validate(asset, from_attributes=True)


@router.get("/last-revision-number", dependencies=_can_view)
async def get_last_revision_number(
    service: AssetService = Depends(get_asset_service),
) -> dict:
    """Revision number of the most recently created asset, as a numbering hint."""
    return {"revisionNumber": await service.last_used_revision_number()}


# ── Import / export ──────────────────────────────────────────────────


@router.get("/export.json", dependencies=_can_export)
async def export_json(
    service: AssetService = Depends(get_asset_service),
) -> Response:
    """Download the whole collection, inspections included."""
    filename = f"assets-{_now().date().isoformat()}.json"
    return Response(
        content=await service.export_json(),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/export.csv", dependencies=_can_export)
async def export_csv(
    filters: AssetFilters = Depends(roster_filters),
    sort: SortKey = Query(SortKey.NEXT_INSPECTION_DATE),
    service: AssetService = Depends(get_asset_service),
) -> Response:
    """Download the filtered, sorted roster as CSV."""
    filename = f"assets-{_now().date().isoformat()}.csv"
    return Response(
        content=await service.export_csv(filters, sort, _now()),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post(
    "/import",
    dependencies=[Depends(require_capability(Capability.IMPORT_DATA))],
)
async def import_assets(
    request: Request,
    service: AssetService = Depends(get_asset_service),
) -> dict:
    """Replace the collection with a previously exported JSON document."""
    try:
        count = await service.import_assets(await request.body())
    except ImportFormatError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    return {"imported": count}


# ── Form defaults ────────────────────────────────────────────────────


@router.get(
    "/form-defaults",
    response_model=AssetFormDefaults,
    dependencies=[Depends(require_capability(Capability.CREATE_ASSET))],
)
async def get_asset_form_defaults() -> AssetFormDefaults:
    """Prefilled values for a new asset."""
    return asset_form_defaults(_now())


# ── Single asset ─────────────────────────────────────────────────────


@router.get("/{asset_id}", response_model=AssetSchema, dependencies=_can_view)
async def get_asset(
    asset_id: str,
    service: AssetService = Depends(get_asset_service),
) -> AssetSchema:
    """Retrieve a single asset with its inspections."""
    try:
        asset = await service.get_asset(asset_id)
    except EntityNotFoundError as e:
        raise _not_found(e)
    return AssetSchema.model_validate(asset, from_attributes=True)


@router.post(
    "",
    response_model=AssetSchema,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_capability(Capability.CREATE_ASSET))],
)
async def create_asset(
    data: AssetCreate,
    service: AssetService = Depends(get_asset_service),
) -> AssetSchema:
    """Register a new asset. It starts as Planned with no due date."""
    try:
        asset = await service.create_asset(data, _now())
    except RecordValidationError as e:
        raise _validation_failed(e)
    return AssetSchema.model_validate(asset, from_attributes=True)


@router.put(
    "/{asset_id}",
    response_model=AssetSchema,
    dependencies=[Depends(require_capability(Capability.EDIT_ASSET))],
)
async def update_asset(
    asset_id: str,
    data: AssetUpdate,
    service: AssetService = Depends(get_asset_service),
) -> AssetSchema:
    """Update an asset's own fields. Inspections are left untouched."""
    try:
        asset = await service.update_asset(asset_id, data, _now())
    except EntityNotFoundError as e:
        raise _not_found(e)
    except RecordValidationError as e:
        raise _validation_failed(e)
    return AssetSchema.model_validate(asset, from_attributes=True)


@router.delete(
    "/{asset_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_capability(Capability.DELETE_ASSET))],
)
async def delete_asset(
    asset_id: str,
    service: AssetService = Depends(get_asset_service),
) -> None:
    """Delete an asset together with its inspections."""
    try:
        await service.delete_asset(asset_id)
    except EntityNotFoundError as e:
        raise _not_found(e)


# ── Inspections ──────────────────────────────────────────────────────


@router.post(
    "/{asset_id}/inspections",
    response_model=AssetSchema,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_capability(Capability.RECORD_INSPECTION))],
)
async def record_inspection(
    asset_id: str,
    data: InspectionCreate,
    service: AssetService = Depends(get_asset_service),
) -> AssetSchema:
    """Log an inspection; the asset's next due date and status are recomputed."""
    try:
        asset = await service.record_inspection(asset_id, data, _now())
    except RecordValidationError as e:
        raise _validation_failed(e)
    if asset is None:
        raise _not_found(EntityNotFoundError("Asset", asset_id))
    return AssetSchema.model_validate(asset, from_attributes=True)


@router.get(
    "/{asset_id}/inspections/form-defaults",
    response_model=InspectionFormDefaults,
    dependencies=[Depends(require_capability(Capability.RECORD_INSPECTION))],
)
async def get_inspection_form_defaults(
    asset_id: str,
    inspector_name: str = Depends(get_current_user_name),
    service: AssetService = Depends(get_asset_service),
) -> InspectionFormDefaults:
    """Prefilled values for a new inspection of the given asset."""
    try:
        await service.get_asset(asset_id)
    except EntityNotFoundError as e:
        raise _not_found(e)
    return service.inspection_defaults(_now(), inspector_name)
