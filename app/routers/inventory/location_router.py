from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.utils.response import success_response, APIResponse
from app.services.inventory.location_builder_service import (
    create_aisle,
    create_bin,
    preview_code,
)
from app.services.inventory.location_service import (
    get_location,
    update_location,
    deactivate_location,
    reactivate_location,
)
from app.schemas.inventory.location_schemas import (
    AisleCreate,
    AisleCreateOut,
    BinCreate,
    CodePreviewRequest,
    CodePreviewOut,
    LocationOut,
    LocationUpdate,
)

router = APIRouter(
    prefix="/locations",
    tags=["Locations"],
)


# =========================
# CREATE AISLE (+ LEVELS)
# =========================
@router.post("/aisles", response_model=APIResponse[AisleCreateOut])
async def create_aisle_api(
    payload: AisleCreate,
    db: AsyncSession = Depends(get_db),
):
    data = await create_aisle(db, payload)
    return success_response(
        f"Aisle created with {len(data.levels)} levels successfully", data
    )


# =========================
# CREATE BIN
# =========================
@router.post("/bins", response_model=APIResponse[LocationOut])
async def create_bin_api(
    payload: BinCreate,
    db: AsyncSession = Depends(get_db),
):
    bin_ = await create_bin(db, payload)
    return success_response("Bin created successfully", bin_)


# =========================
# CODE PREVIEW
# =========================
@router.post("/preview-code", response_model=APIResponse[CodePreviewOut])
async def preview_code_api(
    payload: CodePreviewRequest,
    db: AsyncSession = Depends(get_db),
):
    data = await preview_code(db, payload)
    return success_response("Code derived successfully", data)


# =========================
# GET
# =========================
@router.get("/{location_id}", response_model=APIResponse[LocationOut])
async def get_location_api(
    location_id: str,
    db: AsyncSession = Depends(get_db),
):
    location = await get_location(db, location_id)
    return success_response("Location fetched successfully", location)


# =========================
# UPDATE
# =========================
@router.patch("/{location_id}", response_model=APIResponse[LocationOut])
async def update_location_api(
    location_id: str,
    payload: LocationUpdate,
    db: AsyncSession = Depends(get_db),
):
    location = await update_location(db, location_id, payload)
    return success_response("Location updated successfully", location)


# =========================
# DEACTIVATE
# =========================
@router.patch(
    "/{location_id}/deactivate",
    response_model=APIResponse[LocationOut],
)
async def deactivate_location_api(
    location_id: str,
    db: AsyncSession = Depends(get_db),
):
    location = await deactivate_location(db, location_id)
    return success_response("Location deactivated successfully", location)


# =========================
# REACTIVATE
# =========================
@router.patch(
    "/{location_id}/activate",
    response_model=APIResponse[LocationOut],
)
async def reactivate_location_api(
    location_id: str,
    db: AsyncSession = Depends(get_db),
):
    location = await reactivate_location(db, location_id)
    return success_response("Location reactivated successfully", location)
