from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.utils.response import success_response, APIResponse
from app.services.inventory.layout_service import save_layout, load_layout
from app.services.inventory.layout_compiler_service import generate_locations_from_layout
from app.schemas.inventory.layout_schemas import (
    WarehouseLayoutSave,
    WarehouseLayoutOut,
    LayoutCompileResult,
)

router = APIRouter(
    prefix="/warehouses/{warehouse_id}/layout",
    tags=["Warehouse Layout"],
)


@router.put("/", response_model=APIResponse[WarehouseLayoutOut])
async def save_layout_api(
    warehouse_id: str,
    payload: WarehouseLayoutSave,
    db: AsyncSession = Depends(get_db),
):
    layout = await save_layout(db, warehouse_id, payload)
    return success_response("Layout saved successfully", layout)


@router.get("/", response_model=APIResponse[WarehouseLayoutOut])
async def load_layout_api(
    warehouse_id: str,
    db: AsyncSession = Depends(get_db),
):
    layout = await load_layout(db, warehouse_id)
    return success_response("Layout fetched successfully", layout)


@router.post("/generate", response_model=APIResponse[LayoutCompileResult])
async def generate_locations_api(
    warehouse_id: str,
    db: AsyncSession = Depends(get_db),
):
    result = await generate_locations_from_layout(db, warehouse_id)
    return success_response(
        f"Locations generated: {result.zones_created} zones, "
        f"{result.aisles_created} aisles, {result.bins_created} bins",
        result,
    )
