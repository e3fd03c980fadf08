from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.utils.response import success_response, APIResponse
from app.services.inventory.warehouse_service import (
    create_warehouse,
    list_warehouses,
    get_warehouse,
)
from app.schemas.inventory.warehouse_schemas import (
    WarehouseCreate,
    WarehouseOut,
    WarehouseListData,
)

router = APIRouter(
    prefix="/warehouses",
    tags=["Warehouses"],
)


# =========================
# CREATE
# =========================
@router.post("/", response_model=APIResponse[WarehouseOut])
async def create_warehouse_api(
    payload: WarehouseCreate,
    db: AsyncSession = Depends(get_db),
):
    warehouse = await create_warehouse(db, payload)
    return success_response("Warehouse created successfully", warehouse)


# =========================
# LIST
# =========================
@router.get("/", response_model=APIResponse[WarehouseListData])
async def list_warehouses_api(
    db: AsyncSession = Depends(get_db),
    active_only: bool = Query(True),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
):
    data = await list_warehouses(
        db=db,
        active_only=active_only,
        page=page,
        page_size=page_size,
    )
    return success_response("Warehouses fetched successfully", data)


# =========================
# GET (id or code)
# =========================
@router.get("/{warehouse_id}", response_model=APIResponse[WarehouseOut])
async def get_warehouse_api(
    warehouse_id: str,
    db: AsyncSession = Depends(get_db),
):
    warehouse = await get_warehouse(db, warehouse_id)
    return success_response("Warehouse fetched successfully", warehouse)
