from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.utils.response import success_response, APIResponse
from app.services.inventory.location_resolver_service import (
    list_lots,
    list_carts,
    list_levels,
)
from app.schemas.inventory.location_schemas import LevelOption

router = APIRouter(
    prefix="/warehouses/{warehouse_id}/lots",
    tags=["Location Picker"],
)


@router.get("/", response_model=APIResponse[List[str]])
async def list_lots_api(
    warehouse_id: str,
    db: AsyncSession = Depends(get_db),
):
    return success_response("Lots fetched successfully", await list_lots(db, warehouse_id))


@router.get("/{lot}/carts", response_model=APIResponse[List[str]])
async def list_carts_api(
    warehouse_id: str,
    lot: str,
    db: AsyncSession = Depends(get_db),
):
    return success_response(
        "Carts fetched successfully", await list_carts(db, warehouse_id, lot)
    )


@router.get("/{lot}/carts/{cart}/levels", response_model=APIResponse[List[LevelOption]])
async def list_levels_api(
    warehouse_id: str,
    lot: str,
    cart: str,
    db: AsyncSession = Depends(get_db),
):
    return success_response(
        "Levels fetched successfully", await list_levels(db, warehouse_id, lot, cart)
    )
