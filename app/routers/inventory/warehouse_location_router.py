from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.utils.response import success_response, APIResponse
from app.models.enums.location_depth import LocationDepth
from app.services.inventory.location_builder_service import create_zone
from app.services.inventory.location_service import list_locations, get_location_tree
from app.services.inventory.location_tree import render_tree
from app.schemas.inventory.location_schemas import (
    ZoneCreate,
    LocationOut,
    LocationFilter,
    LocationListData,
    LocationTreeNode,
)

router = APIRouter(
    prefix="/warehouses/{warehouse_id}/locations",
    tags=["Locations"],
)


# =========================
# CREATE ZONE
# =========================
@router.post("/zones", response_model=APIResponse[LocationOut])
async def create_zone_api(
    warehouse_id: str,
    payload: ZoneCreate,
    db: AsyncSession = Depends(get_db),
):
    zone = await create_zone(db, warehouse_id, payload)
    return success_response("Zone created successfully", zone)


# =========================
# LIST (filtered)
# =========================
@router.get("/", response_model=APIResponse[LocationListData])
async def list_locations_api(
    warehouse_id: str,
    db: AsyncSession = Depends(get_db),
    depth: Optional[int] = Query(None, ge=0, le=2),
    parent_id: Optional[str] = Query(None),
    zone: Optional[str] = Query(None),
    aisle: Optional[str] = Query(None),
    active_only: bool = Query(True),
):
    data = await list_locations(
        db,
        warehouse_id,
        LocationFilter(
            depth=LocationDepth(depth) if depth is not None else None,
            parent_id=parent_id,
            zone=zone,
            aisle=aisle,
            active_only=active_only,
        ),
    )
    return success_response("Locations fetched successfully", data)


# =========================
# TREE
# =========================
@router.get("/tree", response_model=APIResponse[List[LocationTreeNode]])
async def location_tree_api(
    warehouse_id: str,
    db: AsyncSession = Depends(get_db),
    active_only: bool = Query(True),
    fmt: str = Query("json", alias="format", pattern="^(json|text)$"),
):
    forest = await get_location_tree(db, warehouse_id, active_only=active_only)
    if fmt == "text":
        return PlainTextResponse(render_tree(forest))
    return success_response("Location tree fetched successfully", forest)
