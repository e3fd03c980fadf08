"""
Cascading location pickers for data-entry screens: lot (zone) -> cart
(aisle) -> level (bin).

Only active locations are offered. An unknown warehouse or an empty branch
returns an empty list, which the UI shows as "nothing to select yet".
"""

from typing import List

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.models.inventory.location_models import Location
from app.models.enums.location_depth import LocationDepth
from app.schemas.inventory.location_schemas import LevelOption
from app.services.inventory.warehouse_service import resolve_warehouse_id
from app.utils.location_codes import natural_key
import logging

logger = logging.getLogger(__name__)


async def list_lots(db: AsyncSession, warehouse_id: str) -> List[str]:
    wh_id = await resolve_warehouse_id(db, warehouse_id)
    if not wh_id:
        return []

    result = await db.execute(
        select(Location.zone)
        .where(
            Location.warehouse_id == wh_id,
            Location.is_active.is_(True),
        )
        .distinct()
    )
    return sorted((z for z in result.scalars().all() if z), key=natural_key)


async def list_carts(db: AsyncSession, warehouse_id: str, lot: str) -> List[str]:
    wh_id = await resolve_warehouse_id(db, warehouse_id)
    if not wh_id or not lot:
        return []

    lot = lot.strip().upper()

    result = await db.execute(
        select(Location.aisle)
        .where(
            Location.warehouse_id == wh_id,
            Location.zone == lot,
            Location.aisle.is_not(None),
            Location.is_active.is_(True),
        )
        .distinct()
    )
    return sorted((a for a in result.scalars().all() if a), key=natural_key)


async def list_levels(
    db: AsyncSession,
    warehouse_id: str,
    lot: str,
    cart: str,
) -> List[LevelOption]:
    wh_id = await resolve_warehouse_id(db, warehouse_id)
    if not wh_id or not lot or not cart:
        return []

    lot, cart = lot.strip().upper(), cart.strip().upper()

    result = await db.execute(
        select(Location.id, Location.code, Location.bin_code).where(
            Location.warehouse_id == wh_id,
            Location.zone == lot,
            Location.aisle == cart,
            Location.depth == int(LocationDepth.BIN),
            Location.is_active.is_(True),
        )
    )
    rows = result.all()
    logger.debug(
        "Resolved levels",
        extra={"warehouse_id": wh_id, "lot": lot, "cart": cart, "count": len(rows)},
    )

    return [
        LevelOption(id=row.id, code=row.code, level=row.bin_code)
        for row in sorted(rows, key=lambda r: natural_key(r.bin_code))
    ]
