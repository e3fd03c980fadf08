from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, func

from app.models.inventory.location_models import Location
from app.schemas.inventory.location_schemas import (
    LocationOut,
    LocationUpdate,
    LocationFilter,
    LocationListData,
    LocationTreeNode,
)
from app.services.inventory import location_repository
from app.services.inventory.location_tree import build_tree
from app.services.inventory.warehouse_service import require_warehouse_id
from app.core.exceptions import AppException
from app.constants.error_codes import ErrorCode
import logging

logger = logging.getLogger(__name__)


def map_location(loc: Location) -> LocationOut:
    return LocationOut(
        id=loc.id,
        warehouse_id=loc.warehouse_id,
        parent_id=loc.parent_id,
        depth=loc.depth,
        code=loc.code,
        path=loc.path,
        zone=loc.zone,
        aisle=loc.aisle,
        bin_code=loc.bin_code,
        description=loc.description,
        attributes=loc.attributes or {},
        is_active=loc.is_active,
        version=loc.version,
        created_at=loc.created_at,
        updated_at=loc.updated_at,
    )


async def _require_location(db: AsyncSession, location_id: str) -> Location:
    location = await location_repository.get_node(db, location_id)
    if not location:
        raise AppException(
            404,
            "Location not found",
            ErrorCode.LOCATION_NOT_FOUND,
        )
    return location


async def get_location(db: AsyncSession, location_id: str) -> LocationOut:
    return map_location(await _require_location(db, location_id))


async def list_locations(
    db: AsyncSession,
    warehouse_id: str,
    filters: Optional[LocationFilter] = None,
) -> LocationListData:
    wh_id = await require_warehouse_id(db, warehouse_id)
    logger.info("List locations", extra={"warehouse_id": wh_id})

    nodes = await location_repository.list_nodes(db, wh_id, filters)
    return LocationListData(
        total=len(nodes),
        items=[map_location(n) for n in nodes],
    )


async def get_location_tree(
    db: AsyncSession,
    warehouse_id: str,
    active_only: bool = True,
) -> List[LocationTreeNode]:
    wh_id = await require_warehouse_id(db, warehouse_id)
    nodes = await location_repository.list_nodes(
        db, wh_id, LocationFilter(active_only=active_only)
    )
    return build_tree(map_location(n) for n in nodes)


# =====================================================
# UPDATE DESCRIPTION (OPTIMISTIC LOCK)
# =====================================================
async def update_location(
    db: AsyncSession,
    location_id: str,
    payload: LocationUpdate,
) -> LocationOut:
    current = await _require_location(db, location_id)

    updates = payload.model_dump(exclude_unset=True, exclude={"version"})
    changes = {k: v for k, v in updates.items() if getattr(current, k) != v}
    if not changes:
        raise AppException(
            400,
            "No actual changes detected",
            ErrorCode.VALIDATION_ERROR,
        )

    stmt = (
        update(Location)
        .where(
            Location.id == location_id,
            Location.version == payload.version,
        )
        .values(
            **changes,
            version=Location.version + 1,
        )
        .returning(Location)
    )

    result = await db.execute(stmt)
    location = result.scalar_one_or_none()

    if not location:
        raise AppException(
            409,
            "Location modified by another process",
            ErrorCode.LOCATION_VERSION_CONFLICT,
        )

    await db.commit()
    await db.refresh(location)
    logger.info("Updated location", extra={"code": location.code, "fields": list(changes)})
    return map_location(location)


# =====================================================
# DEACTIVATE / REACTIVATE
# =====================================================
async def deactivate_location(db: AsyncSession, location_id: str) -> LocationOut:
    await _require_location(db, location_id)

    active_children = await db.scalar(
        select(func.count())
        .select_from(Location)
        .where(
            Location.parent_id == location_id,
            Location.is_active.is_(True),
        )
    )
    if active_children:
        raise AppException(
            409,
            "Deactivate the child locations first",
            ErrorCode.LOCATION_HAS_ACTIVE_CHILDREN,
            details={"active_children": active_children},
        )

    stmt = (
        update(Location)
        .where(
            Location.id == location_id,
            Location.is_active.is_(True),
        )
        .values(
            is_active=False,
            version=Location.version + 1,
        )
        .returning(Location)
    )

    result = await db.execute(stmt)
    location = result.scalar_one_or_none()

    if not location:
        raise AppException(
            409,
            "Location already inactive",
            ErrorCode.LOCATION_STATE_INVALID,
        )

    await db.commit()
    await db.refresh(location)
    logger.info("Deactivated location", extra={"code": location.code})
    return map_location(location)


async def reactivate_location(db: AsyncSession, location_id: str) -> LocationOut:
    current = await _require_location(db, location_id)

    if current.parent_id:
        parent = await location_repository.get_node(db, current.parent_id)
        if parent and not parent.is_active:
            raise AppException(
                409,
                f"Parent location {parent.code} is inactive",
                ErrorCode.INACTIVE_PARENT,
                details={"parent_id": parent.id},
            )

    stmt = (
        update(Location)
        .where(
            Location.id == location_id,
            Location.is_active.is_(False),
        )
        .values(
            is_active=True,
            version=Location.version + 1,
        )
        .returning(Location)
    )

    result = await db.execute(stmt)
    location = result.scalar_one_or_none()

    if not location:
        raise AppException(
            409,
            "Location already active",
            ErrorCode.LOCATION_STATE_INVALID,
        )

    await db.commit()
    await db.refresh(location)
    logger.info("Reactivated location", extra={"code": location.code})
    return map_location(location)
