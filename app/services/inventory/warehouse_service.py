from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, or_
from sqlalchemy.exc import IntegrityError

from app.models.inventory.warehouse_models import Warehouse
from app.schemas.inventory.warehouse_schemas import (
    WarehouseCreate,
    WarehouseOut,
    WarehouseListData,
)
from app.core.exceptions import AppException
from app.constants.error_codes import ErrorCode
import logging

logger = logging.getLogger(__name__)


def _map_warehouse(wh: Warehouse) -> WarehouseOut:
    return WarehouseOut(
        id=wh.id,
        code=wh.code,
        name=wh.name,
        is_active=wh.is_active,
        created_at=wh.created_at,
        updated_at=wh.updated_at,
    )


async def resolve_warehouse_id(db: AsyncSession, identifier: Optional[str]) -> Optional[str]:
    """Accept a warehouse id or code and return the id, or None if unknown."""
    if not identifier:
        return None

    return await db.scalar(
        select(Warehouse.id).where(
            or_(Warehouse.id == identifier, Warehouse.code == identifier)
        )
    )


async def require_warehouse_id(db: AsyncSession, identifier: str) -> str:
    warehouse_id = await resolve_warehouse_id(db, identifier)
    if not warehouse_id:
        raise AppException(
            404,
            "Warehouse not found",
            ErrorCode.WAREHOUSE_NOT_FOUND,
            details={"warehouse": identifier},
        )
    return warehouse_id


async def create_warehouse(db: AsyncSession, payload: WarehouseCreate) -> WarehouseOut:
    code = payload.code.strip()
    logger.info("Create warehouse", extra={"code": code})

    exists = await db.scalar(select(Warehouse.id).where(Warehouse.code == code))
    if exists:
        raise AppException(
            409,
            "Warehouse code already exists",
            ErrorCode.WAREHOUSE_CODE_EXISTS,
        )

    warehouse = Warehouse(code=code, name=payload.name.strip(), is_active=True)
    db.add(warehouse)

    try:
        await db.commit()
    except IntegrityError:
        # race-condition safety net
        await db.rollback()
        raise AppException(
            409,
            "Warehouse code already exists",
            ErrorCode.WAREHOUSE_CODE_EXISTS,
        )

    return _map_warehouse(warehouse)


async def get_warehouse(db: AsyncSession, identifier: str) -> WarehouseOut:
    warehouse_id = await require_warehouse_id(db, identifier)
    return _map_warehouse(await db.get(Warehouse, warehouse_id))


async def list_warehouses(
    db: AsyncSession,
    active_only: bool,
    page: int,
    page_size: int,
) -> WarehouseListData:
    query = select(Warehouse)

    if active_only:
        query = query.where(Warehouse.is_active.is_(True))

    total = await db.scalar(select(func.count()).select_from(query.subquery()))

    result = await db.execute(
        query.order_by(Warehouse.code)
        .offset((page - 1) * page_size)
        .limit(page_size)
    )

    return WarehouseListData(
        total=total or 0,
        items=[_map_warehouse(w) for w in result.scalars().all()],
    )
