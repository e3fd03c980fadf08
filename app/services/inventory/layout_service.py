from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from app.models.inventory.warehouse_layout_models import WarehouseLayout
from app.schemas.inventory.layout_schemas import (
    WarehouseLayoutDocument,
    WarehouseLayoutSave,
    WarehouseLayoutOut,
)
from app.services.inventory.warehouse_service import require_warehouse_id
from app.core.exceptions import AppException
from app.constants.error_codes import ErrorCode
from app.constants.locations import LAYOUT_DOCUMENT_VERSION
import logging

logger = logging.getLogger(__name__)


async def _get_layout_row(db: AsyncSession, warehouse_id: str) -> Optional[WarehouseLayout]:
    return await db.scalar(
        select(WarehouseLayout).where(WarehouseLayout.warehouse_id == warehouse_id)
    )


async def get_layout_document(
    db: AsyncSession,
    warehouse_id: str,
) -> Optional[WarehouseLayoutDocument]:
    """Stored layout of a (resolved) warehouse id, or None if never saved."""
    row = await _get_layout_row(db, warehouse_id)
    if row is None:
        return None
    return WarehouseLayoutDocument.model_validate(row.layout_data)


async def save_layout(
    db: AsyncSession,
    warehouse_id: str,
    payload: WarehouseLayoutSave,
) -> WarehouseLayoutOut:
    wh_id = await require_warehouse_id(db, warehouse_id)
    logger.info(
        "Save warehouse layout",
        extra={"warehouse_id": wh_id, "components": len(payload.components)},
    )

    document = WarehouseLayoutDocument(
        version=LAYOUT_DOCUMENT_VERSION,
        components=payload.components,
    )
    data = document.model_dump(mode="json", by_alias=True)

    row = await _get_layout_row(db, wh_id)
    if row is None:
        row = WarehouseLayout(warehouse_id=wh_id, layout_data=data)
        db.add(row)
    else:
        row.layout_data = data

    try:
        await db.commit()
    except IntegrityError:
        # another editor created the row first
        await db.rollback()
        raise AppException(
            409,
            "Layout was saved by another process, reload and retry",
            ErrorCode.CONFLICT,
        )

    await db.refresh(row)
    return WarehouseLayoutOut(
        warehouse_id=wh_id,
        version=document.version,
        components=document.components,
        updated_at=row.updated_at or row.created_at,
    )


async def load_layout(db: AsyncSession, warehouse_id: str) -> WarehouseLayoutOut:
    """Current layout; an empty document when none has been saved yet."""
    wh_id = await require_warehouse_id(db, warehouse_id)

    row = await _get_layout_row(db, wh_id)
    if row is None:
        return WarehouseLayoutOut(
            warehouse_id=wh_id,
            version=LAYOUT_DOCUMENT_VERSION,
            components=[],
        )

    document = WarehouseLayoutDocument.model_validate(row.layout_data)
    return WarehouseLayoutOut(
        warehouse_id=wh_id,
        version=document.version,
        components=document.components,
        updated_at=row.updated_at or row.created_at,
    )
