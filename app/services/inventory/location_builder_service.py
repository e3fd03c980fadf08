"""
Guided constructors for the location tree, one per depth.

Each constructor accepts the code the operator confirmed on screen and fails
with CODE_MISMATCH if the server derives a different one from the stored
parent.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums.location_depth import LocationDepth
from app.schemas.inventory.location_schemas import (
    LocationCandidate,
    ZoneCreate,
    AisleCreate,
    BinCreate,
    CodePreviewRequest,
    CodePreviewOut,
    LocationOut,
    AisleCreateOut,
)
from app.services.inventory import location_repository
from app.services.inventory.location_service import map_location
from app.services.inventory.warehouse_service import require_warehouse_id
from app.core.exceptions import AppException
from app.constants.error_codes import ErrorCode
from app.utils.location_codes import level_label
import logging

logger = logging.getLogger(__name__)


async def _require_parent_warehouse(db: AsyncSession, parent_id: str) -> str:
    parent = await location_repository.get_node(db, parent_id)
    if not parent:
        raise AppException(
            404,
            "Parent location not found",
            ErrorCode.PARENT_NOT_FOUND,
            details={"parent_id": parent_id},
        )
    return parent.warehouse_id


# =====================================================
# ZONE (DEPTH 0)
# =====================================================
async def create_zone(
    db: AsyncSession,
    warehouse_id: str,
    payload: ZoneCreate,
) -> LocationOut:
    wh_id = await require_warehouse_id(db, warehouse_id)
    logger.info("Create zone", extra={"warehouse_id": wh_id, "zone": payload.zone})

    node = await location_repository.insert_node(
        db,
        LocationCandidate(
            warehouse_id=wh_id,
            depth=LocationDepth.ZONE,
            label=payload.zone,
            description=payload.description,
            expected_code=payload.code,
        ),
    )
    return map_location(node)


# =====================================================
# AISLE (DEPTH 1) + OPTIONAL LEVELS
# =====================================================
async def create_aisle(db: AsyncSession, payload: AisleCreate) -> AisleCreateOut:
    wh_id = await _require_parent_warehouse(db, payload.parent_id)
    logger.info(
        "Create aisle",
        extra={"parent_id": payload.parent_id, "aisle": payload.aisle, "levels": payload.levels},
    )

    try:
        aisle = await location_repository.insert_node(
            db,
            LocationCandidate(
                warehouse_id=wh_id,
                depth=LocationDepth.AISLE,
                parent_id=payload.parent_id,
                label=payload.aisle,
                description=payload.description,
                attributes={"total_levels": payload.levels},
                expected_code=payload.code,
            ),
            commit=False,
        )

        levels = []
        if payload.levels > 1 and payload.prepopulate_levels:
            for number in range(1, payload.levels + 1):
                level = await location_repository.insert_node(
                    db,
                    LocationCandidate(
                        warehouse_id=wh_id,
                        depth=LocationDepth.BIN,
                        parent_id=aisle.id,
                        label=level_label(number),
                        description=f"Level {number} of {aisle.aisle}",
                        attributes={"level_number": number},
                    ),
                    commit=False,
                )
                levels.append(level)

        await db.commit()

    except AppException:
        # aisle and its levels are created together or not at all
        await db.rollback()
        raise

    return AisleCreateOut(
        aisle=map_location(aisle),
        levels=[map_location(level) for level in levels],
    )


# =====================================================
# BIN (DEPTH 2)
# =====================================================
async def create_bin(db: AsyncSession, payload: BinCreate) -> LocationOut:
    wh_id = await _require_parent_warehouse(db, payload.parent_id)
    logger.info("Create bin", extra={"parent_id": payload.parent_id, "bin_code": payload.bin_code})

    node = await location_repository.insert_node(
        db,
        LocationCandidate(
            warehouse_id=wh_id,
            depth=LocationDepth.BIN,
            parent_id=payload.parent_id,
            label=payload.bin_code,
            description=payload.description,
            attributes=payload.attributes,
            expected_code=payload.code,
        ),
    )
    return map_location(node)


# =====================================================
# CODE PREVIEW
# =====================================================
async def preview_code(db: AsyncSession, payload: CodePreviewRequest) -> CodePreviewOut:
    """The code a constructor would assign, without writing anything."""
    parent = await location_repository.resolve_parent(db, payload.depth, payload.parent_id)
    fields = location_repository.derive_fields(payload.depth, payload.label, parent)
    return CodePreviewOut(**fields)
