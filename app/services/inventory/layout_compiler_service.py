"""
Derive the location tree from a saved warehouse layout.

Parents are found purely by rectangle containment (first match in layout
order). Rectangles that cannot be placed are skipped, never fatal; each skip
is reported with its reason next to the created counts. Every insert commits
on its own, so a run can stop half way and is safe to repeat: a node that
already exists at the same place in the tree is reused as the parent instead
of being created again.
"""

from typing import Dict, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums.location_depth import LocationDepth
from app.models.enums.layout_component_type import LayoutComponentType
from app.models.enums.layout_skip_reason import LayoutSkipReason
from app.schemas.inventory.layout_schemas import (
    LayoutComponent,
    LayoutCompileResult,
    SkippedComponent,
)
from app.schemas.inventory.location_schemas import LocationCandidate
from app.services.inventory import location_repository
from app.services.inventory.layout_service import get_layout_document
from app.services.inventory.warehouse_service import require_warehouse_id
from app.core.exceptions import AppException
from app.constants.error_codes import ErrorCode
from app.utils.geometry import find_container
import logging

logger = logging.getLogger(__name__)

_SKIP_REASONS = {
    ErrorCode.INVALID_LABEL: LayoutSkipReason.invalid_name,
    ErrorCode.INACTIVE_PARENT: LayoutSkipReason.inactive_parent,
    ErrorCode.PARENT_NOT_FOUND: LayoutSkipReason.parent_not_created,
    ErrorCode.DEPTH_MISMATCH: LayoutSkipReason.parent_not_created,
}


def _skip(
    result: LayoutCompileResult,
    component: LayoutComponent,
    reason: LayoutSkipReason,
) -> None:
    logger.debug(
        "Layout component skipped",
        extra={"component_id": component.id, "component_name": component.name, "reason": reason.value},
    )
    result.skipped.append(
        SkippedComponent(
            id=component.id,
            type=component.type,
            name=component.name,
            reason=reason,
        )
    )


async def _realize(
    db: AsyncSession,
    result: LayoutCompileResult,
    component: LayoutComponent,
    candidate: LocationCandidate,
) -> Tuple[Optional[str], bool]:
    """
    Insert one component. Returns the id of the node standing for it (None
    when skipped) and whether that node was created by this call.
    """
    try:
        node = await location_repository.insert_node(db, candidate)
        return node.id, True

    except AppException as exc:
        if exc.error_code == ErrorCode.DUPLICATE_CODE:
            existing = await location_repository.find_by_code(
                db, candidate.warehouse_id, exc.details["code"]
            )
            # same code at another place in the tree, e.g. aisle "A" of
            # zone "ZONE" against zone "A"
            if (
                existing is None
                or existing.depth != int(candidate.depth)
                or existing.parent_id != candidate.parent_id
            ):
                _skip(result, component, LayoutSkipReason.code_conflict)
                return None, False

            _skip(result, component, LayoutSkipReason.already_exists)
            return existing.id, False

        reason = _SKIP_REASONS.get(exc.error_code)
        if reason is None:
            raise
        _skip(result, component, reason)
        return None, False


async def generate_locations_from_layout(
    db: AsyncSession,
    warehouse_id: str,
) -> LayoutCompileResult:
    wh_id = await require_warehouse_id(db, warehouse_id)

    layout = await get_layout_document(db, wh_id)
    if layout is None:
        raise AppException(
            404,
            "No layout saved for this warehouse",
            ErrorCode.LAYOUT_NOT_FOUND,
        )

    zones: List[LayoutComponent] = []
    aisles: List[LayoutComponent] = []
    bins: List[LayoutComponent] = []
    for component in layout.components:
        if component.type == LayoutComponentType.zone:
            zones.append(component)
        elif component.type == LayoutComponentType.aisle:
            aisles.append(component)
        elif component.type == LayoutComponentType.bin:
            bins.append(component)

    logger.info(
        "Generate locations from layout",
        extra={
            "warehouse_id": wh_id,
            "zones": len(zones),
            "aisles": len(aisles),
            "bins": len(bins),
        },
    )

    result = LayoutCompileResult()
    zone_nodes: Dict[str, str] = {}
    aisle_nodes: Dict[str, str] = {}

    # -------------------------
    # ZONES
    # -------------------------
    for zone in zones:
        node_id, created = await _realize(
            db,
            result,
            zone,
            LocationCandidate(
                warehouse_id=wh_id,
                depth=LocationDepth.ZONE,
                label=zone.name,
            ),
        )
        if node_id:
            zone_nodes[zone.id] = node_id
            if created:
                result.zones_created += 1

    # -------------------------
    # AISLES
    # -------------------------
    for aisle in aisles:
        parent_zone = find_container(aisle, zones)
        if parent_zone is None:
            _skip(result, aisle, LayoutSkipReason.no_containing_zone)
            continue

        parent_id = zone_nodes.get(parent_zone.id)
        if parent_id is None:
            _skip(result, aisle, LayoutSkipReason.parent_not_created)
            continue

        node_id, created = await _realize(
            db,
            result,
            aisle,
            LocationCandidate(
                warehouse_id=wh_id,
                depth=LocationDepth.AISLE,
                parent_id=parent_id,
                label=aisle.name,
            ),
        )
        if node_id:
            aisle_nodes[aisle.id] = node_id
            if created:
                result.aisles_created += 1

    # -------------------------
    # BINS
    # -------------------------
    for bin_ in bins:
        parent_aisle = find_container(bin_, aisles)
        if parent_aisle is None:
            _skip(result, bin_, LayoutSkipReason.no_containing_aisle)
            continue

        if find_container(parent_aisle, zones) is None:
            _skip(result, bin_, LayoutSkipReason.no_containing_zone)
            continue

        parent_id = aisle_nodes.get(parent_aisle.id)
        if parent_id is None:
            _skip(result, bin_, LayoutSkipReason.parent_not_created)
            continue

        _, created = await _realize(
            db,
            result,
            bin_,
            LocationCandidate(
                warehouse_id=wh_id,
                depth=LocationDepth.BIN,
                parent_id=parent_id,
                label=bin_.name,
            ),
        )
        if created:
            result.bins_created += 1

    logger.info(
        "Layout compiled",
        extra={
            "warehouse_id": wh_id,
            "zones_created": result.zones_created,
            "aisles_created": result.aisles_created,
            "bins_created": result.bins_created,
            "skipped": len(result.skipped),
        },
    )
    return result
