"""
Storage access for the location tree.

``insert_node`` is the only way a location row is created. It validates the
parent, derives the coordinates / code / path from it and enforces code
uniqueness per warehouse. The ``(warehouse_id, code)`` unique constraint is
the final guard against two concurrent inserts of the same code.
"""

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from app.models.inventory.location_models import Location
from app.models.enums.location_depth import LocationDepth
from app.schemas.inventory.location_schemas import LocationCandidate, LocationFilter
from app.core.exceptions import AppException
from app.constants.error_codes import ErrorCode
from app.utils.location_codes import derive_location_fields, LabelError
import logging

logger = logging.getLogger(__name__)

# postgres names the constraint, sqlite lists its columns
_CODE_COLLISION_MARKERS = (
    "uq_location_warehouse_code",
    "locations.warehouse_id, locations.code",
)


def _is_code_collision(exc: IntegrityError) -> bool:
    message = str(exc.orig)
    return any(marker in message for marker in _CODE_COLLISION_MARKERS)


async def get_node(db: AsyncSession, node_id: str) -> Optional[Location]:
    return await db.get(Location, node_id)


async def find_by_code(db: AsyncSession, warehouse_id: str, code: str) -> Optional[Location]:
    return await db.scalar(
        select(Location).where(
            Location.warehouse_id == warehouse_id,
            Location.code == code,
        )
    )


async def list_nodes(
    db: AsyncSession,
    warehouse_id: str,
    filters: Optional[LocationFilter] = None,
) -> List[Location]:
    filters = filters or LocationFilter()

    query = select(Location).where(Location.warehouse_id == warehouse_id)

    if filters.depth is not None:
        query = query.where(Location.depth == int(filters.depth))
    if filters.parent_id is not None:
        query = query.where(Location.parent_id == filters.parent_id)
    if filters.zone is not None:
        query = query.where(Location.zone == filters.zone)
    if filters.aisle is not None:
        query = query.where(Location.aisle == filters.aisle)
    if filters.active_only:
        query = query.where(Location.is_active.is_(True))

    result = await db.execute(query.order_by(Location.path))
    return list(result.scalars().all())


async def resolve_parent(
    db: AsyncSession,
    depth: LocationDepth,
    parent_id: Optional[str],
    warehouse_id: Optional[str] = None,
) -> Optional[Location]:
    """
    Load and validate the parent of a node about to be created at ``depth``.

    Returns None for zones. ``warehouse_id`` restricts the parent to that
    warehouse; a parent from another warehouse is reported as not found.
    """
    if depth == LocationDepth.ZONE:
        if parent_id is not None:
            raise AppException(
                400,
                "A zone cannot have a parent location",
                ErrorCode.DEPTH_MISMATCH,
            )
        return None

    if parent_id is None:
        raise AppException(
            400,
            f"A {depth.label} requires a parent location",
            ErrorCode.DEPTH_MISMATCH,
        )

    parent = await db.get(Location, parent_id)
    if not parent or (warehouse_id is not None and parent.warehouse_id != warehouse_id):
        raise AppException(
            404,
            "Parent location not found",
            ErrorCode.PARENT_NOT_FOUND,
            details={"parent_id": parent_id},
        )

    expected = LocationDepth(depth - 1)
    if parent.depth != expected:
        raise AppException(
            400,
            f"Parent of a {depth.label} must be a {expected.label}",
            ErrorCode.DEPTH_MISMATCH,
            details={"parent_depth": parent.depth, "expected_depth": int(expected)},
        )

    if not parent.is_active:
        raise AppException(
            409,
            f"Parent location {parent.code} is inactive",
            ErrorCode.INACTIVE_PARENT,
            details={"parent_id": parent.id},
        )

    return parent


def derive_fields(depth: LocationDepth, label: str, parent: Optional[Location]) -> dict:
    try:
        return derive_location_fields(depth, label, parent)
    except LabelError as exc:
        raise AppException(
            400,
            str(exc),
            ErrorCode.INVALID_LABEL,
            details={"label": label},
        )


async def insert_node(
    db: AsyncSession,
    candidate: LocationCandidate,
    *,
    commit: bool = True,
) -> Location:
    """
    Validate and insert one location.

    With ``commit=False`` the row is only flushed, letting the caller group
    several inserts into one transaction; the caller then owns commit and
    rollback.
    """
    depth = LocationDepth(candidate.depth)
    parent = await resolve_parent(db, depth, candidate.parent_id, candidate.warehouse_id)
    fields = derive_fields(depth, candidate.label, parent)
    code = fields["code"]

    if candidate.expected_code is not None and candidate.expected_code.strip() != code:
        raise AppException(
            400,
            f'Submitted code "{candidate.expected_code}" does not match derived code "{code}"',
            ErrorCode.CODE_MISMATCH,
            details={"submitted": candidate.expected_code, "derived": code},
        )

    existing = await find_by_code(db, candidate.warehouse_id, code)
    if existing:
        raise AppException(
            409,
            f'Code "{code}" already exists in this warehouse',
            ErrorCode.DUPLICATE_CODE,
            details={"code": code, "existing_id": existing.id},
        )

    node = Location(
        warehouse_id=candidate.warehouse_id,
        parent_id=parent.id if parent else None,
        depth=int(depth),
        description=candidate.description,
        attributes=dict(candidate.attributes),
        is_active=True,
        **fields,
    )
    db.add(node)

    try:
        await db.flush()
        if commit:
            await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        if not _is_code_collision(exc):
            raise

        # concurrent insert of the same code won the race
        logger.warning(
            "Location code collision at insert",
            extra={"warehouse_id": candidate.warehouse_id, "code": code},
        )
        raise AppException(
            409,
            f'Code "{code}" already exists in this warehouse',
            ErrorCode.DUPLICATE_CODE,
            details={"code": code},
        )

    logger.debug("Inserted location", extra={"code": code, "depth": int(depth)})
    return node
