import pytest

from app.constants.error_codes import ErrorCode
from app.core.exceptions import AppException
from app.schemas.inventory.location_schemas import LocationUpdate, ZoneCreate
from app.services.inventory.location_builder_service import create_zone
from app.services.inventory.location_service import (
    get_location,
    get_location_tree,
    update_location,
    deactivate_location,
    reactivate_location,
)


async def test_update_description_bumps_version(db, zone_a):
    updated = await update_location(db, zone_a.id, LocationUpdate(description="Dry goods", version=1))

    assert updated.description == "Dry goods"
    assert updated.version == 2
    assert updated.code == zone_a.code


async def test_stale_version_conflicts(db, zone_a):
    await update_location(db, zone_a.id, LocationUpdate(description="first", version=1))

    with pytest.raises(AppException) as exc:
        await update_location(db, zone_a.id, LocationUpdate(description="second", version=1))
    assert exc.value.error_code == ErrorCode.LOCATION_VERSION_CONFLICT


async def test_update_without_changes(db, zone_a):
    with pytest.raises(AppException) as exc:
        await update_location(db, zone_a.id, LocationUpdate(version=1))
    assert exc.value.error_code == ErrorCode.VALIDATION_ERROR


async def test_unknown_location(db):
    with pytest.raises(AppException) as exc:
        await get_location(db, "missing")
    assert exc.value.error_code == ErrorCode.LOCATION_NOT_FOUND


async def test_deactivate_bottom_up(db, aisle_a1):
    aisle = aisle_a1.aisle

    with pytest.raises(AppException) as exc:
        await deactivate_location(db, aisle.parent_id)
    assert exc.value.error_code == ErrorCode.LOCATION_HAS_ACTIVE_CHILDREN
    assert exc.value.details == {"active_children": 1}

    for level in aisle_a1.levels:
        await deactivate_location(db, level.id)
    done = await deactivate_location(db, aisle.id)
    assert done.is_active is False
    assert done.version == 2

    with pytest.raises(AppException) as exc:
        await deactivate_location(db, aisle.id)
    assert exc.value.error_code == ErrorCode.LOCATION_STATE_INVALID


async def test_reactivate_needs_active_parent(db, aisle_a1):
    level = aisle_a1.levels[0]
    for lvl in aisle_a1.levels:
        await deactivate_location(db, lvl.id)
    await deactivate_location(db, aisle_a1.aisle.id)

    with pytest.raises(AppException) as exc:
        await reactivate_location(db, level.id)
    assert exc.value.error_code == ErrorCode.INACTIVE_PARENT

    await reactivate_location(db, aisle_a1.aisle.id)
    back = await reactivate_location(db, level.id)
    assert back.is_active is True

    with pytest.raises(AppException) as exc:
        await reactivate_location(db, level.id)
    assert exc.value.error_code == ErrorCode.LOCATION_STATE_INVALID


async def test_tree_hides_inactive_by_default(db, warehouse, aisle_a1):
    await create_zone(db, warehouse.id, ZoneCreate(zone="B"))
    await deactivate_location(db, aisle_a1.levels[2].id)

    active = await get_location_tree(db, warehouse.id)
    assert [root.location.code for root in active] == ["ZONE-A", "ZONE-B"]
    levels = active[0].children[0].children
    assert [lvl.location.code for lvl in levels] == ["A-A1-L1", "A-A1-L2"]

    everything = await get_location_tree(db, warehouse.id, active_only=False)
    assert len(everything[0].children[0].children) == 3
