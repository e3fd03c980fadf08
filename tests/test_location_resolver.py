import pytest

from app.schemas.inventory.location_schemas import ZoneCreate, AisleCreate
from app.services.inventory.location_builder_service import create_zone, create_aisle
from app.services.inventory.location_service import deactivate_location
from app.services.inventory.location_resolver_service import (
    list_lots,
    list_carts,
    list_levels,
)


@pytest.fixture
async def picker_tree(db, warehouse):
    zone_a = await create_zone(db, warehouse.id, ZoneCreate(zone="A"))
    zone_b = await create_zone(db, warehouse.id, ZoneCreate(zone="B"))
    zone_c = await create_zone(db, warehouse.id, ZoneCreate(zone="C"))

    a1 = await create_aisle(db, AisleCreate(parent_id=zone_a.id, aisle="A1", levels=10))
    a2 = await create_aisle(db, AisleCreate(parent_id=zone_a.id, aisle="A2", levels=2))
    # same aisle label under another zone
    b_a1 = await create_aisle(db, AisleCreate(parent_id=zone_b.id, aisle="A1", levels=2))

    await deactivate_location(db, zone_c.id)
    return {"a1": a1, "a2": a2, "b_a1": b_a1}


async def test_lots_are_active_zones(db, warehouse, picker_tree):
    assert await list_lots(db, warehouse.id) == ["A", "B"]


async def test_carts_narrow_by_lot(db, warehouse, picker_tree):
    assert await list_carts(db, warehouse.id, "A") == ["A1", "A2"]
    assert await list_carts(db, warehouse.id, " a ") == ["A1", "A2"]
    assert await list_carts(db, warehouse.id, "B") == ["A1"]
    assert await list_carts(db, warehouse.id, "C") == []


async def test_levels_match_lot_and_cart_in_natural_order(db, warehouse, picker_tree):
    levels = await list_levels(db, warehouse.id, "A", "A1")

    assert [lvl.level for lvl in levels] == [f"L{i}" for i in range(1, 11)]
    assert all(lvl.code.startswith("A-A1-") for lvl in levels)
    ids = {lvl.id for lvl in picker_tree["a1"].levels}
    assert {lvl.id for lvl in levels} == ids


async def test_inactive_levels_are_hidden(db, warehouse, picker_tree):
    l2 = picker_tree["a2"].levels[1]
    await deactivate_location(db, l2.id)

    levels = await list_levels(db, warehouse.id, "A", "A2")
    assert [lvl.code for lvl in levels] == ["A-A2-L1"]


async def test_warehouse_by_code(db, picker_tree):
    assert await list_lots(db, "WH1") == ["A", "B"]


async def test_unknown_inputs_give_empty_lists(db, warehouse, picker_tree):
    assert await list_lots(db, "NOPE") == []
    assert await list_carts(db, "NOPE", "A") == []
    assert await list_carts(db, warehouse.id, "") == []
    assert await list_levels(db, warehouse.id, "A", "ZZ") == []
    assert await list_levels(db, warehouse.id, "A", "") == []


async def test_other_warehouse_is_not_visible(db, other_warehouse, picker_tree):
    assert await list_lots(db, other_warehouse.id) == []
