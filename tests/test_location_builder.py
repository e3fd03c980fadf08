import pytest
from sqlalchemy import select, func

from app.constants.error_codes import ErrorCode
from app.core.exceptions import AppException
from app.models.enums.location_depth import LocationDepth
from app.models.inventory.location_models import Location
from app.schemas.inventory.location_schemas import (
    ZoneCreate,
    AisleCreate,
    BinCreate,
    CodePreviewRequest,
)
from app.services.inventory import location_builder_service, location_repository
from app.services.inventory.location_builder_service import (
    create_zone,
    create_aisle,
    create_bin,
    preview_code,
)


async def test_create_zone(db, warehouse):
    zone = await create_zone(db, warehouse.id, ZoneCreate(zone=" cold ", description="Freezers"))

    assert zone.code == "ZONE-COLD"
    assert zone.path == "COLD"
    assert zone.depth == 0
    assert zone.parent_id is None
    assert zone.description == "Freezers"


async def test_create_zone_by_warehouse_code(db, warehouse):
    zone = await create_zone(db, "WH1", ZoneCreate(zone="A"))
    assert zone.warehouse_id == warehouse.id


async def test_create_zone_unknown_warehouse(db):
    with pytest.raises(AppException) as exc:
        await create_zone(db, "NOPE", ZoneCreate(zone="A"))
    assert exc.value.error_code == ErrorCode.WAREHOUSE_NOT_FOUND


async def test_confirmed_code_must_match(db, warehouse):
    with pytest.raises(AppException) as exc:
        await create_zone(db, warehouse.id, ZoneCreate(zone="A", code="ZONE-B"))
    assert exc.value.error_code == ErrorCode.CODE_MISMATCH
    assert exc.value.details == {"submitted": "ZONE-B", "derived": "ZONE-A"}

    zone = await create_zone(db, warehouse.id, ZoneCreate(zone="a", code=" ZONE-A "))
    assert zone.code == "ZONE-A"


async def test_create_aisle_with_levels(db, zone_a):
    data = await create_aisle(db, AisleCreate(parent_id=zone_a.id, aisle="a2", levels=4))

    assert data.aisle.code == "A-A2"
    assert data.aisle.path == "A.A2"
    assert data.aisle.attributes == {"total_levels": 4}

    assert [lvl.code for lvl in data.levels] == ["A-A2-L1", "A-A2-L2", "A-A2-L3", "A-A2-L4"]
    first = data.levels[0]
    assert first.parent_id == data.aisle.id
    assert first.depth == 2
    assert first.description == "Level 1 of A2"
    assert first.attributes == {"level_number": 1}


async def test_single_level_aisle_has_no_bins(db, zone_a):
    data = await create_aisle(db, AisleCreate(parent_id=zone_a.id, aisle="A2"))
    assert data.levels == []
    assert data.aisle.attributes == {"total_levels": 1}


async def test_levels_without_prepopulation(db, zone_a):
    data = await create_aisle(
        db, AisleCreate(parent_id=zone_a.id, aisle="A2", levels=5, prepopulate_levels=False)
    )
    assert data.levels == []
    assert data.aisle.attributes == {"total_levels": 5}


def test_level_count_is_bounded():
    with pytest.raises(ValueError):
        AisleCreate(parent_id="x", aisle="A1", levels=21)
    with pytest.raises(ValueError):
        AisleCreate(parent_id="x", aisle="A1", levels=0)


async def test_failed_level_rolls_back_aisle(db, warehouse, zone_a, monkeypatch):
    def broken_label(number):
        return "L.3" if number == 3 else f"L{number}"

    monkeypatch.setattr(location_builder_service, "level_label", broken_label)

    with pytest.raises(AppException) as exc:
        await create_aisle(db, AisleCreate(parent_id=zone_a.id, aisle="A2", levels=4))
    assert exc.value.error_code == ErrorCode.INVALID_LABEL

    assert await location_repository.find_by_code(db, warehouse.id, "A-A2") is None
    total = await db.scalar(select(func.count()).select_from(Location))
    assert total == 1


async def test_duplicate_aisle(db, aisle_a1):
    with pytest.raises(AppException) as exc:
        await create_aisle(db, AisleCreate(parent_id=aisle_a1.aisle.parent_id, aisle="a1", levels=2))
    assert exc.value.error_code == ErrorCode.DUPLICATE_CODE


async def test_create_bin(db, aisle_a1):
    bin_ = await create_bin(
        db,
        BinCreate(parent_id=aisle_a1.aisle.id, bin_code="rack_9", attributes={"capacity": 12}),
    )
    assert bin_.code == "A-A1-RACK_9"
    assert bin_.path == "A.A1.RACK_9"
    assert bin_.attributes == {"capacity": 12}


async def test_bin_needs_aisle_parent(db, zone_a):
    with pytest.raises(AppException) as exc:
        await create_bin(db, BinCreate(parent_id=zone_a.id, bin_code="L1"))
    assert exc.value.error_code == ErrorCode.DEPTH_MISMATCH


async def test_bin_unknown_parent(db, warehouse):
    with pytest.raises(AppException) as exc:
        await create_bin(db, BinCreate(parent_id="missing", bin_code="L1"))
    assert exc.value.error_code == ErrorCode.PARENT_NOT_FOUND


async def test_preview_code_writes_nothing(db, aisle_a1):
    before = await db.scalar(select(func.count()).select_from(Location))

    preview = await preview_code(
        db,
        CodePreviewRequest(depth=LocationDepth.BIN, label="l10", parent_id=aisle_a1.aisle.id),
    )

    assert preview.code == "A-A1-L10"
    assert preview.path == "A.A1.L10"
    assert (preview.zone, preview.aisle, preview.bin_code) == ("A", "A1", "L10")
    assert await db.scalar(select(func.count()).select_from(Location)) == before


async def test_preview_zone(db):
    preview = await preview_code(db, CodePreviewRequest(depth=LocationDepth.ZONE, label="b"))
    assert preview.code == "ZONE-B"
