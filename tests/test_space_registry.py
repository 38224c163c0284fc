"""
Tests for space registration, occupancy flag changes and parking attachment
"""
from decimal import Decimal
from uuid import uuid4

import pytest
from sqlalchemy import update

from shared.core.exceptions import BadRequestError, ConflictError, ResourceNotFoundError
from shared.helpers.transaction_helper import unit_of_work
from leasing_service.app.crud.parking_access import parking_capacity_crud
from leasing_service.app.crud.space_sites import space_registry
from leasing_service.app.enum.notification_enum import NotificationTopic, NotificationType
from leasing_service.app.enum.space_sites_enum import SpaceType
from leasing_service.app.models.space_sites.commercial_spaces import CommercialSpace
from leasing_service.app.schemas.parking_access.parking_facility_schemas import ParkingFacilityCreate
from leasing_service.app.schemas.space_sites.commercial_space_schemas import CommercialSpaceCreate


def space_payload(owner_id, **overrides):
    data = dict(
        name="Corner Shop",
        area=Decimal("80"),
        price_per_month=Decimal("2000"),
        space_type=SpaceType.RETAIL,
        owner_id=owner_id,
    )
    data.update(overrides)
    return CommercialSpaceCreate(**data)


def test_register_space_emits_new_space_event(db, owner):
    space, events = space_registry.register_space(db, space_payload(owner.id))

    assert space.available is True
    assert space.version == 1
    assert len(events) == 1
    assert events[0].type == NotificationType.NEW_SPACE
    assert events[0].topic == NotificationTopic.SPACES
    assert events[0].recipient_id == "all"


@pytest.mark.parametrize("overrides", [
    {"name": "  "},
    {"area": Decimal("0")},
    {"price_per_month": Decimal("-1")},
    {"space_type": None},
])
def test_register_space_validation(db, owner, overrides):
    with pytest.raises(BadRequestError):
        space_registry.register_space(db, space_payload(owner.id, **overrides))
    assert db.query(CommercialSpace).count() == 0


def test_register_space_unknown_owner(db, tenant):
    # a tenant id is not an owner
    with pytest.raises(ResourceNotFoundError):
        space_registry.register_space(db, space_payload(tenant.id))


def test_register_space_with_parking(db, owner):
    payload = space_payload(owner.id, parking=ParkingFacilityCreate(number_of_spots=12))
    space, _ = space_registry.register_space(db, payload)

    assert space.parking is not None
    assert space.parking.number_of_spots == 12
    assert space.parking.reserved_spots == 0


def test_mark_occupied_and_available(db, space):
    space_registry.mark_occupied(space)
    assert space.available is False

    with pytest.raises(ConflictError):
        space_registry.mark_occupied(space)

    space_registry.mark_available(space)
    assert space.available is True


def test_lock_space_unknown(db):
    with pytest.raises(ResourceNotFoundError):
        space_registry.lock_space(db, uuid4())
    with pytest.raises(BadRequestError):
        space_registry.get_space(db, None)


def test_concurrent_version_change_is_a_conflict(db, space):
    stale = space_registry.get_space(db, space.id)
    # another writer commits first
    db.execute(
        update(CommercialSpace.__table__)
        .where(CommercialSpace.__table__.c.id == space.id)
        .values(version=CommercialSpace.__table__.c.version + 1)
    )

    with pytest.raises(ConflictError):
        with unit_of_work(db, "occupy space"):
            space_registry.mark_occupied(stale)

    assert space_registry.get_space(db, space.id).available is True


def test_available_spaces(db, make_space):
    first = make_space()
    second = make_space()
    with unit_of_work(db, "occupy space"):
        space_registry.mark_occupied(space_registry.lock_space(db, first.id))

    ids = [s.id for s in space_registry.available_spaces(db)]
    assert second.id in ids
    assert first.id not in ids


def test_attach_parking_to_one_space_only(db, make_space):
    facility = parking_capacity_crud.create_facility(db, ParkingFacilityCreate(number_of_spots=5))
    first = make_space()
    second = make_space()

    attached = space_registry.attach_parking(db, first.id, facility.id)
    assert attached.parking_id == facility.id

    # re-attaching to the holder is a no-op
    space_registry.attach_parking(db, first.id, facility.id)

    with pytest.raises(ConflictError):
        space_registry.attach_parking(db, second.id, facility.id)
    assert space_registry.get_space(db, second.id).parking_id is None


def test_price_per_square_meter(space):
    assert space_registry.price_per_square_meter(space) == Decimal("20.00")


def test_build_space_out(db, space_with_parking):
    out = space_registry.build_space_out(db, space_with_parking)
    assert out.available is True
    assert out.active_contract_id is None
    assert out.parking.available_spots == 10
    assert out.price_per_square_meter == Decimal("20.00")
