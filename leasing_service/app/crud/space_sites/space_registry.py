"""
Single choke point for a commercial space's occupancy flag.

Every code path that changes ``CommercialSpace.available`` goes through
``mark_occupied`` / ``mark_available`` here, on a row obtained from
``lock_space`` so concurrent writers are serialized (row lock where the
backend supports it, optimistic ``version`` check everywhere).
"""
import logging
from decimal import Decimal
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.orm import Session

from shared.core.exceptions import BadRequestError, ConflictError, ResourceNotFoundError
from shared.helpers.transaction_helper import unit_of_work
from shared.models.users import Owner
from ...enum.leasing_enum import ContractStatus
from ...models.leasing.rental_contracts import RentalContract
from ...models.parking_access.parking_facilities import ParkingFacility
from ...models.space_sites.buildings import Building
from ...models.space_sites.commercial_spaces import CommercialSpace
from ...schemas.space_sites.commercial_space_schemas import CommercialSpaceCreate, CommercialSpaceOut
from ...schemas.system.notification_schemas import NotificationEvent
from ..parking_access import parking_capacity_crud
from ..system.notification_dispatch import new_space_event

logger = logging.getLogger(__name__)


# ----------------------------------------------------
# Lookup
# ----------------------------------------------------
def get_space(db: Session, space_id: UUID) -> CommercialSpace:
    if space_id is None:
        raise BadRequestError("Space ID cannot be null")

    space = db.query(CommercialSpace).filter(
        CommercialSpace.id == space_id).first()
    if not space:
        raise ResourceNotFoundError(
            f"Commercial space not found with ID: {space_id}")
    return space


def lock_space(db: Session, space_id: UUID) -> CommercialSpace:
    """Load the space for an occupancy change, refreshing any cached state."""
    if space_id is None:
        raise BadRequestError("Space ID cannot be null")

    space = (
        db.query(CommercialSpace)
        .filter(CommercialSpace.id == space_id)
        .with_for_update()
        .populate_existing()
        .first()
    )
    if not space:
        raise ResourceNotFoundError(
            f"Commercial space not found with ID: {space_id}")
    return space


def available_spaces(db: Session) -> List[CommercialSpace]:
    return (
        db.query(CommercialSpace)
        .filter(CommercialSpace.available == True)
        .order_by(CommercialSpace.created_at.desc())
        .all()
    )


# ----------------------------------------------------
# Occupancy
# ----------------------------------------------------
def active_contract(db: Session, space: CommercialSpace) -> Optional[RentalContract]:
    return (
        db.query(RentalContract)
        .filter(
            RentalContract.space_id == space.id,
            RentalContract.status == ContractStatus.ACTIVE,
        )
        .first()
    )


def has_active_contract(db: Session, space: CommercialSpace) -> bool:
    return active_contract(db, space) is not None


def mark_occupied(space: CommercialSpace) -> CommercialSpace:
    if not space.available:
        raise ConflictError(
            f"Space '{space.name}' is not available for rent")

    space.available = False
    logger.info("Space %s marked occupied", space.id)
    return space


def mark_available(space: CommercialSpace) -> CommercialSpace:
    if space.available:
        logger.warning("Space %s was already available", space.id)

    space.available = True
    logger.info("Space %s marked available", space.id)
    return space


# ----------------------------------------------------
# Registration and parking
# ----------------------------------------------------
def _validate_space(payload: CommercialSpaceCreate):
    if not payload.name or not payload.name.strip():
        raise BadRequestError("Space name is required")
    if payload.area is None or payload.area <= 0:
        raise BadRequestError("Space area must be a positive value")
    if payload.price_per_month is None or payload.price_per_month <= 0:
        raise BadRequestError("Space price must be a positive value")
    if payload.space_type is None:
        raise BadRequestError("Space type is required")
    if payload.owner_id is None:
        raise BadRequestError("Owner ID is required")


def register_space(db: Session, payload: CommercialSpaceCreate) -> Tuple[CommercialSpace, List[NotificationEvent]]:
    _validate_space(payload)

    with unit_of_work(db, "register space"):
        owner = db.query(Owner).filter(Owner.id == payload.owner_id).first()
        if not owner:
            raise ResourceNotFoundError(
                f"Owner not found with ID: {payload.owner_id}")

        if payload.building_id is not None and db.get(Building, payload.building_id) is None:
            raise ResourceNotFoundError(
                f"Building not found with ID: {payload.building_id}")

        space = CommercialSpace(
            **payload.model_dump(exclude={"parking"}),
            available=True,
        )
        if payload.parking is not None:
            space.parking = ParkingFacility(
                **payload.parking.model_dump(exclude_none=True), reserved_spots=0)
        db.add(space)

    db.refresh(space)
    logger.info("Registered space %s (%s)", space.id, space.name)
    return space, [new_space_event(space)]


def attach_parking(db: Session, space_id: UUID, parking_id: UUID) -> CommercialSpace:
    with unit_of_work(db, "attach parking"):
        space = lock_space(db, space_id)
        facility = parking_capacity_crud.get_facility(
            db, parking_id, for_update=True)

        holder = facility.space
        if holder is not None and holder.id != space.id:
            raise ConflictError(
                f"Parking facility {parking_id} already belongs to space {holder.id}")

        space.parking = facility

    db.refresh(space)
    return space


# ----------------------------------------------------
# Output helpers
# ----------------------------------------------------
def price_per_square_meter(space: CommercialSpace) -> Decimal:
    if space.area is None or space.area <= 0:
        return Decimal("0")
    return (Decimal(str(space.price_per_month)) / Decimal(str(space.area))).quantize(Decimal("0.01"))


def build_space_out(db: Session, space: CommercialSpace) -> CommercialSpaceOut:
    current = active_contract(db, space)
    parking = (
        parking_capacity_crud.build_facility_out(space.parking)
        if space.parking is not None else None
    )
    return CommercialSpaceOut.model_validate(space).model_copy(
        update={
            "parking": parking,
            "active_contract_id": current.id if current else None,
            "price_per_square_meter": price_per_square_meter(space),
        }
    )
