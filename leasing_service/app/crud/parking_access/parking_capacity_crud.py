import logging
from decimal import Decimal
from uuid import UUID

from sqlalchemy.orm import Session

from shared.core.exceptions import BadRequestError, CapacityExceededError, ConflictError, ResourceNotFoundError
from shared.helpers.transaction_helper import unit_of_work
from ...enum.parking_access_enum import ParkingType
from ...models.parking_access.parking_facilities import ParkingFacility
from ...schemas.parking_access.parking_facility_schemas import ParkingFacilityCreate, ParkingFacilityOut

logger = logging.getLogger(__name__)

QUALITY_BASE_SCORE = 50


# ----------------------------------------------------
# Derived reads
# ----------------------------------------------------
def available_spots(facility: ParkingFacility) -> int:
    return max(0, (facility.number_of_spots or 0) - (facility.reserved_spots or 0))


def total_price(facility: ParkingFacility) -> Decimal:
    return Decimal(facility.number_of_spots or 0) * Decimal(str(facility.price_per_spot or 0))


def has_disabled_access(facility: ParkingFacility) -> bool:
    return (facility.disabled_access_spots or 0) > 0


def has_electric_charging(facility: ParkingFacility) -> bool:
    return (facility.electric_charging_spots or 0) > 0


def is_secured(facility: ParkingFacility) -> bool:
    return bool(facility.security_cameras or facility.security_guard or facility.access_card_required)


def has_height_restriction(facility: ParkingFacility) -> bool:
    return facility.height_restriction is not None and facility.height_restriction > 0


def quality_score(facility: ParkingFacility) -> int:
    """Display-ranking score in [0, 100]; plays no part in reservations."""
    score = QUALITY_BASE_SCORE

    if facility.covered:
        score += 15
    if is_secured(facility):
        score += 20
    if has_disabled_access(facility):
        score += 10
    if has_electric_charging(facility):
        score += 15
    if facility.parking_type in (ParkingType.UNDERGROUND, ParkingType.GARAGE):
        score += 10

    return min(100, score)


# ----------------------------------------------------
# Counter transitions (no commit)
# ----------------------------------------------------
def reserve(facility: ParkingFacility, spots: int) -> ParkingFacility:
    if spots is None or spots <= 0:
        raise BadRequestError("Number of spots to reserve must be positive")

    free = available_spots(facility)
    if spots > free:
        raise CapacityExceededError(
            f"Cannot reserve {spots} spots, only {free} available")

    facility.reserved_spots = (facility.reserved_spots or 0) + spots
    return facility


def release(facility: ParkingFacility, spots: int) -> ParkingFacility:
    if spots is None or spots <= 0:
        raise BadRequestError("Number of spots to release must be positive")

    reserved = facility.reserved_spots or 0
    if spots > reserved:
        raise ConflictError(
            f"Cannot release {spots} spots, only {reserved} reserved")

    facility.reserved_spots = reserved - spots
    return facility


# ----------------------------------------------------
# Persistence-backed operations
# ----------------------------------------------------
def get_facility(db: Session, facility_id: UUID, for_update: bool = False) -> ParkingFacility:
    if facility_id is None:
        raise BadRequestError("Parking facility ID cannot be null")

    q = db.query(ParkingFacility).filter(ParkingFacility.id == facility_id)
    if for_update:
        q = q.with_for_update().populate_existing()

    facility = q.first()
    if not facility:
        raise ResourceNotFoundError(
            f"Parking facility not found with ID: {facility_id}")
    return facility


def create_facility(db: Session, payload: ParkingFacilityCreate) -> ParkingFacility:
    with unit_of_work(db, "create parking facility"):
        facility = ParkingFacility(
            **payload.model_dump(exclude_none=True), reserved_spots=0)
        db.add(facility)
    db.refresh(facility)
    return facility


def reserve_spots(db: Session, facility_id: UUID, spots: int) -> ParkingFacility:
    with unit_of_work(db, "reserve parking spots"):
        facility = get_facility(db, facility_id, for_update=True)
        reserve(facility, spots)

    db.refresh(facility)
    logger.info("Reserved %s spots on parking %s (%s/%s)", spots,
                facility.id, facility.reserved_spots, facility.number_of_spots)
    return facility


def release_spots(db: Session, facility_id: UUID, spots: int) -> ParkingFacility:
    with unit_of_work(db, "release parking spots"):
        facility = get_facility(db, facility_id, for_update=True)
        release(facility, spots)

    db.refresh(facility)
    logger.info("Released %s spots on parking %s (%s/%s)", spots,
                facility.id, facility.reserved_spots, facility.number_of_spots)
    return facility


def build_facility_out(facility: ParkingFacility) -> ParkingFacilityOut:
    return ParkingFacilityOut.model_validate(facility).model_copy(
        update={
            "available_spots": available_spots(facility),
            "total_price": total_price(facility),
            "quality_score": quality_score(facility),
        }
    )
