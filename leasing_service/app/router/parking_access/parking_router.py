from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.database import get_leasing_db as get_db
from shared.helpers.json_response_helper import success_response
from shared.utils.app_status_code import AppStatusCode
from ...crud.parking_access import parking_capacity_crud as crud
from ...schemas.parking_access.parking_facility_schemas import ParkingFacilityCreate, ParkingSpotsRequest

router = APIRouter(
    prefix="/api/parking",
    tags=["parking"],
)


@router.post("/", response_model=None)
def create_facility(payload: ParkingFacilityCreate, db: Session = Depends(get_db)):
    facility = crud.create_facility(db, payload)
    return success_response(
        crud.build_facility_out(facility),
        message="Parking facility created successfully",
        status_code=AppStatusCode.CREATED_SUCCESSFULLY,
    )


@router.get("/{facility_id}", response_model=None)
def get_facility(facility_id: UUID, db: Session = Depends(get_db)):
    return success_response(crud.build_facility_out(crud.get_facility(db, facility_id)))


@router.post("/{facility_id}/reserve", response_model=None)
def reserve_spots(facility_id: UUID, payload: ParkingSpotsRequest, db: Session = Depends(get_db)):
    facility = crud.reserve_spots(db, facility_id, payload.spots)
    return success_response(
        crud.build_facility_out(facility),
        message=f"Reserved {payload.spots} parking spots",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY,
    )


@router.post("/{facility_id}/release", response_model=None)
def release_spots(facility_id: UUID, payload: ParkingSpotsRequest, db: Session = Depends(get_db)):
    facility = crud.release_spots(db, facility_id, payload.spots)
    return success_response(
        crud.build_facility_out(facility),
        message=f"Released {payload.spots} parking spots",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY,
    )
