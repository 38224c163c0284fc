from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.orm import Session

from shared.core.database import get_leasing_db as get_db
from shared.helpers.json_response_helper import success_response
from shared.utils.app_status_code import AppStatusCode
from ...crud.space_sites import space_registry as crud
from ...crud.system.notification_dispatch import NotificationSink, dispatch_events, get_notification_sink
from ...schemas.space_sites.commercial_space_schemas import AttachParkingRequest, CommercialSpaceCreate

router = APIRouter(
    prefix="/api/spaces",
    tags=["spaces"],
)


@router.post("/", response_model=None)
def register_space(
    payload: CommercialSpaceCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    sink: NotificationSink = Depends(get_notification_sink),
):
    space, events = crud.register_space(db, payload)
    dispatch_events(background_tasks, sink, events)
    return success_response(
        crud.build_space_out(db, space),
        message="Space registered successfully",
        status_code=AppStatusCode.CREATED_SUCCESSFULLY,
    )


@router.get("/available", response_model=None)
def get_available_spaces(db: Session = Depends(get_db)):
    return success_response([crud.build_space_out(db, s) for s in crud.available_spaces(db)])


@router.get("/{space_id}", response_model=None)
def get_space(space_id: UUID, db: Session = Depends(get_db)):
    return success_response(crud.build_space_out(db, crud.get_space(db, space_id)))


@router.put("/{space_id}/parking", response_model=None)
def attach_parking(
    space_id: UUID,
    payload: AttachParkingRequest,
    db: Session = Depends(get_db),
):
    space = crud.attach_parking(db, space_id, payload.parking_id)
    return success_response(
        crud.build_space_out(db, space),
        message="Parking attached successfully",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY,
    )
