from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.orm import Session

from shared.core.database import get_leasing_db as get_db
from shared.helpers.json_response_helper import error_response, success_response
from shared.utils.app_status_code import AppStatusCode
from ...crud.leasing import leasing_coordinator as crud
from ...crud.system.notification_dispatch import NotificationSink, dispatch_events, get_notification_sink
from ...schemas.leasing.rental_contract_schemas import (
    ContractCancelRequest, ContractFilterRequest, ContractRenewalRequest, ContractTerminationRequest,
    RentalContractCreate, RentalContractListResponse,
)

router = APIRouter(
    prefix="/api/contracts",
    tags=["contracts"],
)


@router.post("/", response_model=None)
def create_contract(
    payload: RentalContractCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    sink: NotificationSink = Depends(get_notification_sink),
):
    outcome = crud.create_contract(db, payload)
    dispatch_events(background_tasks, sink, outcome.events)
    return success_response(
        crud.build_contract_out(outcome.contract),
        message="Contract created successfully",
        status_code=AppStatusCode.CREATED_SUCCESSFULLY,
    )


@router.get("/", response_model=None)
def get_contracts(
    params: ContractFilterRequest = Depends(),
    db: Session = Depends(get_db),
):
    if params.space_id:
        rows = crud.contracts_by_space(db, params.space_id)
    elif params.tenant_id:
        rows = crud.contracts_by_tenant(db, params.tenant_id)
    elif params.owner_id:
        rows = crud.contracts_by_owner(db, params.owner_id)
    elif params.status:
        rows = crud.contracts_by_status(db, params.status)
    else:
        return error_response(
            message="Provide one of space_id, tenant_id, owner_id or status",
            status_code=AppStatusCode.REQUIRED_VALIDATION_ERROR,
        )

    contracts = [crud.build_contract_out(row) for row in rows]
    return success_response(RentalContractListResponse(contracts=contracts, total=len(contracts)))


@router.get("/{contract_id}", response_model=None)
def get_contract(contract_id: UUID, db: Session = Depends(get_db)):
    return success_response(crud.build_contract_out(crud.get_contract(db, contract_id)))


@router.post("/{contract_id}/activate", response_model=None)
def activate_contract(
    contract_id: UUID,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    sink: NotificationSink = Depends(get_notification_sink),
):
    outcome = crud.activate_contract(db, contract_id)
    dispatch_events(background_tasks, sink, outcome.events)
    return success_response(
        crud.build_contract_out(outcome.contract),
        message="Contract activated successfully",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY,
    )


@router.post("/{contract_id}/terminate", response_model=None)
def terminate_contract(
    contract_id: UUID,
    payload: ContractTerminationRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    sink: NotificationSink = Depends(get_notification_sink),
):
    outcome = crud.terminate_contract(db, contract_id, payload.reason)
    dispatch_events(background_tasks, sink, outcome.events)
    return success_response(
        crud.build_contract_out(outcome.contract),
        message="Contract terminated successfully",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY,
    )


@router.post("/{contract_id}/renew", response_model=None)
def renew_contract(
    contract_id: UUID,
    payload: ContractRenewalRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    sink: NotificationSink = Depends(get_notification_sink),
):
    outcome = crud.renew_contract(db, contract_id, payload)
    dispatch_events(background_tasks, sink, outcome.events)
    return success_response(
        {
            "contract": crud.build_contract_out(outcome.contract),
            "previous": crud.build_contract_out(outcome.previous),
        },
        message="Contract renewed successfully",
        status_code=AppStatusCode.CREATED_SUCCESSFULLY,
    )


@router.post("/{contract_id}/cancel", response_model=None)
def cancel_contract(
    contract_id: UUID,
    payload: ContractCancelRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    sink: NotificationSink = Depends(get_notification_sink),
):
    outcome = crud.cancel_contract(db, contract_id, payload.reason)
    dispatch_events(background_tasks, sink, outcome.events)
    return success_response(
        crud.build_contract_out(outcome.contract),
        message="Contract cancelled successfully",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY,
    )


@router.post("/{contract_id}/expire", response_model=None)
def expire_contract(
    contract_id: UUID,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    sink: NotificationSink = Depends(get_notification_sink),
):
    outcome = crud.expire_contract(db, contract_id)
    dispatch_events(background_tasks, sink, outcome.events)
    return success_response(
        crud.build_contract_out(outcome.contract),
        message="Contract expired",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY,
    )
