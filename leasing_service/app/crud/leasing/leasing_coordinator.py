"""
Leasing use cases: each one changes a contract and its space's occupancy
flag inside a single transaction, then hands back the notification events
to publish once the commit has succeeded.
"""
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from shared.core.exceptions import BadRequestError, ConflictError, ResourceNotFoundError
from shared.helpers.transaction_helper import unit_of_work
from shared.models.users import Tenant
from ...enum.leasing_enum import ContractStatus
from ...models.leasing.rental_contracts import RentalContract
from ...models.space_sites.commercial_spaces import CommercialSpace
from ...schemas.leasing.rental_contract_schemas import (
    ContractRenewalRequest, RentalContractCreate, RentalContractOut
)
from ...schemas.system.notification_schemas import NotificationEvent
from ..space_sites import space_registry
from ..system.notification_dispatch import contract_update_event, new_contract_events, space_status_event
from . import contract_lifecycle as lifecycle

logger = logging.getLogger(__name__)

CREATABLE_STATUSES = (ContractStatus.ACTIVE, ContractStatus.PENDING)


@dataclass
class LeasingOutcome:
    contract: RentalContract
    events: List[NotificationEvent] = field(default_factory=list)
    # the superseded contract, for renewals
    previous: Optional[RentalContract] = None


# ----------------------------------------------------
# Lookups
# ----------------------------------------------------
def get_contract(db: Session, contract_id: UUID, for_update: bool = False) -> RentalContract:
    if contract_id is None:
        raise BadRequestError("Contract ID cannot be null")

    q = db.query(RentalContract).filter(RentalContract.id == contract_id)
    if for_update:
        q = q.with_for_update().populate_existing()

    contract = q.first()
    if not contract:
        raise ResourceNotFoundError(
            f"Contract not found with ID: {contract_id}")
    return contract


def contracts_by_tenant(db: Session, tenant_id: UUID) -> List[RentalContract]:
    if tenant_id is None:
        raise BadRequestError("Tenant ID cannot be null")
    return (
        db.query(RentalContract)
        .filter(RentalContract.tenant_id == tenant_id)
        .order_by(RentalContract.start_date.desc())
        .all()
    )


def contracts_by_owner(db: Session, owner_id: UUID) -> List[RentalContract]:
    if owner_id is None:
        raise BadRequestError("Owner ID cannot be null")
    return (
        db.query(RentalContract)
        .join(CommercialSpace, CommercialSpace.id == RentalContract.space_id)
        .filter(CommercialSpace.owner_id == owner_id)
        .order_by(RentalContract.start_date.desc())
        .all()
    )


def contracts_by_space(db: Session, space_id: UUID) -> List[RentalContract]:
    if space_id is None:
        raise BadRequestError("Space ID cannot be null")
    return (
        db.query(RentalContract)
        .filter(RentalContract.space_id == space_id)
        .order_by(RentalContract.start_date.desc())
        .all()
    )


def parse_status(status: Optional[str]) -> ContractStatus:
    if not status or not status.strip():
        raise BadRequestError("Contract status cannot be null or empty")
    try:
        return ContractStatus(status.strip().upper())
    except ValueError:
        raise BadRequestError(f"Unknown contract status: {status}")


def contracts_by_status(db: Session, status: Optional[str]) -> List[RentalContract]:
    return (
        db.query(RentalContract)
        .filter(RentalContract.status == parse_status(status))
        .order_by(RentalContract.start_date.desc())
        .all()
    )


# ----------------------------------------------------
# Use cases
# ----------------------------------------------------
def _validate_create(payload: RentalContractCreate):
    if payload.space_id is None:
        raise BadRequestError("Space information is required for contract")
    if payload.tenant_id is None:
        raise BadRequestError("Tenant information is required for contract")
    if payload.start_date is None or payload.end_date is None:
        raise BadRequestError("Contract start and end dates are required")
    if payload.end_date < payload.start_date:
        raise BadRequestError("Contract end date cannot be before start date")
    if payload.monthly_rent is None or payload.monthly_rent <= 0:
        raise BadRequestError("Monthly rent must be a positive value")
    if payload.security_deposit is not None and payload.security_deposit < 0:
        raise BadRequestError("Security deposit cannot be negative")
    if payload.status is not None and payload.status not in CREATABLE_STATUSES:
        raise BadRequestError(
            "New contracts can only start as ACTIVE or PENDING")


def create_contract(db: Session, payload: RentalContractCreate, today: Optional[date] = None) -> LeasingOutcome:
    _validate_create(payload)
    today = today or date.today()
    status = payload.status or ContractStatus.ACTIVE

    with unit_of_work(db, "create contract"):
        tenant = db.query(Tenant).filter(Tenant.id == payload.tenant_id).first()
        if not tenant:
            raise ResourceNotFoundError(
                f"Tenant not found with ID: {payload.tenant_id}")

        space = space_registry.lock_space(db, payload.space_id)
        if not space.available:
            raise ConflictError(
                "The selected space is not available for rent")

        contract = RentalContract(
            contract_number=lifecycle.generate_contract_number(),
            tenant_id=payload.tenant_id,
            space_id=space.id,
            start_date=payload.start_date,
            end_date=payload.end_date,
            monthly_rent=payload.monthly_rent,
            security_deposit=payload.security_deposit,
            status=status,
            is_paid=False,
            date_created=today,
            notes=payload.notes,
            payment_method=payload.payment_method,
            signature=payload.signature,
            auto_renewal=bool(payload.auto_renewal),
            early_termination_allowed=bool(payload.early_termination_allowed),
            early_termination_fee=payload.early_termination_fee,
            late_payment_fee=payload.late_payment_fee,
        )
        # a PENDING contract reserves nothing until it is activated
        if status == ContractStatus.ACTIVE:
            space_registry.mark_occupied(space)
        db.add(contract)

    db.refresh(contract)
    logger.info("Contract %s created for space %s (%s)",
                contract.contract_number, space.id, status.value)
    return LeasingOutcome(contract=contract, events=new_contract_events(contract, space))


def activate_contract(db: Session, contract_id: UUID) -> LeasingOutcome:
    with unit_of_work(db, "activate contract"):
        contract = get_contract(db, contract_id, for_update=True)
        space = space_registry.lock_space(db, contract.space_id)
        lifecycle.activate(contract)
        space_registry.mark_occupied(space)

    db.refresh(contract)
    return LeasingOutcome(
        contract=contract,
        events=[space_status_event(space),
                contract_update_event(contract, space)],
    )


def terminate_contract(db: Session, contract_id: UUID, reason: Optional[str] = None,
                       today: Optional[date] = None) -> LeasingOutcome:
    with unit_of_work(db, "terminate contract"):
        contract = get_contract(db, contract_id, for_update=True)
        space = space_registry.lock_space(db, contract.space_id)
        was_active = contract.status == ContractStatus.ACTIVE

        lifecycle.terminate(contract, reason, today)
        if was_active:
            space_registry.mark_available(space)

    db.refresh(contract)
    events = [space_status_event(space)] if was_active else []
    events.append(contract_update_event(contract, space))
    return LeasingOutcome(contract=contract, events=events)


def cancel_contract(db: Session, contract_id: UUID, reason: Optional[str] = None,
                    today: Optional[date] = None) -> LeasingOutcome:
    with unit_of_work(db, "cancel contract"):
        contract = get_contract(db, contract_id, for_update=True)
        space = space_registry.lock_space(db, contract.space_id)
        was_active = contract.status == ContractStatus.ACTIVE

        lifecycle.cancel(contract, reason, today)
        if was_active:
            space_registry.mark_available(space)

    db.refresh(contract)
    events = [space_status_event(space)] if was_active else []
    events.append(contract_update_event(contract, space))
    return LeasingOutcome(contract=contract, events=events)


def expire_contract(db: Session, contract_id: UUID, today: Optional[date] = None) -> LeasingOutcome:
    with unit_of_work(db, "expire contract"):
        contract = get_contract(db, contract_id, for_update=True)
        space = space_registry.lock_space(db, contract.space_id)

        lifecycle.expire(contract, today)
        space_registry.mark_available(space)

    db.refresh(contract)
    return LeasingOutcome(
        contract=contract,
        events=[space_status_event(space),
                contract_update_event(contract, space)],
    )


def renew_contract(db: Session, contract_id: UUID, payload: ContractRenewalRequest,
                   today: Optional[date] = None) -> LeasingOutcome:
    with unit_of_work(db, "renew contract"):
        previous = get_contract(db, contract_id, for_update=True)
        space = space_registry.lock_space(db, previous.space_id)
        # an EXPIRED predecessor already released the space
        reoccupies = previous.status == ContractStatus.EXPIRED

        renewed = lifecycle.renew(
            previous,
            payload.end_date,
            start_date=payload.start_date,
            monthly_rent=payload.monthly_rent,
            security_deposit=payload.security_deposit,
            today=today,
        )
        if reoccupies:
            space_registry.mark_occupied(space)
        db.add(renewed)

    db.refresh(renewed)
    db.refresh(previous)

    events = new_contract_events(renewed, space)
    events.append(contract_update_event(renewed, space))
    if reoccupies:
        events.append(space_status_event(space))
    return LeasingOutcome(contract=renewed, events=events, previous=previous)


# ----------------------------------------------------
# Output
# ----------------------------------------------------
def build_contract_out(contract: RentalContract, today: Optional[date] = None) -> RentalContractOut:
    today = today or date.today()
    return RentalContractOut.model_validate(contract).model_copy(
        update={
            "is_active": lifecycle.is_active(contract, today),
            "is_expired": lifecycle.is_expired(contract, today),
            "is_nearing_expiration": lifecycle.is_nearing_expiration(contract, today),
            "days_until_expiration": lifecycle.days_until_expiration(contract, today),
            "duration_in_months": lifecycle.duration_in_months(contract),
            "total_value": lifecycle.total_value(contract),
            "initial_payment": lifecycle.initial_payment(contract),
            "early_termination_fee_amount": lifecycle.early_termination_fee_amount(contract),
        }
    )
