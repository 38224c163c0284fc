"""
Rental contract state machine.

    PENDING -> ACTIVE -> {EXPIRED, TERMINATED, CANCELLED, RENEWED}

Transitions mutate the contract in place and never touch the space; occupancy
is the coordinator's job (through space_registry). Derived values are pure
functions of stored fields and ``today``.
"""
import logging
import time
import uuid
from datetime import date, timedelta
from decimal import Decimal
from typing import Optional

from dateutil.relativedelta import relativedelta

from shared.core.config import settings
from shared.core.exceptions import BadRequestError, InvalidStateTransitionError
from ...enum.leasing_enum import ContractStatus, TERMINAL_STATUSES
from ...models.leasing.rental_contracts import RentalContract

logger = logging.getLogger(__name__)

RENEWABLE_STATUSES = frozenset({ContractStatus.ACTIVE, ContractStatus.EXPIRED})


def _today(today: Optional[date]) -> date:
    return today or date.today()


def _money(value) -> Decimal:
    return Decimal(str(value)) if value is not None else Decimal("0")


def generate_contract_number(prefix: Optional[str] = None) -> str:
    """``RENT-<epoch millis>-<8 hex>``; uniqueness is enforced by the store."""
    prefix = prefix or settings.CONTRACT_NUMBER_PREFIX
    timestamp = int(time.time() * 1000)
    suffix = uuid.uuid4().hex[:8].upper()
    return f"{prefix}-{timestamp}-{suffix}"


# ----------------------------------------------------
# Transitions
# ----------------------------------------------------
def activate(contract: RentalContract) -> RentalContract:
    if contract.status != ContractStatus.PENDING:
        raise InvalidStateTransitionError(
            f"Only PENDING contracts can be activated (contract is {contract.status.value})")

    contract.status = ContractStatus.ACTIVE
    contract.is_paid = True
    logger.info("Contract %s activated", contract.contract_number)
    return contract


def terminate(contract: RentalContract, reason: Optional[str] = None, today: Optional[date] = None) -> RentalContract:
    # early_termination_allowed only drives the fee, it never blocks termination
    if contract.status in TERMINAL_STATUSES:
        raise InvalidStateTransitionError(
            f"Contract {contract.contract_number} is already {contract.status.value}")

    contract.status = ContractStatus.TERMINATED
    contract.actual_end_date = _today(today)
    contract.termination_reason = reason
    logger.info("Contract %s terminated: %s", contract.contract_number, reason)
    return contract


def expire(contract: RentalContract, today: Optional[date] = None) -> RentalContract:
    today = _today(today)
    if contract.status != ContractStatus.ACTIVE:
        raise InvalidStateTransitionError(
            f"Only ACTIVE contracts can expire (contract is {contract.status.value})")
    if today <= contract.end_date:
        raise InvalidStateTransitionError(
            f"Contract {contract.contract_number} runs until {contract.end_date}")

    contract.status = ContractStatus.EXPIRED
    contract.actual_end_date = contract.end_date
    logger.info("Contract %s expired", contract.contract_number)
    return contract


def cancel(contract: RentalContract, reason: Optional[str] = None, today: Optional[date] = None) -> RentalContract:
    if contract.status == ContractStatus.CANCELLED:
        raise InvalidStateTransitionError(
            f"Contract {contract.contract_number} is already CANCELLED")

    contract.status = ContractStatus.CANCELLED
    contract.termination_reason = reason
    contract.actual_end_date = _today(today)
    logger.info("Contract %s cancelled: %s", contract.contract_number, reason)
    return contract


def renew(
    contract: RentalContract,
    new_end_date: Optional[date],
    start_date: Optional[date] = None,
    monthly_rent: Optional[Decimal] = None,
    security_deposit: Optional[Decimal] = None,
    today: Optional[date] = None,
) -> RentalContract:
    """Mark ``contract`` RENEWED and return its ACTIVE successor (not yet added to a session)."""
    today = _today(today)

    if contract.status not in RENEWABLE_STATUSES:
        raise InvalidStateTransitionError(
            f"Only ACTIVE or EXPIRED contracts can be renewed (contract is {contract.status.value})")
    if new_end_date is None:
        raise BadRequestError("New end date is required for contract renewal")
    if new_end_date < today:
        raise BadRequestError("New end date cannot be in the past")

    start = start_date or today
    if new_end_date < start:
        raise BadRequestError("Contract end date cannot be before start date")

    rent = monthly_rent if monthly_rent is not None else contract.monthly_rent
    if rent is None or rent <= 0:
        raise BadRequestError("Monthly rent must be a positive value")

    successor = RentalContract(
        contract_number=generate_contract_number(),
        tenant_id=contract.tenant_id,
        space_id=contract.space_id,
        renewed_from_id=contract.id,
        start_date=start,
        end_date=new_end_date,
        monthly_rent=rent,
        security_deposit=(
            security_deposit if security_deposit is not None else contract.security_deposit),
        status=ContractStatus.ACTIVE,
        is_paid=False,
        date_created=today,
        payment_method=contract.payment_method,
        auto_renewal=contract.auto_renewal,
        early_termination_allowed=contract.early_termination_allowed,
        early_termination_fee=contract.early_termination_fee,
        late_payment_fee=contract.late_payment_fee,
    )

    contract.status = ContractStatus.RENEWED
    logger.info("Contract %s renewed as %s until %s", contract.contract_number,
                successor.contract_number, new_end_date)
    return successor


# ----------------------------------------------------
# Derived predicates
# ----------------------------------------------------
def is_active(contract: RentalContract, today: Optional[date] = None) -> bool:
    today = _today(today)
    return (
        contract.status == ContractStatus.ACTIVE
        and contract.start_date <= today <= contract.end_date
    )


def is_expired(contract: RentalContract, today: Optional[date] = None) -> bool:
    return _today(today) > contract.end_date or contract.status == ContractStatus.EXPIRED


def days_until_expiration(contract: RentalContract, today: Optional[date] = None) -> int:
    today = _today(today)
    if is_expired(contract, today):
        return 0
    return (contract.end_date - today).days


def is_nearing_expiration(contract: RentalContract, today: Optional[date] = None) -> bool:
    days = days_until_expiration(contract, today)
    return 0 < days <= settings.EXPIRATION_WARNING_DAYS


def can_be_renewed(contract: RentalContract, today: Optional[date] = None) -> bool:
    today = _today(today)
    window_start = contract.end_date - \
        timedelta(days=settings.EXPIRATION_WARNING_DAYS)
    return contract.status in RENEWABLE_STATUSES and (
        bool(contract.auto_renewal) or today > window_start
    )


def duration_in_months(contract: RentalContract) -> int:
    """Whole months between start and end; a trailing partial month is dropped."""
    delta = relativedelta(contract.end_date, contract.start_date)
    return delta.years * 12 + delta.months


def total_value(contract: RentalContract) -> Decimal:
    return _money(contract.monthly_rent) * duration_in_months(contract)


def initial_payment(contract: RentalContract) -> Decimal:
    return _money(contract.monthly_rent) + _money(contract.security_deposit)


def allows_early_termination(contract: RentalContract) -> bool:
    return bool(contract.early_termination_allowed)


def early_termination_fee_amount(contract: RentalContract) -> Decimal:
    if not allows_early_termination(contract) or contract.early_termination_fee is None:
        return Decimal("0")
    return _money(contract.early_termination_fee)
