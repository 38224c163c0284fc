from datetime import datetime, date
from uuid import UUID
from typing import Optional, List
from decimal import Decimal
from pydantic import BaseModel

from ...enum.leasing_enum import ContractStatus, PaymentMethod


class RentalContractBase(BaseModel):
    space_id: Optional[UUID] = None
    tenant_id: Optional[UUID] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    monthly_rent: Optional[Decimal] = None
    security_deposit: Optional[Decimal] = None
    notes: Optional[str] = None
    payment_method: Optional[PaymentMethod] = None
    signature: Optional[str] = None
    auto_renewal: Optional[bool] = False
    early_termination_allowed: Optional[bool] = False
    early_termination_fee: Optional[Decimal] = None
    late_payment_fee: Optional[Decimal] = None


class RentalContractCreate(RentalContractBase):
    # ACTIVE unless the caller asks for PENDING
    status: Optional[ContractStatus] = None


class ContractRenewalRequest(BaseModel):
    end_date: Optional[date] = None
    start_date: Optional[date] = None
    monthly_rent: Optional[Decimal] = None
    security_deposit: Optional[Decimal] = None


class ContractTerminationRequest(BaseModel):
    reason: Optional[str] = None


class ContractCancelRequest(BaseModel):
    reason: Optional[str] = None


class ContractFilterRequest(BaseModel):
    tenant_id: Optional[UUID] = None
    owner_id: Optional[UUID] = None
    space_id: Optional[UUID] = None
    status: Optional[str] = None


class RentalContractOut(RentalContractBase):
    id: UUID
    contract_number: str
    space_id: UUID
    tenant_id: UUID
    start_date: date
    end_date: date
    monthly_rent: Decimal
    status: ContractStatus
    is_paid: bool
    date_created: Optional[date] = None
    actual_end_date: Optional[date] = None
    termination_reason: Optional[str] = None
    renewed_from_id: Optional[UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    # derived, recomputed on every read
    is_active: bool = False
    is_expired: bool = False
    is_nearing_expiration: bool = False
    days_until_expiration: int = 0
    duration_in_months: int = 0
    total_value: Decimal = Decimal("0")
    initial_payment: Decimal = Decimal("0")
    early_termination_fee_amount: Decimal = Decimal("0")

    model_config = {"from_attributes": True}


class RentalContractListResponse(BaseModel):
    contracts: List[RentalContractOut]
    total: int
