import uuid
from sqlalchemy import Boolean, Column, String, Date, Integer, Numeric, ForeignKey, DateTime, Text, Enum, Uuid, func
from sqlalchemy.orm import relationship

from shared.core.database import Base
from ...enum.leasing_enum import ContractStatus, PaymentMethod


class RentalContract(Base):
    __tablename__ = "rental_contracts"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    contract_number = Column(String(50), unique=True, nullable=False)
    tenant_id = Column(Uuid(as_uuid=True), ForeignKey(
        "users.id"), nullable=False, index=True)
    space_id = Column(Uuid(as_uuid=True), ForeignKey(
        "commercial_spaces.id"), nullable=False, index=True)
    # set on the contract produced by a renewal
    renewed_from_id = Column(Uuid(as_uuid=True), ForeignKey(
        "rental_contracts.id"), nullable=True)

    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    monthly_rent = Column(Numeric(10, 2), nullable=False)
    security_deposit = Column(Numeric(10, 2), nullable=True)

    status = Column(Enum(ContractStatus, name="contract_status"),
                    nullable=False, default=ContractStatus.PENDING, index=True)
    is_paid = Column(Boolean, nullable=False, default=False)
    date_created = Column(Date)
    notes = Column(Text)
    payment_method = Column(Enum(PaymentMethod, name="payment_method"))
    signature = Column(String(255))

    auto_renewal = Column(Boolean, nullable=False, default=False)
    # informational: feeds the fee calculation, never blocks terminate()
    early_termination_allowed = Column(Boolean, nullable=False, default=False)
    early_termination_fee = Column(Numeric(10, 2))
    late_payment_fee = Column(Numeric(10, 2))

    actual_end_date = Column(Date)
    termination_reason = Column(String(500))
    version = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True),
                        server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    __mapper_args__ = {"version_id_col": version}

    # relationships
    space = relationship("CommercialSpace", back_populates="contracts")
    tenant = relationship("Tenant", back_populates="contracts")
    renewed_from = relationship("RentalContract", remote_side=[id])
