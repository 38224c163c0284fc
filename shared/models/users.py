import uuid
from sqlalchemy import TIMESTAMP, Boolean, Column, String, Uuid, func
from sqlalchemy.orm import relationship

from ..core.database import Base
from ..utils.enums import UserAccountType, UserStatus


class Users(Base):
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    full_name = Column(String(200), nullable=False)
    email = Column(String(200), nullable=True)
    phone = Column(String(20), nullable=True)
    account_type = Column(String(16), nullable=False)
    status = Column(String(16), nullable=False, default=UserStatus.active.value)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True),
                        server_default=func.now(), onupdate=func.now())
    is_deleted = Column(Boolean, default=False)

    __mapper_args__ = {
        "polymorphic_on": account_type,
        "polymorphic_identity": "user",
    }


class Owner(Users):
    # read-side back references only; occupancy never flows through these
    spaces = relationship("CommercialSpace", back_populates="owner")
    buildings = relationship("Building", back_populates="owner")

    __mapper_args__ = {"polymorphic_identity": UserAccountType.OWNER.value}


class Tenant(Users):
    contracts = relationship("RentalContract", back_populates="tenant")

    __mapper_args__ = {"polymorphic_identity": UserAccountType.TENANT.value}
