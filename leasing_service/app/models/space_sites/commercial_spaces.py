import uuid
from sqlalchemy import Boolean, Column, String, Integer, Numeric, ForeignKey, DateTime, Text, Enum, Uuid, func
from sqlalchemy.orm import relationship

from shared.core.database import Base
from ...enum.space_sites_enum import SpaceType


class CommercialSpace(Base):
    __tablename__ = "commercial_spaces"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_id = Column(Uuid(as_uuid=True), ForeignKey(
        "users.id"), nullable=False, index=True)
    building_id = Column(Uuid(as_uuid=True), ForeignKey(
        "buildings.id", ondelete="SET NULL"), nullable=True, index=True)
    # one-to-one: a facility is never referenced by two spaces
    parking_id = Column(Uuid(as_uuid=True), ForeignKey(
        "parking_facilities.id"), nullable=True, unique=True)

    name = Column(String(100), nullable=False)
    description = Column(Text)
    address = Column(String(255))
    area = Column(Numeric(10, 2), nullable=False)
    price_per_month = Column(Numeric(10, 2), nullable=False)
    space_type = Column(Enum(SpaceType, name="space_type"), nullable=False)

    # cached projection of "has an ACTIVE contract"; written only by space_registry
    available = Column(Boolean, nullable=False, default=True, index=True)
    version = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True),
                        server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True),
                        server_default=func.now(), onupdate=func.now())

    __mapper_args__ = {"version_id_col": version}

    # relationships
    owner = relationship("Owner", back_populates="spaces")
    building = relationship("Building", back_populates="spaces")
    parking = relationship(
        "ParkingFacility", back_populates="space", cascade="all", uselist=False)
    contracts = relationship(
        "RentalContract", back_populates="space", order_by="RentalContract.start_date")
