import uuid
from sqlalchemy import Boolean, Column, String, Integer, Numeric, DateTime, Enum, CheckConstraint, Uuid, func
from sqlalchemy.orm import relationship

from shared.core.database import Base
from ...enum.parking_access_enum import ParkingType


class ParkingFacility(Base):
    __tablename__ = "parking_facilities"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    number_of_spots = Column(Integer, nullable=False)
    reserved_spots = Column(Integer, nullable=False, default=0)
    price_per_spot = Column(Numeric(10, 2), default=0)
    covered = Column(Boolean, default=False)
    parking_type = Column(Enum(ParkingType, name="parking_type"))
    disabled_access_spots = Column(Integer, default=0)
    electric_charging_spots = Column(Integer, default=0)
    security_cameras = Column(Boolean, default=False)
    security_guard = Column(Boolean, default=False)
    access_card_required = Column(Boolean, default=False)
    height_restriction = Column(Numeric(5, 2))
    operating_hours = Column(String(64))
    version = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True),
                        server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint("number_of_spots > 0", name="ck_parking_spots_positive"),
        CheckConstraint(
            "reserved_spots >= 0 AND reserved_spots <= number_of_spots",
            name="ck_parking_reserved_within_capacity"),
    )
    __mapper_args__ = {"version_id_col": version}

    # relationships
    space = relationship(
        "CommercialSpace", back_populates="parking", uselist=False)
