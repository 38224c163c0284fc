import uuid
from sqlalchemy import Boolean, Column, String, Integer, Numeric, ForeignKey, DateTime, Uuid, func
from sqlalchemy.orm import relationship

from shared.core.database import Base


class Building(Base):
    __tablename__ = "buildings"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=True)
    name = Column(String(100), nullable=False)
    address = Column(String(255), nullable=False)
    total_floors = Column(Integer)
    year_built = Column(Integer)
    total_area = Column(Numeric(12, 2))
    parking_spots = Column(Integer)
    elevator_available = Column(Boolean, default=False)
    accessibility_features = Column(Boolean, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True),
                        server_default=func.now(), onupdate=func.now())

    # relationships
    owner = relationship("Owner", back_populates="buildings")
    spaces = relationship("CommercialSpace", back_populates="building")
