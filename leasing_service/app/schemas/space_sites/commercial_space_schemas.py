from datetime import datetime
from uuid import UUID
from typing import Optional
from decimal import Decimal
from pydantic import BaseModel

from ...enum.space_sites_enum import SpaceType
from ..parking_access.parking_facility_schemas import ParkingFacilityCreate, ParkingFacilityOut


class CommercialSpaceBase(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    address: Optional[str] = None
    area: Optional[Decimal] = None
    price_per_month: Optional[Decimal] = None
    space_type: Optional[SpaceType] = None
    owner_id: Optional[UUID] = None
    building_id: Optional[UUID] = None


class CommercialSpaceCreate(CommercialSpaceBase):
    parking: Optional[ParkingFacilityCreate] = None


class AttachParkingRequest(BaseModel):
    parking_id: UUID


class CommercialSpaceOut(CommercialSpaceBase):
    id: UUID
    name: str
    area: Decimal
    price_per_month: Decimal
    space_type: SpaceType
    owner_id: UUID
    available: bool
    parking_id: Optional[UUID] = None
    parking: Optional[ParkingFacilityOut] = None
    active_contract_id: Optional[UUID] = None
    price_per_square_meter: Decimal = Decimal("0")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
