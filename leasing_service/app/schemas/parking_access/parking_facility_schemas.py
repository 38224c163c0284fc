from uuid import UUID
from typing import Optional
from decimal import Decimal
from pydantic import BaseModel, Field

from ...enum.parking_access_enum import ParkingType


class ParkingFacilityBase(BaseModel):
    number_of_spots: Optional[int] = None
    price_per_spot: Optional[Decimal] = Decimal("0")
    covered: Optional[bool] = False
    parking_type: Optional[ParkingType] = None
    disabled_access_spots: Optional[int] = 0
    electric_charging_spots: Optional[int] = 0
    security_cameras: Optional[bool] = False
    security_guard: Optional[bool] = False
    access_card_required: Optional[bool] = False
    height_restriction: Optional[Decimal] = None
    operating_hours: Optional[str] = None


class ParkingFacilityCreate(ParkingFacilityBase):
    number_of_spots: int = Field(gt=0)


class ParkingFacilityOut(ParkingFacilityBase):
    id: UUID
    number_of_spots: int
    reserved_spots: int
    available_spots: int = 0
    total_price: Decimal = Decimal("0")
    quality_score: int = 0

    model_config = {"from_attributes": True}


class ParkingSpotsRequest(BaseModel):
    spots: int
