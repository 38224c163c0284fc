from enum import Enum


class ParkingType(str, Enum):
    SURFACE = "SURFACE"
    UNDERGROUND = "UNDERGROUND"
    MULTI_LEVEL = "MULTI_LEVEL"
    GARAGE = "GARAGE"
    STREET = "STREET"
