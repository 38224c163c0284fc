from enum import Enum


class SpaceType(str, Enum):
    OFFICE = "OFFICE"
    RETAIL = "RETAIL"
    WAREHOUSE = "WAREHOUSE"
    RESTAURANT = "RESTAURANT"
    INDUSTRIAL = "INDUSTRIAL"
    MEDICAL = "MEDICAL"
    EDUCATIONAL = "EDUCATIONAL"
    RECREATIONAL = "RECREATIONAL"
