# Import every mapped class so string relationships resolve on Base
from shared.models.users import Users, Owner, Tenant
from .space_sites.buildings import Building
from .space_sites.commercial_spaces import CommercialSpace
from .parking_access.parking_facilities import ParkingFacility
from .leasing.rental_contracts import RentalContract
