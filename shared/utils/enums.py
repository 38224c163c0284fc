from enum import Enum


class UserAccountType(str, Enum):
    OWNER = "owner"
    TENANT = "tenant"


class UserStatus(str, Enum):
    active = "active"
    inactive = "inactive"
    suspended = "suspended"
