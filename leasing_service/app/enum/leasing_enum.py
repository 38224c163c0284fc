from enum import Enum


class ContractStatus(str, Enum):
    PENDING = "PENDING"
    ACTIVE = "ACTIVE"
    EXPIRED = "EXPIRED"
    TERMINATED = "TERMINATED"
    CANCELLED = "CANCELLED"
    RENEWED = "RENEWED"


TERMINAL_STATUSES = frozenset({
    ContractStatus.EXPIRED,
    ContractStatus.TERMINATED,
    ContractStatus.CANCELLED,
    ContractStatus.RENEWED,
})


class PaymentMethod(str, Enum):
    CASH = "CASH"
    BANK_TRANSFER = "BANK_TRANSFER"
    CARD = "CARD"
    CHECK = "CHECK"
    ONLINE = "ONLINE"
