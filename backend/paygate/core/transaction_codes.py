"""Transaction & Service-Class Codes — closed NACHA lookup tables.

Invariants:
    - Every (AccountType, Direction, Prenote) combination has exactly one code
    - Push transfers credit the customer account, pull transfers debit it
    - Lookups never fall back to a default; an unknown key raises KeyError
"""

from enum import Enum

from paygate.core.domain_types import AccountType, TransferType


class Direction(str, Enum):
    CREDIT = "credit"
    DEBIT = "debit"


class EntryKind(str, Enum):
    LIVE = "live"
    PRENOTE = "prenote"


TRANSACTION_CODES: dict[tuple[AccountType, Direction, EntryKind], int] = {
    (AccountType.CHECKING, Direction.CREDIT, EntryKind.LIVE): 22,
    (AccountType.CHECKING, Direction.CREDIT, EntryKind.PRENOTE): 23,
    (AccountType.CHECKING, Direction.DEBIT, EntryKind.LIVE): 27,
    (AccountType.CHECKING, Direction.DEBIT, EntryKind.PRENOTE): 28,
    (AccountType.SAVINGS, Direction.CREDIT, EntryKind.LIVE): 32,
    (AccountType.SAVINGS, Direction.CREDIT, EntryKind.PRENOTE): 33,
    (AccountType.SAVINGS, Direction.DEBIT, EntryKind.LIVE): 37,
    (AccountType.SAVINGS, Direction.DEBIT, EntryKind.PRENOTE): 38,
}

SERVICE_CLASS_CODES: dict[Direction, int] = {
    Direction.CREDIT: 220,
    Direction.DEBIT: 225,
}


def direction_for(transfer_type: TransferType) -> Direction:
    if transfer_type == TransferType.PUSH:
        return Direction.CREDIT
    return Direction.DEBIT


def transaction_code(
    account_type: AccountType, direction: Direction, kind: EntryKind = EntryKind.LIVE,
) -> int:
    return TRANSACTION_CODES[(account_type, direction, kind)]


def service_class_code(direction: Direction) -> int:
    return SERVICE_CLASS_CODES[direction]
