"""Domain Types — identifiers and closed enumerations shared across the codebase.

Invariants:
    - Identifiers wrap a stripped, lower-cased string; equality and hashing are structural
    - All valid states encoded as str Enums; parse_enum() is the only text -> member path
    - parse_enum() is case-insensitive and raises InvalidEnumValueError outside the set

Design Decisions:
    - Frozen dataclasses for ids (not NewType): case folding must happen at construction
    - str Enums: serialize to JSON and to DB string columns without custom encoders
"""

import uuid
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from paygate.core.errors import InvalidEnumValueError


# ─── Identity Types ──────────────────────────────────────────────

@dataclass(frozen=True)
class _Identifier:
    value: str

    def __post_init__(self):
        object.__setattr__(self, "value", (self.value or "").strip().lower())

    def __str__(self) -> str:
        return self.value

    def __bool__(self) -> bool:
        return bool(self.value)


class TransferId(_Identifier):
    pass


class CustomerId(_Identifier):
    pass


class OriginatorId(_Identifier):
    pass


class DepositoryId(_Identifier):
    pass


class EventId(_Identifier):
    pass


def next_id() -> str:
    """Random opaque identifier for server-generated entities."""
    return uuid.uuid4().hex


# ─── Enums ───────────────────────────────────────────────────────

class TransferType(str, Enum):
    """Direction relative to the customer: push credits them, pull debits them."""
    PUSH = "push"
    PULL = "pull"


class TransferStatus(str, Enum):
    """Created pending; terminal states are set downstream."""
    CANCELED = "canceled"
    FAILED = "failed"
    PENDING = "pending"
    PROCESSED = "processed"
    RECLAIMED = "reclaimed"


class StandardEntryClassCode(str, Enum):
    """NACHA SEC codes; always held upper-case."""
    ACK = "ACK"
    ADV = "ADV"
    ARC = "ARC"
    ATX = "ATX"
    BOC = "BOC"
    CCD = "CCD"
    CIE = "CIE"
    COR = "COR"
    CTX = "CTX"
    DNE = "DNE"
    ENR = "ENR"
    IAT = "IAT"
    MTE = "MTE"
    POP = "POP"
    POS = "POS"
    PPD = "PPD"
    RCK = "RCK"
    SHR = "SHR"
    TEL = "TEL"
    TRC = "TRC"
    TRX = "TRX"
    WEB = "WEB"
    XCK = "XCK"


class CustomerStatus(str, Enum):
    UNVERIFIED = "unverified"
    VERIFIED = "verified"
    SUSPENDED = "suspended"
    DEACTIVATED = "deactivated"


class DepositoryStatus(str, Enum):
    UNVERIFIED = "unverified"
    VERIFIED = "verified"
    REJECTED = "rejected"


class AccountType(str, Enum):
    CHECKING = "checking"
    SAVINGS = "savings"


class HolderType(str, Enum):
    INDIVIDUAL = "individual"
    BUSINESS = "business"


class EventType(str, Enum):
    TRANSFER = "TransferEvent"


E = TypeVar("E", bound=Enum)


def parse_enum(enum_cls: type[E], value: str | E | None) -> E:
    """Case-insensitive text -> enum member. Raises InvalidEnumValueError."""
    if isinstance(value, enum_cls):
        return value
    text = (value or "").strip().lower() if isinstance(value, str) else ""
    for member in enum_cls:
        if member.value.lower() == text:
            return member
    raise InvalidEnumValueError(enum_cls.__name__, str(value))



def enum_equals(a: str | Enum | None, b: str | Enum | None) -> bool:
    """Case-insensitive equality between enum members and/or raw text."""
    def _text(v):
        if isinstance(v, Enum):
            return str(v.value).lower()
        return (v or "").strip().lower()
    return _text(a) == _text(b)
