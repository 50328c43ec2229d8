"""Transfer Requests — decode an opaque body into a normalized list of requests.

Invariants:
    - Pure: no IO, no clock reads
    - A body is decoded as one object first, then as an array of objects
    - Missing required fields are reported all at once, in REQUIRED_FIELDS order
    - Field-level parsing (enum, amount) only runs once every required field is present
    - standardEntryClassCode must be a NACHA SEC code (any case) and is stored upper-case

Design Decisions:
    - pydantic TypeAdapter over a tagged union of TransferCreate | list[TransferCreate]:
      both shapes collapse into list[TransferRequest] before anything downstream sees them
    - Required-field check is done here (not via pydantic required fields) so that
      the error names every absent field with its wire name
"""

import json
from dataclasses import dataclass

from pydantic import TypeAdapter, ValidationError

from paygate.core.amount import Amount
from paygate.core.domain_types import (
    CustomerId,
    DepositoryId,
    OriginatorId,
    StandardEntryClassCode,
    TransferId,
    TransferStatus,
    TransferType,
    parse_enum,
)
from paygate.core.errors import EmptyRequestError, MissingFieldsError
from paygate.core.transfer import Transfer, utc_now
from paygate.schemas.transfer import TransferCreate


REQUIRED_FIELDS: tuple[str, ...] = (
    "transferType",
    "amount",
    "originator",
    "originatorDepository",
    "customer",
    "customerDepository",
    "standardEntryClassCode",
)

_single = TypeAdapter(TransferCreate)
_many = TypeAdapter(list[TransferCreate])


@dataclass
class TransferRequest:
    type: TransferType
    amount: Amount
    originator: OriginatorId
    originator_depository: DepositoryId
    customer: CustomerId
    customer_depository: DepositoryId
    description: str
    standard_entry_class_code: str
    same_day: bool = False

    # Filled in while the request moves through creation
    transfer_id: TransferId | None = None
    file_id: str | None = None
    transaction_id: str | None = None

    def as_transfer(self, transfer_id: TransferId | None = None) -> Transfer:
        return Transfer(
            id=transfer_id or self.transfer_id or TransferId(""),
            type=self.type,
            amount=self.amount,
            originator=self.originator,
            originator_depository=self.originator_depository,
            customer=self.customer,
            customer_depository=self.customer_depository,
            description=self.description,
            standard_entry_class_code=self.standard_entry_class_code,
            status=TransferStatus.PENDING,
            same_day=self.same_day,
            created=utc_now(),
        )


def missing_fields(body: TransferCreate) -> list[str]:
    """Wire names of every blank required field."""
    raw = body.model_dump(by_alias=True)
    return [
        name for name in REQUIRED_FIELDS
        if not str(raw.get(name) or "").strip()
    ]


def to_transfer_request(body: TransferCreate) -> TransferRequest:
    """Check required fields, then parse typed values. Raises PaygateError subclasses."""
    missing = missing_fields(body)
    if missing:
        raise MissingFieldsError(missing)
    amount = Amount.parse(body.amount)
    amount.validate()
    sec_code = parse_enum(StandardEntryClassCode, body.standard_entry_class_code)
    return TransferRequest(
        type=parse_enum(TransferType, body.transfer_type),
        amount=amount,
        originator=OriginatorId(body.originator),
        originator_depository=DepositoryId(body.originator_depository),
        customer=CustomerId(body.customer),
        customer_depository=DepositoryId(body.customer_depository),
        description=(body.description or "").strip(),
        standard_entry_class_code=sec_code.value,
        same_day=body.same_day,
    )


def decode_transfer_bodies(body: bytes) -> list[TransferCreate]:
    """Try one object, then an array of objects. Raises EmptyRequestError."""
    if not body or not body.strip():
        raise EmptyRequestError("empty body")
    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise EmptyRequestError(f"invalid JSON: {e}")

    try:
        return [_single.validate_python(payload)]
    except ValidationError:
        pass
    try:
        bodies = _many.validate_python(payload)
    except ValidationError as e:
        raise EmptyRequestError(f"{e.error_count()} invalid field(s)")
    if not bodies:
        raise EmptyRequestError()
    return bodies


def read_transfer_requests(body: bytes) -> list[TransferRequest]:
    """Normalize a single-object or array body into validated requests."""
    return [to_transfer_request(b) for b in decode_transfer_bodies(body)]
