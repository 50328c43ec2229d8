"""Transfer — the persisted record of a money movement between two parties.

Invariants:
    - amount valid per currency rules, description non-empty, status in TransferStatus
    - validate() raises the first violated invariant as a PaygateError subclass
    - created is UTC with second resolution
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from paygate.core.amount import Amount
from paygate.core.domain_types import (
    CustomerId,
    DepositoryId,
    OriginatorId,
    TransferId,
    TransferStatus,
    TransferType,
    parse_enum,
)
from paygate.core.errors import RequestValidationFailure


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0)


@dataclass
class Transfer:
    id: TransferId
    type: TransferType
    amount: Amount
    originator: OriginatorId
    originator_depository: DepositoryId
    customer: CustomerId
    customer_depository: DepositoryId
    description: str
    standard_entry_class_code: str
    status: TransferStatus = TransferStatus.PENDING
    same_day: bool = False
    created: datetime = field(default_factory=utc_now)

    def validate(self) -> None:
        self.amount.validate()
        parse_enum(TransferStatus, self.status)
        if not self.description:
            raise RequestValidationFailure(
                "Transfer: missing description", "TRANSFER_INVALID",
            )
