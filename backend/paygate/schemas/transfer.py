"""Transfer Schemas — Pydantic models for the transfer API boundary.

Invariants:
    - Wire names are camelCase (transferType, originatorDepository, ...);
      Python attributes are snake_case
    - TransferCreate accepts blanks: required-field checks live in
      core/transfer_request.py so every missing field is reported at once
    - Responses render amount as the canonical "<CCY> <decimal>" string
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from paygate.core.event import Event
from paygate.core.transfer import Transfer


class TransferCreate(BaseModel):
    """One transfer as posted by the client."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    transfer_type: str | None = Field(None, alias="transferType")
    amount: str | None = None
    originator: str | None = None
    originator_depository: str | None = Field(None, alias="originatorDepository")
    customer: str | None = None
    customer_depository: str | None = Field(None, alias="customerDepository")
    description: str | None = None
    standard_entry_class_code: str | None = Field(None, alias="standardEntryClassCode")
    same_day: bool = Field(False, alias="sameDay")


class TransferResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    transfer_type: str = Field(alias="transferType")
    amount: str
    originator: str
    originator_depository: str = Field(alias="originatorDepository")
    customer: str
    customer_depository: str = Field(alias="customerDepository")
    description: str
    standard_entry_class_code: str = Field(alias="standardEntryClassCode")
    status: str
    same_day: bool = Field(alias="sameDay")
    created: datetime

    @classmethod
    def from_transfer(cls, transfer: Transfer) -> "TransferResponse":
        return cls(
            id=str(transfer.id),
            transfer_type=transfer.type.value,
            amount=str(transfer.amount),
            originator=str(transfer.originator),
            originator_depository=str(transfer.originator_depository),
            customer=str(transfer.customer),
            customer_depository=str(transfer.customer_depository),
            description=transfer.description,
            standard_entry_class_code=transfer.standard_entry_class_code,
            status=transfer.status.value,
            same_day=transfer.same_day,
            created=transfer.created,
        )


class EventResponse(BaseModel):
    id: str
    topic: str
    message: str
    type: str
    metadata: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_event(cls, event: Event) -> "EventResponse":
        return cls(
            id=str(event.id), topic=event.topic, message=event.message,
            type=event.type.value, metadata=event.metadata,
        )
