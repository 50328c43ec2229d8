"""Test builders — valid domain objects with per-test overrides."""

from paygate.core.amount import Amount
from paygate.core.domain_types import (
    AccountType,
    CustomerId,
    CustomerStatus,
    DepositoryId,
    DepositoryStatus,
    HolderType,
    OriginatorId,
    TransferId,
    TransferType,
)
from paygate.core.parties import (
    Customer,
    Depository,
    Originator,
    ResolvedParties,
)
from paygate.core.transfer import Transfer

USER_ID = "user-1"


def make_customer(**overrides) -> Customer:
    fields = dict(
        id=CustomerId("cust-1"),
        email="jane@example.com",
        default_depository=DepositoryId("dep-cust"),
        status=CustomerStatus.VERIFIED,
        metadata="Jane Doe",
    )
    fields.update(overrides)
    return Customer(**fields)


def make_originator(**overrides) -> Originator:
    fields = dict(
        id=OriginatorId("orig-1"),
        default_depository=DepositoryId("dep-orig"),
        identification="121042882",
        metadata="Acme Corp",
    )
    fields.update(overrides)
    return Originator(**fields)


def make_depository(**overrides) -> Depository:
    fields = dict(
        id=DepositoryId("dep-cust"),
        bank_name="Customer Bank",
        holder="Jane Doe",
        holder_type=HolderType.INDIVIDUAL,
        type=AccountType.CHECKING,
        routing_number="123456780",
        account_number="151",
        status=DepositoryStatus.VERIFIED,
    )
    fields.update(overrides)
    return Depository(**fields)


def make_parties(**overrides) -> ResolvedParties:
    fields = dict(
        customer=make_customer(),
        customer_depository=make_depository(),
        originator=make_originator(),
        originator_depository=make_depository(
            id=DepositoryId("dep-orig"),
            bank_name="Originator Bank",
            holder="Acme Corp",
            holder_type=HolderType.BUSINESS,
            routing_number="987654320",
            account_number="7654321",
        ),
    )
    fields.update(overrides)
    return ResolvedParties(**fields)


def make_transfer(**overrides) -> Transfer:
    fields = dict(
        id=TransferId("xfer-1"),
        type=TransferType.PUSH,
        amount=Amount.parse("USD 125.00"),
        originator=OriginatorId("orig-1"),
        originator_depository=DepositoryId("dep-orig"),
        customer=CustomerId("cust-1"),
        customer_depository=DepositoryId("dep-cust"),
        description="paycheck",
        standard_entry_class_code="ppd",
    )
    fields.update(overrides)
    return Transfer(**fields)
