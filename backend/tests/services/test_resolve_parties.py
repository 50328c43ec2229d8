"""Party Resolver — fixed lookup order, ownership scoping and status checks.

Invariants:
    - Other users' entities are indistinguishable from absent ones
    - The first failing lookup wins (customer before depositories before originator)
    - Unverified depositories are rejected with their id and status
    - Validation failures carry the party prefix
"""

import pytest

from paygate.core.amount import Amount
from paygate.core.domain_types import (
    CustomerId,
    DepositoryId,
    DepositoryStatus,
    OriginatorId,
    TransferType,
)
from paygate.core.errors import (
    DepositoryNotVerifiedError,
    PartyValidationError,
    ResourceNotFoundError,
)
from paygate.core.transfer_request import TransferRequest
from paygate.services.party_repositories import (
    SQLCustomerRepository,
    SQLDepositoryRepository,
    SQLOriginatorRepository,
)
from paygate.services.resolve_parties import PartyResolver
from tests.factories import USER_ID, make_depository, make_originator


def _request(**overrides) -> TransferRequest:
    fields = dict(
        type=TransferType.PUSH,
        amount=Amount("USD", 12500),
        originator=OriginatorId("orig-1"),
        originator_depository=DepositoryId("dep-orig"),
        customer=CustomerId("cust-1"),
        customer_depository=DepositoryId("dep-cust"),
        description="paycheck",
        standard_entry_class_code="PPD",
    )
    fields.update(overrides)
    return TransferRequest(**fields)


@pytest.fixture
def resolver(test_db):
    return PartyResolver(
        SQLCustomerRepository(test_db),
        SQLDepositoryRepository(test_db),
        SQLOriginatorRepository(test_db),
    )


async def test_resolves_all_four(resolver, seeded_parties):
    resolved = await resolver.resolve(_request(), USER_ID)
    assert resolved == seeded_parties


async def test_ids_are_case_insensitive(resolver, seeded_parties):
    resolved = await resolver.resolve(_request(customer=CustomerId("CUST-1")), USER_ID)
    assert resolved.customer.id == CustomerId("cust-1")


async def test_other_users_customer_is_not_found(resolver, seeded_parties):
    with pytest.raises(ResourceNotFoundError, match="Customer 'cust-1' not found"):
        await resolver.resolve(_request(), "user-2")


async def test_customer_checked_before_depositories(resolver, seeded_parties):
    request = _request(
        customer=CustomerId("nobody"), customer_depository=DepositoryId("nowhere"),
    )
    with pytest.raises(ResourceNotFoundError) as exc:
        await resolver.resolve(request, USER_ID)
    assert exc.value.resource_type == "Customer"


async def test_missing_customer_depository(resolver, seeded_parties):
    with pytest.raises(ResourceNotFoundError, match="Depository 'nowhere'"):
        await resolver.resolve(_request(customer_depository=DepositoryId("nowhere")), USER_ID)


async def test_missing_originator(resolver, seeded_parties):
    with pytest.raises(ResourceNotFoundError, match="Originator 'orig-2'"):
        await resolver.resolve(_request(originator=OriginatorId("orig-2")), USER_ID)


async def test_unverified_customer_depository(resolver, seeded_parties, test_db):
    await SQLDepositoryRepository(test_db).add(
        USER_ID, make_depository(id=DepositoryId("dep-new"), status=DepositoryStatus.UNVERIFIED),
    )
    with pytest.raises(DepositoryNotVerifiedError) as exc:
        await resolver.resolve(_request(customer_depository=DepositoryId("dep-new")), USER_ID)
    assert exc.value.message == "customer depository dep-new is in status unverified"


async def test_rejected_originator_depository(resolver, seeded_parties, test_db):
    await SQLDepositoryRepository(test_db).add(
        USER_ID, make_depository(id=DepositoryId("dep-bad"), status=DepositoryStatus.REJECTED),
    )
    with pytest.raises(DepositoryNotVerifiedError, match="originator depository dep-bad"):
        await resolver.resolve(_request(originator_depository=DepositoryId("dep-bad")), USER_ID)


async def test_invalid_depository_is_prefixed(resolver, seeded_parties, test_db):
    await SQLDepositoryRepository(test_db).add(
        USER_ID, make_depository(id=DepositoryId("dep-rtn"), routing_number="123456789"),
    )
    with pytest.raises(PartyValidationError, match="^customer depository: .*checksum"):
        await resolver.resolve(_request(customer_depository=DepositoryId("dep-rtn")), USER_ID)


async def test_invalid_originator_is_prefixed(resolver, seeded_parties, test_db):
    await SQLOriginatorRepository(test_db).add(
        USER_ID, make_originator(id=OriginatorId("orig-x"), identification=""),
    )
    with pytest.raises(PartyValidationError) as exc:
        await resolver.resolve(_request(originator=OriginatorId("orig-x")), USER_ID)
    assert exc.value.message == "originator: missing Originator.Identification"
    assert exc.value.http_status == 400
