"""Party Resolver — loads and checks the four parties a transfer request names.

Invariants:
    - Fixed order: Customer -> CustomerDepository -> Originator -> OriginatorDepository
    - Sequential; the first failure stops resolution and is raised
    - Absent and other-user entities look the same (ResourceNotFoundError)
    - Depositories must be verified (checked before their own validate())
    - Returns all four parties or raises; never a partial set
"""

import logging

from paygate.core.domain_types import DepositoryId, DepositoryStatus, enum_equals
from paygate.core.errors import (
    DepositoryNotVerifiedError,
    PartyValidationError,
    ResourceNotFoundError,
)
from paygate.core.parties import Depository, ResolvedParties
from paygate.core.repository_protocols import (
    CustomerRepository,
    DepositoryRepository,
    OriginatorRepository,
)
from paygate.core.transfer_request import TransferRequest

logger = logging.getLogger(__name__)


class PartyResolver:
    def __init__(
        self,
        customers: CustomerRepository,
        depositories: DepositoryRepository,
        originators: OriginatorRepository,
    ):
        self.customers = customers
        self.depositories = depositories
        self.originators = originators

    async def resolve(self, request: TransferRequest, user_id: str) -> ResolvedParties:
        customer = await self.customers.get_user_customer(request.customer, user_id)
        if customer is None:
            raise ResourceNotFoundError("Customer", str(request.customer))
        _validate("customer", customer)

        customer_depository = await self._verified_depository(
            "customer depository", request.customer_depository, user_id,
        )

        originator = await self.originators.get_user_originator(request.originator, user_id)
        if originator is None:
            raise ResourceNotFoundError("Originator", str(request.originator))
        _validate("originator", originator)

        originator_depository = await self._verified_depository(
            "originator depository", request.originator_depository, user_id,
        )

        return ResolvedParties(
            customer=customer,
            customer_depository=customer_depository,
            originator=originator,
            originator_depository=originator_depository,
        )

    async def _verified_depository(
        self, label: str, depository_id: DepositoryId, user_id: str,
    ) -> Depository:
        depository = await self.depositories.get_user_depository(depository_id, user_id)
        if depository is None:
            raise ResourceNotFoundError("Depository", str(depository_id))
        if not enum_equals(depository.status, DepositoryStatus.VERIFIED):
            status = getattr(depository.status, "value", str(depository.status))
            logger.info(
                f"{label} {depository.id} rejected in status {status}",
                extra={"user_id": user_id},
            )
            raise DepositoryNotVerifiedError(label, str(depository.id), status)
        _validate(label, depository)
        return depository


def _validate(prefix: str, entity) -> None:
    try:
        entity.validate()
    except ValueError as e:
        raise PartyValidationError(prefix, str(e))
