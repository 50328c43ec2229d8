"""Transfer Parties — read-only views of Customer, Originator and Depository.

Invariants:
    - The core never mutates these; repositories hand out fresh instances
    - validate() raises ValueError with a human-readable reason, returns None on success
    - ResolvedParties is only ever constructed with all four parties present
"""

from dataclasses import dataclass

from paygate.core.domain_types import (
    AccountType,
    CustomerId,
    CustomerStatus,
    DepositoryId,
    DepositoryStatus,
    HolderType,
    OriginatorId,
)
from paygate.core.routing_numbers import check_routing_number


@dataclass(frozen=True)
class Customer:
    id: CustomerId
    email: str
    default_depository: DepositoryId
    status: CustomerStatus
    metadata: str = ""

    def validate(self) -> None:
        if not isinstance(self.status, CustomerStatus):
            raise ValueError(f"CustomerStatus({self.status}) is invalid")
        if not self.email:
            raise ValueError("missing Customer.Email")


@dataclass(frozen=True)
class Originator:
    id: OriginatorId
    default_depository: DepositoryId
    identification: str
    metadata: str = ""

    def validate(self) -> None:
        if not self.default_depository:
            raise ValueError("missing Originator.DefaultDepository")
        if not self.identification:
            raise ValueError("missing Originator.Identification")


@dataclass(frozen=True)
class Depository:
    id: DepositoryId
    bank_name: str
    holder: str
    holder_type: HolderType
    type: AccountType
    routing_number: str
    account_number: str
    status: DepositoryStatus
    metadata: str = ""

    def validate(self) -> None:
        if not isinstance(self.holder_type, HolderType):
            raise ValueError(f"HolderType({self.holder_type}) is invalid")
        if not isinstance(self.type, AccountType):
            raise ValueError(f"AccountType({self.type}) is invalid")
        if not isinstance(self.status, DepositoryStatus):
            raise ValueError(f"DepositoryStatus({self.status}) is invalid")
        problem = check_routing_number(self.routing_number)
        if problem:
            raise ValueError(problem)


@dataclass(frozen=True)
class ResolvedParties:
    customer: Customer
    customer_depository: Depository
    originator: Originator
    originator_depository: Depository
