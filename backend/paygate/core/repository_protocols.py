"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - Every lookup is scoped by (entity id, user id); None means "absent or not yours"
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: SQL repositories and test fakes satisfy them structurally
"""

from typing import Protocol

from paygate.core.domain_types import CustomerId, DepositoryId, OriginatorId, TransferId
from paygate.core.parties import Customer, Depository, Originator
from paygate.core.payment_record import PaymentRecord
from paygate.core.transfer import Transfer
from paygate.core.transfer_filter import TransferFilter
from paygate.core.transfer_request import TransferRequest


class CustomerRepository(Protocol):
    async def get_user_customer(
        self, customer_id: CustomerId, user_id: str,
    ) -> Customer | None: ...


class DepositoryRepository(Protocol):
    async def get_user_depository(
        self, depository_id: DepositoryId, user_id: str,
    ) -> Depository | None: ...


class OriginatorRepository(Protocol):
    async def get_user_originator(
        self, originator_id: OriginatorId, user_id: str,
    ) -> Originator | None: ...


class TransferRepository(Protocol):
    async def get_user_transfers(
        self, user_id: str, filters: TransferFilter | None = None,
    ) -> list[Transfer]: ...
    async def get_user_transfer(
        self, transfer_id: TransferId, user_id: str,
    ) -> Transfer | None: ...
    async def get_file_id_for_transfer(
        self, transfer_id: TransferId, user_id: str,
    ) -> str | None: ...
    async def create_user_transfers(
        self, user_id: str, requests: list[TransferRequest],
    ) -> list[Transfer]: ...
    async def delete_user_transfer(
        self, transfer_id: TransferId, user_id: str,
    ) -> int: ...


class FileService(Protocol):
    """The external ACH file-building/validation service."""
    async def create_file(
        self, idempotency_key: str, record: PaymentRecord, user_id: str,
    ) -> str: ...
    async def get_file_contents(self, file_id: str, user_id: str) -> bytes: ...
    async def validate_file(self, file_id: str, user_id: str) -> None: ...
    async def delete_file(self, file_id: str, user_id: str) -> None: ...


class LedgerService(Protocol):
    async def create_transaction(
        self, transaction_id: str, lines: list[dict], data: dict,
    ) -> str: ...
