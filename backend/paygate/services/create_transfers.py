"""Transfer Creation — resolves, submits and records a batch of transfer requests.

Invariants:
    - Requests are processed in order; the first failure aborts the whole batch
    - The batch is one DB transaction: every event and row commits together or
      none do
    - ACH files created before an abort are discarded (best effort) before the
      error propagates
    - The ACH file, the audit event and the transfer row share one transfer id
    - Ledger posting never stops a transfer

Design Decisions:
    - Each file is created with "<idempotency key>-<position>": one client key
      covers the batch while every file keeps a distinct downstream key
    - clock is injectable so tests pin file creation and effective dates
"""

import logging
from collections.abc import Callable
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from paygate.core.assemble_payment_record import (
    DEFAULT_COMPANY_IDENTIFICATION,
    DEFAULT_COMPANY_NAME,
    assemble_payment_record,
)
from paygate.core.domain_types import TransferId, next_id
from paygate.core.repository_protocols import LedgerService
from paygate.core.transfer import Transfer
from paygate.core.transfer_request import TransferRequest
from paygate.services.event_repository import SQLEventRepository, write_transfer_event
from paygate.services.post_ledger_transaction import post_ledger_transaction
from paygate.services.resolve_parties import PartyResolver
from paygate.services.submit_payment_record import SubmissionCoordinator
from paygate.services.transfer_repository import SQLTransferRepository

logger = logging.getLogger(__name__)


class TransferCreator:
    """Runs the create pipeline for one HTTP request's worth of transfers."""

    def __init__(
        self,
        db: AsyncSession,
        resolver: PartyResolver,
        coordinator: SubmissionCoordinator,
        ledger: LedgerService | None = None,
        *,
        company_identification: str = DEFAULT_COMPANY_IDENTIFICATION,
        default_company_name: str = DEFAULT_COMPANY_NAME,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.db = db
        self.resolver = resolver
        self.coordinator = coordinator
        self.ledger = ledger
        self.company_identification = company_identification
        self.default_company_name = default_company_name
        self.clock = clock

    async def create(
        self,
        requests: list[TransferRequest],
        user_id: str,
        idempotency_key: str,
        request_id: str | None = None,
    ) -> list[Transfer]:
        events = SQLEventRepository(self.db)
        transfers = SQLTransferRepository(self.db)
        submitted: list[str] = []
        try:
            for position, req in enumerate(requests):
                req.file_id = await self._submit(req, user_id, f"{idempotency_key}-{position}")
                submitted.append(req.file_id)
                await write_transfer_event(events, user_id, req)
            created = await transfers.create_user_transfers(user_id, requests)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            for file_id in submitted:
                await self.coordinator.discard(file_id, user_id)
            raise

        logger.info(
            f"Created {len(created)} transfer(s)",
            extra={"user_id": user_id, "request_id": request_id},
        )
        return created

    async def _submit(self, req: TransferRequest, user_id: str, file_key: str) -> str:
        req.transfer_id = TransferId(next_id())
        parties = await self.resolver.resolve(req, user_id)
        req.transaction_id = await post_ledger_transaction(
            self.ledger, parties, req.type, req.amount, user_id,
        )
        record = assemble_payment_record(
            req.as_transfer(),
            parties,
            now=self.clock(),
            user_id=user_id,
            company_identification=self.company_identification,
            default_company_name=self.default_company_name,
        )
        file_id = await self.coordinator.submit(record, file_key, user_id)
        logger.info(
            "Transfer submitted",
            extra={"transfer_id": str(req.transfer_id), "file_id": file_id, "user_id": user_id},
        )
        return file_id
