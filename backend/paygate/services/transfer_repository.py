"""Transfer Repository — SQL persistence for Transfers, scoped per user.

Invariants:
    - Reads never return soft-deleted rows
    - Listing orders by created_at descending and applies limit/offset after filtering
    - create_user_transfers writes every row as pending, validating each before it
      is added; it flushes inside the caller's transaction and never commits
    - delete_user_transfer is a soft delete returning the affected row count;
      absent or already-deleted rows affect zero rows and raise nothing
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from paygate.core.amount import Amount
from paygate.core.domain_types import (
    CustomerId,
    DepositoryId,
    OriginatorId,
    TransferId,
    TransferStatus,
    TransferType,
    next_id,
    parse_enum,
)
from paygate.core.errors import PaygateError, TransferValidationError
from paygate.core.transfer import Transfer
from paygate.core.transfer_filter import TransferFilter
from paygate.core.transfer_request import TransferRequest
from paygate.models.transfer import Transfer as TransferModel

logger = logging.getLogger(__name__)


def as_utc(value: datetime) -> datetime:
    """sqlite hands back naive datetimes; everything stored is UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def to_domain(row: TransferModel) -> Transfer:
    return Transfer(
        id=TransferId(row.transfer_id),
        type=parse_enum(TransferType, row.type),
        amount=Amount(row.amount_currency, row.amount_minor_units),
        originator=OriginatorId(row.originator_id),
        originator_depository=DepositoryId(row.originator_depository),
        customer=CustomerId(row.customer),
        customer_depository=DepositoryId(row.customer_depository),
        description=row.description,
        standard_entry_class_code=row.standard_entry_class_code,
        status=parse_enum(TransferStatus, row.status),
        same_day=row.same_day,
        created=as_utc(row.created_at),
    )


class SQLTransferRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    def _live(self, user_id: str):
        return (
            select(TransferModel)
            .where(TransferModel.user_id == user_id)
            .where(TransferModel.deleted_at.is_(None))
        )

    async def get_user_transfers(
        self, user_id: str, filters: TransferFilter | None = None,
    ) -> list[Transfer]:
        """Newest first, narrowed by status and creation window, then paged."""
        filters = filters or TransferFilter()
        query = self._live(user_id).where(TransferModel.created_at >= filters.start)
        if filters.end is not None:
            query = query.where(TransferModel.created_at <= filters.end)
        if filters.status is not None:
            query = query.where(TransferModel.status == filters.status.value)
        result = await self.db.execute(
            query.order_by(TransferModel.created_at.desc())
            .limit(filters.limit)
            .offset(filters.offset),
        )
        return [to_domain(row) for row in result.scalars().all()]

    async def get_user_transfer(
        self, transfer_id: TransferId, user_id: str,
    ) -> Transfer | None:
        result = await self.db.execute(
            self._live(user_id).where(TransferModel.transfer_id == str(transfer_id)),
        )
        row = result.scalar_one_or_none()
        return to_domain(row) if row else None

    async def get_file_id_for_transfer(
        self, transfer_id: TransferId, user_id: str,
    ) -> str | None:
        result = await self.db.execute(
            select(TransferModel.file_id)
            .where(TransferModel.transfer_id == str(transfer_id))
            .where(TransferModel.user_id == user_id)
            .where(TransferModel.deleted_at.is_(None))
        )
        return result.scalar_one_or_none()

    async def create_user_transfers(
        self, user_id: str, requests: list[TransferRequest],
    ) -> list[Transfer]:
        transfers: list[Transfer] = []
        for req in requests:
            transfer = req.as_transfer(req.transfer_id or TransferId(next_id()))
            try:
                transfer.validate()
            except PaygateError as e:
                raise TransferValidationError(
                    str(transfer.originator), str(transfer.customer),
                    transfer.description, e.message,
                )
            self.db.add(TransferModel(
                transfer_id=str(transfer.id),
                user_id=user_id,
                type=transfer.type.value,
                amount_currency=transfer.amount.currency,
                amount_minor_units=transfer.amount.minor_units,
                originator_id=str(transfer.originator),
                originator_depository=str(transfer.originator_depository),
                customer=str(transfer.customer),
                customer_depository=str(transfer.customer_depository),
                description=transfer.description,
                standard_entry_class_code=transfer.standard_entry_class_code,
                status=transfer.status.value,
                same_day=transfer.same_day,
                file_id=req.file_id,
                transaction_id=req.transaction_id,
                created_at=transfer.created,
            ))
            transfers.append(transfer)
        await self.db.flush()
        return transfers

    async def delete_user_transfer(
        self, transfer_id: TransferId, user_id: str,
    ) -> int:
        result = await self.db.execute(
            update(TransferModel)
            .where(TransferModel.transfer_id == str(transfer_id))
            .where(TransferModel.user_id == user_id)
            .where(TransferModel.deleted_at.is_(None))
            .values(deleted_at=datetime.now(timezone.utc))
        )
        if result.rowcount:
            logger.info(
                "Transfer soft-deleted",
                extra={"transfer_id": str(transfer_id), "user_id": user_id},
            )
        return result.rowcount
