"""Transfer Routes — list, create, fetch, delete and audit transfers for the calling user.

Invariants:
    - Every route is scoped by X-User-Id; another user's transfer is a 404
    - POST /transfers and /transfers/batch share one handler: a single object in
      yields a single object out, an array in yields an array out
    - Idempotency is checked before the body is read
    - Listing filters by status and creation window (startDate, endDate) and pages
      with limit (default 100) and offset
    - DELETE removes the ACH file first (already-absent files are fine), then soft-deletes
"""

import logging

from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from paygate.api.deps import (
    get_ach_client,
    get_request_id,
    get_transfer_creator,
    get_user_id,
    require_fresh_idempotency_key,
)
from paygate.core.domain_types import TransferId
from paygate.core.errors import ResourceNotFoundError
from paygate.core.event import TRANSFER_ID_METADATA_KEY
from paygate.core.transfer import Transfer
from paygate.core.transfer_filter import DEFAULT_LIMIT, MAX_LIMIT, read_transfer_filter
from paygate.core.transfer_request import read_transfer_requests
from paygate.infrastructure.ach_client import AchClient
from paygate.infrastructure.database import get_db
from paygate.schemas.transfer import EventResponse, TransferResponse
from paygate.services.create_transfers import TransferCreator
from paygate.services.event_repository import SQLEventRepository
from paygate.services.transfer_repository import SQLTransferRepository

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/transfers", tags=["transfers"])


async def get_transfer_or_404(
    transfer_id: str, user_id: str, db: AsyncSession,
) -> Transfer:
    transfer = await SQLTransferRepository(db).get_user_transfer(
        TransferId(transfer_id), user_id,
    )
    if transfer is None:
        raise ResourceNotFoundError("Transfer", transfer_id)
    return transfer


@router.get("", response_model=list[TransferResponse])
async def list_transfers(
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    offset: int = Query(0, ge=0),
    status_filter: str | None = Query(None, alias="status"),
    start_date: str | None = Query(None, alias="startDate"),
    end_date: str | None = Query(None, alias="endDate"),
    user_id: str = Depends(get_user_id),
    db: AsyncSession = Depends(get_db),
):
    """List the caller's transfers, newest first."""
    filters = read_transfer_filter(
        status=status_filter, start_date=start_date, end_date=end_date,
        limit=limit, offset=offset,
    )
    transfers = await SQLTransferRepository(db).get_user_transfers(user_id, filters)
    return [TransferResponse.from_transfer(t) for t in transfers]


@router.post("", status_code=status.HTTP_200_OK)
@router.post("/batch", status_code=status.HTTP_200_OK)
async def create_transfers(
    request: Request,
    user_id: str = Depends(get_user_id),
    request_id: str = Depends(get_request_id),
    idempotency_key: str = Depends(require_fresh_idempotency_key),
    creator: TransferCreator = Depends(get_transfer_creator),
):
    """Create one transfer (object body) or many (array body)."""
    body = await request.body()
    requests = read_transfer_requests(body)
    transfers = await creator.create(requests, user_id, idempotency_key, request_id)
    responses = [
        TransferResponse.from_transfer(t).model_dump(mode="json", by_alias=True)
        for t in transfers
    ]
    if body.lstrip().startswith(b"["):
        return responses
    return responses[0]


@router.get("/{transfer_id}", response_model=TransferResponse)
async def get_transfer(
    transfer_id: str,
    user_id: str = Depends(get_user_id),
    db: AsyncSession = Depends(get_db),
):
    transfer = await get_transfer_or_404(transfer_id, user_id, db)
    return TransferResponse.from_transfer(transfer)


@router.delete("/{transfer_id}", status_code=status.HTTP_200_OK)
async def delete_transfer(
    transfer_id: str,
    user_id: str = Depends(get_user_id),
    _idempotency_key: str = Depends(require_fresh_idempotency_key),
    db: AsyncSession = Depends(get_db),
    ach: AchClient = Depends(get_ach_client),
):
    repo = SQLTransferRepository(db)
    await get_transfer_or_404(transfer_id, user_id, db)

    file_id = await repo.get_file_id_for_transfer(TransferId(transfer_id), user_id)
    if file_id:
        await ach.delete_file(file_id, user_id)

    await repo.delete_user_transfer(TransferId(transfer_id), user_id)
    await db.commit()
    return Response(status_code=status.HTTP_200_OK)


@router.get("/{transfer_id}/events", response_model=list[EventResponse])
async def list_transfer_events(
    transfer_id: str,
    user_id: str = Depends(get_user_id),
    db: AsyncSession = Depends(get_db),
):
    transfer = await get_transfer_or_404(transfer_id, user_id, db)
    events = await SQLEventRepository(db).get_user_events_by_metadata(
        user_id, {TRANSFER_ID_METADATA_KEY: str(transfer.id)},
    )
    return [EventResponse.from_event(e) for e in events]


@router.post("/{transfer_id}/failed", status_code=status.HTTP_200_OK)
async def mark_transfer_failed(
    transfer_id: str,
    user_id: str = Depends(get_user_id),
):
    """Acknowledged without effect."""
    return Response(status_code=status.HTTP_200_OK)


@router.post("/{transfer_id}/files", response_class=PlainTextResponse)
async def get_transfer_files(
    transfer_id: str,
    user_id: str = Depends(get_user_id),
):
    return PlainTextResponse("files, todo")
