"""Request Dependencies — caller identity, request correlation, idempotency and clients.

Invariants:
    - X-User-Id is required on every transfer route; blank or absent -> MissingUserIdError (403)
    - X-Request-Id and X-Idempotency-Key are generated when absent
    - A replayed idempotency key raises IdempotentReplayError before the body is read
    - Long-lived collaborators (ACH client, ledger client, idempotency recorder)
      live on app.state, created by the lifespan; routes only see them through here
"""

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from paygate.config import get_settings
from paygate.core.domain_types import next_id
from paygate.core.errors import ErrorContext, IdempotentReplayError, MissingUserIdError
from paygate.infrastructure.ach_client import AchClient
from paygate.infrastructure.database import get_db
from paygate.infrastructure.idempotency import IdempotencyRecorder
from paygate.infrastructure.ledger_client import LedgerClient
from paygate.services.create_transfers import TransferCreator
from paygate.services.party_repositories import (
    SQLCustomerRepository,
    SQLDepositoryRepository,
    SQLOriginatorRepository,
)
from paygate.services.resolve_parties import PartyResolver
from paygate.services.submit_payment_record import SubmissionCoordinator


async def get_request_id(
    x_request_id: str | None = Header(None, alias="X-Request-Id"),
) -> str:
    return (x_request_id or "").strip() or next_id()


async def get_user_id(
    x_user_id: str | None = Header(None, alias="X-User-Id"),
    request_id: str = Depends(get_request_id),
) -> str:
    user_id = (x_user_id or "").strip()
    if not user_id:
        raise MissingUserIdError(ErrorContext(request_id=request_id))
    return user_id


def get_idempotency_recorder(request: Request) -> IdempotencyRecorder:
    return request.app.state.idempotency


def get_ach_client(request: Request) -> AchClient:
    return request.app.state.ach_client


def get_ledger_client(request: Request) -> LedgerClient | None:
    return getattr(request.app.state, "ledger_client", None)


async def require_fresh_idempotency_key(
    x_idempotency_key: str | None = Header(None, alias="X-Idempotency-Key"),
    user_id: str = Depends(get_user_id),
    request_id: str = Depends(get_request_id),
    recorder: IdempotencyRecorder = Depends(get_idempotency_recorder),
) -> str:
    """Mark the key as seen; a key marked within the TTL is a replay."""
    key = (x_idempotency_key or "").strip() or next_id()
    if await recorder.seen_before(key):
        raise IdempotentReplayError(
            key, ErrorContext(user_id=user_id, request_id=request_id),
        )
    return key


def get_transfer_creator(
    db: AsyncSession = Depends(get_db),
    ach: AchClient = Depends(get_ach_client),
    ledger: LedgerClient | None = Depends(get_ledger_client),
) -> TransferCreator:
    settings = get_settings()
    return TransferCreator(
        db,
        PartyResolver(
            SQLCustomerRepository(db),
            SQLDepositoryRepository(db),
            SQLOriginatorRepository(db),
        ),
        SubmissionCoordinator(ach),
        ledger,
        company_identification=settings.company_identification,
        default_company_name=settings.default_company_name,
    )
