"""Event Routes — read-only access to the calling user's audit events.

Invariants:
    - Every read is scoped by X-User-Id; another user's event is a 404
    - Events are listed newest first
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from paygate.api.deps import get_user_id
from paygate.core.domain_types import EventId
from paygate.core.errors import ResourceNotFoundError
from paygate.infrastructure.database import get_db
from paygate.schemas.transfer import EventResponse
from paygate.services.event_repository import SQLEventRepository

router = APIRouter(prefix="/api/v1/events", tags=["events"])


@router.get("", response_model=list[EventResponse])
async def list_events(
    user_id: str = Depends(get_user_id),
    db: AsyncSession = Depends(get_db),
):
    events = await SQLEventRepository(db).get_user_events(user_id)
    return [EventResponse.from_event(e) for e in events]


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(
    event_id: str,
    user_id: str = Depends(get_user_id),
    db: AsyncSession = Depends(get_db),
):
    event = await SQLEventRepository(db).get_event(EventId(event_id), user_id)
    if event is None:
        raise ResourceNotFoundError("Event", event_id)
    return EventResponse.from_event(event)
