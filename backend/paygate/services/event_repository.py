"""Event Repository — append-only audit log in SQL.

Invariants:
    - write_event inserts the event and its metadata rows; it flushes, never commits
    - Reads are scoped by user_id
    - get_user_events_by_metadata matches events carrying every given key/value pair
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from paygate.core.domain_types import EventId, EventType, parse_enum
from paygate.core.event import TRANSFER_ID_METADATA_KEY, Event
from paygate.core.transfer_request import TransferRequest
from paygate.models.event import Event as EventModel, EventMetadata
from paygate.services.transfer_repository import as_utc


def _to_domain(row: EventModel) -> Event:
    return Event(
        id=EventId(row.event_id),
        topic=row.topic,
        message=row.message,
        type=parse_enum(EventType, row.type),
        metadata={m.key: m.value for m in row.metadata_entries},
        created=as_utc(row.created_at),
    )


class SQLEventRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def write_event(self, user_id: str, event: Event) -> None:
        row = EventModel(
            event_id=str(event.id),
            user_id=user_id,
            topic=event.topic,
            message=event.message,
            type=event.type.value,
            created_at=event.created,
            metadata_entries=[
                EventMetadata(event_id=str(event.id), user_id=user_id, key=k, value=v)
                for k, v in event.metadata.items()
            ],
        )
        self.db.add(row)
        await self.db.flush()

    async def get_event(self, event_id: EventId, user_id: str) -> Event | None:
        result = await self.db.execute(
            select(EventModel)
            .where(EventModel.event_id == str(event_id))
            .where(EventModel.user_id == user_id)
        )
        row = result.scalar_one_or_none()
        return _to_domain(row) if row else None

    async def get_user_events(self, user_id: str) -> list[Event]:
        result = await self.db.execute(
            select(EventModel)
            .where(EventModel.user_id == user_id)
            .order_by(EventModel.created_at.desc())
        )
        return [_to_domain(row) for row in result.scalars().all()]

    async def get_user_events_by_metadata(
        self, user_id: str, metadata: dict[str, str],
    ) -> list[Event]:
        query = select(EventModel).where(EventModel.user_id == user_id)
        for key, value in metadata.items():
            query = query.where(EventModel.event_id.in_(
                select(EventMetadata.event_id)
                .where(EventMetadata.user_id == user_id)
                .where(EventMetadata.key == key)
                .where(EventMetadata.value == value)
            ))
        result = await self.db.execute(query.order_by(EventModel.created_at.desc()))
        return [_to_domain(row) for row in result.scalars().all()]


async def write_transfer_event(
    repo: SQLEventRepository, user_id: str, request: TransferRequest,
) -> Event:
    """Record that a transfer was accepted. Shares its id with the transfer."""
    transfer_id = str(request.transfer_id)
    event = Event(
        id=EventId(transfer_id),
        topic=f"{request.type.value} transfer to {request.description}",
        message=request.description,
        type=EventType.TRANSFER,
        metadata={TRANSFER_ID_METADATA_KEY: transfer_id},
    )
    await repo.write_event(user_id, event)
    return event
