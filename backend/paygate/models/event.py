"""Event ORM — append-only audit log with key/value metadata.

Invariants:
    - Events are never updated or deleted
    - event_metadata rows share (event_id, user_id) with their event
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from paygate.db.base import Base


class Event(Base):
    __tablename__ = "events"

    event_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    topic: Mapped[str] = mapped_column(Text, nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(String(32), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    metadata_entries: Mapped[list["EventMetadata"]] = relationship(
        "EventMetadata", back_populates="event",
        cascade="all, delete-orphan", lazy="selectin",
    )


class EventMetadata(Base):
    __tablename__ = "event_metadata"

    event_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("events.event_id"), primary_key=True,
    )
    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)

    event: Mapped["Event"] = relationship("Event", back_populates="metadata_entries")
