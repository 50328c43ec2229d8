"""Event — an append-only audit entry with free-form key/value metadata."""

from dataclasses import dataclass, field
from datetime import datetime

from paygate.core.domain_types import EventId, EventType
from paygate.core.transfer import utc_now


TRANSFER_ID_METADATA_KEY = "transferID"


@dataclass
class Event:
    id: EventId
    topic: str
    message: str
    type: EventType
    metadata: dict[str, str] = field(default_factory=dict)
    created: datetime = field(default_factory=utc_now)
