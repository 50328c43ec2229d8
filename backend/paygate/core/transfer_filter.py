"""Transfer Filter — status, creation window and paging for listing a user's transfers.

Invariants:
    - Pure: no IO, no clock reads; an absent end date means no upper bound
    - start/end are UTC-aware and inclusive on both ends
    - startDate reads six digits as YYMMDD and anything else as ISO 8601;
      endDate reads ISO 8601 only
    - Naive date-times are taken as UTC
"""

from dataclasses import dataclass
from datetime import datetime, timezone

from paygate.core.domain_types import TransferStatus, parse_enum
from paygate.core.errors import InvalidEnumValueError, InvalidQueryParameterError


DEFAULT_LIMIT = 100
MAX_LIMIT = 1000
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class TransferFilter:
    status: TransferStatus | None = None
    start: datetime = EPOCH
    end: datetime | None = None
    limit: int = DEFAULT_LIMIT
    offset: int = 0


def _iso8601(text: str) -> datetime | None:
    try:
        value = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _yymmdd(text: str) -> datetime | None:
    try:
        return datetime.strptime(text, "%y%m%d").replace(tzinfo=timezone.utc)
    except ValueError:
        return None


def read_transfer_filter(
    *,
    status: str | None = None,
    start_date: str | None = None,
    end_date: str | None = None,
    limit: int = DEFAULT_LIMIT,
    offset: int = 0,
) -> TransferFilter:
    """Build a TransferFilter from raw query values. Raises RequestValidationFailure subclasses."""
    parsed_status = None
    if status and status.strip():
        try:
            parsed_status = parse_enum(TransferStatus, status)
        except InvalidEnumValueError:
            raise InvalidQueryParameterError("status", status)

    start = EPOCH
    if start_date and start_date.strip():
        text = start_date.strip()
        start = _yymmdd(text) if len(text) == 6 and text.isdigit() else _iso8601(text)
        if start is None:
            raise InvalidQueryParameterError("startDate", start_date)

    end = None
    if end_date and end_date.strip():
        end = _iso8601(end_date.strip())
        if end is None:
            raise InvalidQueryParameterError("endDate", end_date)

    return TransferFilter(
        status=parsed_status, start=start, end=end, limit=limit, offset=offset,
    )
