"""Transfer Filter — query values become a UTC window, a status and paging."""

from datetime import datetime, timedelta, timezone

import pytest

from paygate.core.domain_types import TransferStatus
from paygate.core.errors import InvalidQueryParameterError
from paygate.core.transfer_filter import EPOCH, read_transfer_filter


def test_defaults():
    filters = read_transfer_filter()
    assert filters.status is None
    assert filters.start == EPOCH
    assert filters.end is None
    assert (filters.limit, filters.offset) == (100, 0)


def test_status_is_case_insensitive():
    assert read_transfer_filter(status="Failed").status is TransferStatus.FAILED


def test_blank_values_are_ignored():
    filters = read_transfer_filter(status=" ", start_date="", end_date=" ")
    assert filters.status is None
    assert filters.start == EPOCH
    assert filters.end is None


def test_start_date_reads_yymmdd():
    assert read_transfer_filter(start_date="250131").start == datetime(
        2025, 1, 31, tzinfo=timezone.utc,
    )


def test_dates_read_iso8601_as_utc():
    filters = read_transfer_filter(
        start_date="2025-01-31", end_date="2025-02-01T09:30:00-05:00",
    )
    assert filters.start == datetime(2025, 1, 31, tzinfo=timezone.utc)
    assert filters.end == datetime(2025, 2, 1, 14, 30, tzinfo=timezone.utc)
    assert filters.end.utcoffset() == timedelta(0)


@pytest.mark.parametrize("field,kwargs", [
    ("status", {"status": "lost"}),
    ("startDate", {"start_date": "01/31/2025"}),
    ("endDate", {"end_date": "2025/01/31"}),
])
def test_unreadable_values_name_the_parameter(field, kwargs):
    with pytest.raises(InvalidQueryParameterError) as exc:
        read_transfer_filter(**kwargs)
    assert exc.value.name == field
    assert exc.value.http_status == 400
