"""Transaction Codes — every account type, direction and entry kind has one code."""

import pytest

from paygate.core.domain_types import AccountType, TransferType
from paygate.core.transaction_codes import (
    TRANSACTION_CODES,
    Direction,
    EntryKind,
    direction_for,
    service_class_code,
    transaction_code,
)


@pytest.mark.parametrize("account_type,direction,kind,code", [
    (AccountType.CHECKING, Direction.CREDIT, EntryKind.LIVE, 22),
    (AccountType.CHECKING, Direction.CREDIT, EntryKind.PRENOTE, 23),
    (AccountType.CHECKING, Direction.DEBIT, EntryKind.LIVE, 27),
    (AccountType.CHECKING, Direction.DEBIT, EntryKind.PRENOTE, 28),
    (AccountType.SAVINGS, Direction.CREDIT, EntryKind.LIVE, 32),
    (AccountType.SAVINGS, Direction.CREDIT, EntryKind.PRENOTE, 33),
    (AccountType.SAVINGS, Direction.DEBIT, EntryKind.LIVE, 37),
    (AccountType.SAVINGS, Direction.DEBIT, EntryKind.PRENOTE, 38),
])
def test_transaction_code_table(account_type, direction, kind, code):
    assert transaction_code(account_type, direction, kind) == code


def test_table_is_complete():
    assert len(TRANSACTION_CODES) == len(AccountType) * len(Direction) * len(EntryKind)


def test_push_credits_and_pull_debits():
    assert direction_for(TransferType.PUSH) is Direction.CREDIT
    assert direction_for(TransferType.PULL) is Direction.DEBIT


def test_service_class_codes():
    assert service_class_code(Direction.CREDIT) == 220
    assert service_class_code(Direction.DEBIT) == 225
