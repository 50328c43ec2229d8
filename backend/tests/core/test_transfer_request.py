"""Transfer Requests — decoding single/array bodies and reporting missing fields.

Invariants:
    - A single object and a one-element array decode to the same request list
    - The missing-field error names exactly the blank required fields, in order
    - Empty, non-JSON and empty-array bodies are EmptyRequestError
"""

import itertools
import json

import pytest

from paygate.core.amount import Amount
from paygate.core.domain_types import CustomerId, DepositoryId, TransferId, TransferType
from paygate.core.errors import (
    EmptyRequestError,
    InvalidAmountError,
    InvalidEnumValueError,
    MissingFieldsError,
)
from paygate.core.transfer_request import REQUIRED_FIELDS, read_transfer_requests


def _body(**overrides) -> dict:
    body = {
        "transferType": "push",
        "amount": "USD 125.00",
        "originator": "orig-1",
        "originatorDepository": "dep-orig",
        "customer": "cust-1",
        "customerDepository": "dep-cust",
        "description": "paycheck",
        "standardEntryClassCode": "PPD",
    }
    body.update(overrides)
    return body


def _raw(payload) -> bytes:
    return json.dumps(payload).encode()


def test_single_object_decodes_to_one_request():
    [req] = read_transfer_requests(_raw(_body()))
    assert req.type is TransferType.PUSH
    assert req.amount == Amount("USD", 12500)
    assert req.customer == CustomerId("cust-1")
    assert req.customer_depository == DepositoryId("dep-cust")
    assert req.description == "paycheck"
    assert req.same_day is False


def test_array_decodes_in_order():
    reqs = read_transfer_requests(_raw([
        _body(description="first"), _body(description="second", transferType="pull"),
    ]))
    assert [r.description for r in reqs] == ["first", "second"]
    assert reqs[1].type is TransferType.PULL


def test_single_object_and_singleton_array_are_equivalent():
    assert read_transfer_requests(_raw(_body())) == read_transfer_requests(_raw([_body()]))


def test_same_day_flag_is_read():
    [req] = read_transfer_requests(_raw(_body(sameDay=True)))
    assert req.same_day is True


@pytest.mark.parametrize("body", [b"", b"   ", b"not json", b"[]", b"42", b'"text"'])
def test_bodies_without_transfers_are_rejected(body):
    with pytest.raises(EmptyRequestError, match="no Transfer request objects found"):
        read_transfer_requests(body)


@pytest.mark.parametrize("missing", [
    combo
    for size in (1, 2, len(REQUIRED_FIELDS))
    for combo in itertools.combinations(REQUIRED_FIELDS, size)
])
def test_missing_fields_are_all_reported(missing):
    body = _body()
    for name in missing:
        del body[name]
    with pytest.raises(MissingFieldsError) as exc:
        read_transfer_requests(_raw(body))
    assert exc.value.fields == list(missing)
    assert exc.value.message == f"missing {', '.join(missing)} JSON field(s)"


def test_blank_strings_count_as_missing():
    with pytest.raises(MissingFieldsError) as exc:
        read_transfer_requests(_raw(_body(customer="  ", amount="")))
    assert exc.value.fields == ["amount", "customer"]


def test_description_is_not_required_at_decode():
    body = _body()
    del body["description"]
    [req] = read_transfer_requests(_raw(body))
    assert req.description == ""


def test_unknown_transfer_type():
    with pytest.raises(InvalidEnumValueError, match=r"TransferType\(sideways\) is invalid"):
        read_transfer_requests(_raw(_body(transferType="sideways")))


def test_malformed_amount():
    with pytest.raises(InvalidAmountError):
        read_transfer_requests(_raw(_body(amount="twelve dollars")))


def test_negative_amount():
    with pytest.raises(InvalidAmountError, match="negative"):
        read_transfer_requests(_raw(_body(amount="USD -5.00")))


def test_sec_code_is_case_insensitive_and_stored_upper():
    [req] = read_transfer_requests(_raw(_body(standardEntryClassCode="web")))
    assert req.standard_entry_class_code == "WEB"


@pytest.mark.parametrize("code", ["PPDX", "XYZ", "ppd1"])
def test_unknown_sec_code(code):
    with pytest.raises(InvalidEnumValueError, match="StandardEntryClassCode"):
        read_transfer_requests(_raw(_body(standardEntryClassCode=code)))


def test_amount_beyond_64_bit_minor_units():
    with pytest.raises(InvalidAmountError, match="too large"):
        read_transfer_requests(_raw(_body(amount="USD 100000000000000000")))


def test_as_transfer_is_pending_with_given_id():
    [req] = read_transfer_requests(_raw(_body()))
    transfer = req.as_transfer(TransferId("XFER-9"))
    assert transfer.id == TransferId("xfer-9")
    assert transfer.status.value == "pending"
    assert transfer.created.tzinfo is not None
