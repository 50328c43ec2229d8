"""Payment Record Assembly — field derivation and preconditions.

Invariants:
    - USD 125.00 to routing 123456780 yields RDFI 12345678, check digit 0, amount 12500
    - A non-pending transfer is rejected
    - A pull against an unverified customer is rejected even with verified depositories
    - Exactly one batch, one entry and one Addenda05
"""

from datetime import date, datetime

import pytest

from paygate.core.assemble_payment_record import (
    DEFAULT_COMPANY_NAME,
    PAYMENT_RELATED_INFORMATION,
    assemble_payment_record,
)
from paygate.core.domain_types import (
    AccountType,
    CustomerStatus,
    TransferStatus,
    TransferType,
)
from paygate.core.errors import CustomerNotVerifiedForPullError, TransferNotPendingError
from tests.factories import make_customer, make_depository, make_originator, make_parties, make_transfer

NOW = datetime(2025, 10, 15, 9, 30)  # Wednesday


def _entry(record):
    [batch] = record.batches
    [entry] = batch.entries
    return entry


def test_entry_fields_from_customer_depository(transfer, parties):
    record = assemble_payment_record(transfer, parties, now=NOW)
    entry = _entry(record)
    assert entry.rdfi_identification == "12345678"
    assert entry.check_digit == "0"
    assert entry.amount == 12500
    assert entry.dfi_account_number == "151"
    assert entry.individual_name == "Jane Doe"
    assert entry.discretionary_data == "paycheck"


def test_trace_number_uses_originator_routing(transfer, parties):
    entry = _entry(assemble_payment_record(transfer, parties, now=NOW))
    assert entry.trace_number == "987654320000001"
    assert len(entry.trace_number) == 15


def test_file_header(transfer, parties):
    header = assemble_payment_record(transfer, parties, now=NOW).header
    assert header.immediate_origin == "987654320"
    assert header.immediate_origin_name == "Originator Bank"
    assert header.immediate_destination == "123456780"
    assert header.immediate_destination_name == "Customer Bank"
    assert header.file_creation_date == "251015"
    assert header.file_creation_time == "0930"


def test_batch_header(transfer, parties):
    header = assemble_payment_record(transfer, parties, now=NOW).batches[0].header
    assert header.service_class_code == 220
    assert header.company_name == "Acme Corp"
    assert header.company_identification == "121042882"
    assert header.standard_entry_class_code == "PPD"
    assert header.company_entry_description == "paycheck"
    assert header.effective_entry_date == "251016"
    assert header.odfi_identification == "121042882"


def test_effective_date_skips_weekend(transfer, parties):
    friday = datetime(2025, 10, 17, 16, 0)
    header = assemble_payment_record(transfer, parties, now=friday).batches[0].header
    assert header.effective_entry_date == date(2025, 10, 20).strftime("%y%m%d")


def test_company_name_placeholder_when_originator_has_no_metadata(transfer):
    parties = make_parties(originator=make_originator(metadata=""))
    header = assemble_payment_record(transfer, parties, now=NOW).batches[0].header
    assert header.company_name == DEFAULT_COMPANY_NAME
    assert DEFAULT_COMPANY_NAME == "Paygate payment"


def test_company_name_placeholder_is_configurable(transfer):
    parties = make_parties(originator=make_originator(metadata=""))
    record = assemble_payment_record(
        transfer, parties, now=NOW, default_company_name="Acme Payroll",
    )
    assert record.batches[0].header.company_name == "Acme Payroll"


def test_company_identification_override(transfer, parties):
    record = assemble_payment_record(
        transfer, parties, now=NOW, company_identification="987654321",
    )
    assert record.batches[0].header.company_identification == "987654321"


@pytest.mark.parametrize("transfer_type,account_type,service_class,code", [
    (TransferType.PUSH, AccountType.CHECKING, 220, 22),
    (TransferType.PULL, AccountType.CHECKING, 225, 27),
    (TransferType.PUSH, AccountType.SAVINGS, 220, 32),
    (TransferType.PULL, AccountType.SAVINGS, 225, 37),
])
def test_codes_follow_direction_and_account_type(
    transfer_type, account_type, service_class, code,
):
    parties = make_parties(customer_depository=make_depository(type=account_type))
    record = assemble_payment_record(make_transfer(type=transfer_type), parties, now=NOW)
    assert record.batches[0].header.service_class_code == service_class
    assert _entry(record).transaction_code == code


def test_single_addenda(transfer, parties):
    entry = _entry(assemble_payment_record(transfer, parties, now=NOW))
    assert entry.addenda_record_indicator == 1
    [addenda] = entry.addenda05
    assert addenda.payment_related_information == PAYMENT_RELATED_INFORMATION
    assert addenda.sequence_number == 1
    assert addenda.entry_detail_sequence_number == 1


def test_record_ids_follow_transfer(transfer, parties):
    record = assemble_payment_record(transfer, parties, now=NOW)
    assert record.id == "xfer-1"
    assert record.header.id == "xfer-1"
    assert _entry(record).id == "xfer-1"


def test_to_dict_uses_ach_field_names(transfer, parties):
    payload = assemble_payment_record(transfer, parties, now=NOW).to_dict()
    entry = payload["batches"][0]["entryDetails"][0]
    assert payload["fileHeader"]["immediateOrigin"] == "987654320"
    assert payload["batches"][0]["batchHeader"]["ODFIIdentification"] == "121042882"
    assert entry["RDFIIdentification"] == "12345678"
    assert entry["checkDigit"] == "0"
    assert entry["addenda05"][0]["typeCode"] == "05"


@pytest.mark.parametrize("status", [
    TransferStatus.PROCESSED, TransferStatus.FAILED, TransferStatus.CANCELED,
])
def test_non_pending_transfer_rejected(parties, status):
    with pytest.raises(TransferNotPendingError, match=f"status={status.value}"):
        assemble_payment_record(make_transfer(status=status), parties, now=NOW)


def test_pull_requires_verified_customer():
    parties = make_parties(customer=make_customer(status=CustomerStatus.UNVERIFIED))
    with pytest.raises(CustomerNotVerifiedForPullError, match="is not Verified"):
        assemble_payment_record(make_transfer(type=TransferType.PULL), parties, now=NOW)


def test_push_allows_unverified_customer():
    parties = make_parties(customer=make_customer(status=CustomerStatus.UNVERIFIED))
    record = assemble_payment_record(make_transfer(), parties, now=NOW)
    assert _entry(record).transaction_code == 22


def test_customer_check_precedes_pending_check():
    parties = make_parties(customer=make_customer(status=CustomerStatus.SUSPENDED))
    transfer = make_transfer(type=TransferType.PULL, status=TransferStatus.PROCESSED)
    with pytest.raises(CustomerNotVerifiedForPullError):
        assemble_payment_record(transfer, parties, now=NOW)
