"""Payment Record Assembly — builds the per-transfer ACH file from a transfer and its parties.

Invariants:
    - PURE: no IO; the only time input is the `now` argument
    - Pull transfers require a verified Customer (checked before the pending check)
    - Only pending transfers are assembled
    - Exactly one batch, one entry and one Addenda05 per record
    - Transaction and service-class codes come from core/transaction_codes.py tables

Design Decisions:
    - Preconditions live here rather than in the resolver because they depend on the
      combination of transfer and customer
"""

from datetime import datetime

from paygate.core.banking_days import add_banking_days
from paygate.core.domain_types import CustomerStatus, TransferStatus, TransferType, enum_equals
from paygate.core.errors import CustomerNotVerifiedForPullError, TransferNotPendingError
from paygate.core.parties import ResolvedParties
from paygate.core.payment_record import (
    Addenda05,
    Batch,
    BatchHeader,
    EntryDetail,
    FileHeader,
    PaymentRecord,
)
from paygate.core.routing_numbers import aba8, aba_check_digit
from paygate.core.transaction_codes import (
    EntryKind,
    direction_for,
    service_class_code,
    transaction_code,
)
from paygate.core.transfer import Transfer


DEFAULT_COMPANY_NAME = "Paygate payment"
DEFAULT_COMPANY_IDENTIFICATION = "121042882"  # 9 digit FEIN
IDENTIFICATION_NUMBER = "#83738AB#      "
PAYMENT_RELATED_INFORMATION = "paygate transaction"
FIRST_TRACE_SEQUENCE = 1


def check_assembly_preconditions(
    transfer: Transfer, parties: ResolvedParties, user_id: str = "",
) -> None:
    customer = parties.customer
    pull = transfer.type == TransferType.PULL
    if pull and not enum_equals(customer.status, CustomerStatus.VERIFIED):
        raise CustomerNotVerifiedForPullError(
            str(customer.id), user_id, getattr(customer.status, "value", str(customer.status)),
        )
    if not enum_equals(transfer.status, TransferStatus.PENDING):
        raise TransferNotPendingError(
            str(transfer.id), getattr(transfer.status, "value", str(transfer.status)),
        )


def trace_number(odfi_routing_number: str, sequence: int = FIRST_TRACE_SEQUENCE) -> str:
    """ODFI 8-digit identifier followed by a 7-digit entry sequence."""
    return f"{aba8(odfi_routing_number)}{sequence:07d}"


def assemble_payment_record(
    transfer: Transfer,
    parties: ResolvedParties,
    *,
    now: datetime,
    user_id: str = "",
    company_identification: str = DEFAULT_COMPANY_IDENTIFICATION,
    default_company_name: str = DEFAULT_COMPANY_NAME,
) -> PaymentRecord:
    """Build the PaymentRecord for one transfer. Raises PreconditionFailure subclasses."""
    check_assembly_preconditions(transfer, parties, user_id)

    record_id = str(transfer.id)
    origin_dep = parties.originator_depository
    dest_dep = parties.customer_depository
    direction = direction_for(transfer.type)

    header = FileHeader(
        id=record_id,
        immediate_origin=origin_dep.routing_number,
        immediate_origin_name=origin_dep.bank_name,
        immediate_destination=dest_dep.routing_number,
        immediate_destination_name=dest_dep.bank_name,
        file_creation_date=now.strftime("%y%m%d"),
        file_creation_time=now.strftime("%H%M"),
    )

    batch_header = BatchHeader(
        id=record_id,
        service_class_code=service_class_code(direction),
        company_name=parties.originator.metadata or default_company_name,
        company_identification=company_identification,
        standard_entry_class_code=transfer.standard_entry_class_code.upper(),
        company_entry_description=transfer.description,
        effective_entry_date=add_banking_days(now, 1).strftime("%y%m%d"),
        odfi_identification=parties.originator.identification,
    )

    entry = EntryDetail(
        id=record_id,
        transaction_code=transaction_code(dest_dep.type, direction, EntryKind.LIVE),
        rdfi_identification=aba8(dest_dep.routing_number),
        check_digit=aba_check_digit(dest_dep.routing_number),
        dfi_account_number=dest_dep.account_number,
        amount=transfer.amount.minor_units,
        identification_number=IDENTIFICATION_NUMBER,
        individual_name=parties.customer.metadata,
        discretionary_data=transfer.description,
        trace_number=trace_number(origin_dep.routing_number),
        addenda05=[
            Addenda05(
                id=record_id,
                payment_related_information=PAYMENT_RELATED_INFORMATION,
                sequence_number=1,
                entry_detail_sequence_number=1,
            ),
        ],
    )

    return PaymentRecord(
        id=record_id,
        header=header,
        batches=[Batch(header=batch_header, entries=[entry])],
    )
