"""Payment Record — file/batch/entry/addenda structure handed to the ACH service.

Invariants:
    - Built fresh per transfer; never persisted (only the returned file id is)
    - to_dict() emits the ACH service's JSON field names; nothing is encoded
      to NACHA bytes here
    - Batch/file control totals are left for the ACH service's build step
"""

from dataclasses import dataclass, field


@dataclass
class FileHeader:
    id: str
    immediate_origin: str
    immediate_origin_name: str
    immediate_destination: str
    immediate_destination_name: str
    file_creation_date: str  # YYMMDD
    file_creation_time: str  # HHMM

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "immediateOrigin": self.immediate_origin,
            "immediateOriginName": self.immediate_origin_name,
            "immediateDestination": self.immediate_destination,
            "immediateDestinationName": self.immediate_destination_name,
            "fileCreationDate": self.file_creation_date,
            "fileCreationTime": self.file_creation_time,
        }


@dataclass
class BatchHeader:
    id: str
    service_class_code: int
    company_name: str
    company_identification: str
    standard_entry_class_code: str
    company_entry_description: str
    effective_entry_date: str  # YYMMDD
    odfi_identification: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "serviceClassCode": self.service_class_code,
            "companyName": self.company_name,
            "companyIdentification": self.company_identification,
            "standardEntryClassCode": self.standard_entry_class_code,
            "companyEntryDescription": self.company_entry_description,
            "effectiveEntryDate": self.effective_entry_date,
            "ODFIIdentification": self.odfi_identification,
        }


@dataclass
class Addenda05:
    id: str
    payment_related_information: str
    sequence_number: int = 1
    entry_detail_sequence_number: int = 1

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "typeCode": "05",
            "paymentRelatedInformation": self.payment_related_information,
            "sequenceNumber": self.sequence_number,
            "entryDetailSequenceNumber": self.entry_detail_sequence_number,
        }


@dataclass
class EntryDetail:
    id: str
    transaction_code: int
    rdfi_identification: str
    check_digit: str
    dfi_account_number: str
    amount: int  # minor units
    identification_number: str
    individual_name: str
    discretionary_data: str
    trace_number: str
    addenda05: list[Addenda05] = field(default_factory=list)

    @property
    def addenda_record_indicator(self) -> int:
        return 1 if self.addenda05 else 0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "transactionCode": self.transaction_code,
            "RDFIIdentification": self.rdfi_identification,
            "checkDigit": self.check_digit,
            "DFIAccountNumber": self.dfi_account_number,
            "amount": self.amount,
            "identificationNumber": self.identification_number,
            "individualName": self.individual_name,
            "discretionaryData": self.discretionary_data,
            "traceNumber": self.trace_number,
            "addendaRecordIndicator": self.addenda_record_indicator,
            "addenda05": [a.to_dict() for a in self.addenda05],
        }


@dataclass
class Batch:
    header: BatchHeader
    entries: list[EntryDetail] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "batchHeader": self.header.to_dict(),
            "entryDetails": [e.to_dict() for e in self.entries],
        }


@dataclass
class PaymentRecord:
    id: str
    header: FileHeader
    batches: list[Batch] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "fileHeader": self.header.to_dict(),
            "batches": [b.to_dict() for b in self.batches],
        }
