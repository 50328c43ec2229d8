"""Ledger Poster — best-effort ledger transaction for an accepted transfer.

Invariants:
    - Never raises: ledger failures are logged and the transfer proceeds
    - Two balancing lines on the customer depository's general-ledger accounts
      ("<routing number>-gl-code1" / "-gl-code2"); push credits gl-code1, pull debits it
    - Returns the ledger transaction id on success, None on failure or when disabled
"""

import logging

from paygate.core.amount import Amount
from paygate.core.domain_types import TransferType, next_id
from paygate.core.errors import LedgerServiceError
from paygate.core.parties import ResolvedParties
from paygate.core.repository_protocols import LedgerService

logger = logging.getLogger(__name__)


def ledger_lines(
    parties: ResolvedParties, transfer_type: TransferType, amount: Amount,
) -> list[dict]:
    rtn = parties.customer_depository.routing_number
    delta = amount.minor_units if transfer_type == TransferType.PUSH else -amount.minor_units
    return [
        {"account": f"{rtn}-gl-code1", "delta": delta},
        {"account": f"{rtn}-gl-code2", "delta": -delta},
    ]


def ledger_data(parties: ResolvedParties) -> dict:
    return {
        "customer": str(parties.customer.id),
        "customerDepository": str(parties.customer_depository.id),
        "originator": str(parties.originator.id),
        "originatorDepository": str(parties.originator_depository.id),
    }


async def post_ledger_transaction(
    ledger: LedgerService | None,
    parties: ResolvedParties,
    transfer_type: TransferType,
    amount: Amount,
    user_id: str,
) -> str | None:
    if ledger is None:
        return None
    transaction_id = next_id()
    try:
        await ledger.create_transaction(
            transaction_id, ledger_lines(parties, transfer_type, amount), ledger_data(parties),
        )
    except LedgerServiceError as e:
        logger.error(
            f"Ledger transaction {transaction_id} failed: {e.message}",
            extra={"user_id": user_id, "error_code": e.code},
        )
        return None
    logger.info(f"Ledger transaction {transaction_id} posted", extra={"user_id": user_id})
    return transaction_id
