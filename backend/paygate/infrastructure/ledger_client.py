"""Ledger Client — posts transactions to the ledger service over httpx.

Invariants:
    - One POST /v1/transactions per call; no retries (posting is best effort)
    - Every failure (transport, timeout, non-2xx) mapped to LedgerServiceError
    - Authorization header sent only when a token is configured
"""

import logging

import httpx

from paygate.core.errors import LedgerServiceError

logger = logging.getLogger(__name__)


class LedgerClient:
    """Async HTTP client for the ledger service."""

    def __init__(
        self,
        endpoint: str,
        *,
        auth_token: str = "",
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        headers = {"Authorization": auth_token} if auth_token else {}
        self.client = httpx.AsyncClient(
            base_url=endpoint.rstrip("/"),
            timeout=timeout_seconds,
            headers=headers,
            transport=transport,
        )

    async def close(self) -> None:
        await self.client.aclose()

    async def create_transaction(
        self, transaction_id: str, lines: list[dict], data: dict,
    ) -> str:
        payload = {"id": transaction_id, "data": data, "lines": lines}
        try:
            response = await self.client.post("/v1/transactions", json=payload)
        except httpx.TimeoutException as e:
            raise LedgerServiceError(f"timeout posting {transaction_id}: {e}", retryable=True)
        except httpx.TransportError as e:
            raise LedgerServiceError(f"connection error posting {transaction_id}: {e}", retryable=True)
        if response.is_error:
            raise LedgerServiceError(
                f"HTTP {response.status_code} posting {transaction_id}",
                retryable=response.status_code >= 500,
            )
        return transaction_id
