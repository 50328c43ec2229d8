"""ACH Service Client — wraps httpx.AsyncClient with retry, backoff, and error mapping.

Invariants:
    - Transient errors (connect errors, timeouts, 429, 5xx): max_retries retries
      with exponential backoff
    - Client errors (4xx except 429): immediate failure, no retry
    - All failures mapped to AchServiceError (core/errors.py) with a retryable flag
    - create_file always sends X-Idempotency-Key, so retrying it is safe downstream
    - delete_file treats 404 as success (the file is already gone)

Design Decisions:
    - Wrapper over raw client: isolates retry logic from the submission coordinator
    - ±25% jitter on backoff: prevents thundering herd against a shared ACH service
    - transport is injectable so tests can drive the client with httpx.MockTransport
"""

import asyncio
import logging
import random

import httpx

from paygate.core.errors import AchServiceError
from paygate.core.payment_record import PaymentRecord

logger = logging.getLogger(__name__)

_RETRYABLE_STATUS = {429, 500, 502, 503, 504}


class AchClient:
    """Async HTTP client for the ACH file-building/validation service."""

    def __init__(
        self,
        endpoint: str,
        *,
        timeout_seconds: float = 30.0,
        max_retries: int = 3,
        base_delay_ms: int = 200,
        max_delay_ms: int = 5_000,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.client = httpx.AsyncClient(
            base_url=endpoint.rstrip("/"),
            timeout=timeout_seconds,
            transport=transport,
        )
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms
        self.max_delay_ms = max_delay_ms

    async def close(self) -> None:
        await self.client.aclose()

    async def ping(self) -> None:
        await self._request("GET", "/ping")

    async def create_file(
        self, idempotency_key: str, record: PaymentRecord, user_id: str,
    ) -> str:
        """POST the record; returns the ACH service's file id."""
        response = await self._request(
            "POST", "/files/create",
            json=record.to_dict(),
            headers=self._headers(user_id, idempotency_key),
        )
        body = _json_body(response)
        if body.get("error"):
            raise AchServiceError(
                f"create file {record.id}: {body['error']}",
                status_code=response.status_code,
            )
        file_id = body.get("id") or ""
        if not file_id:
            raise AchServiceError(
                f"create file {record.id}: response carried no file id",
                status_code=response.status_code,
            )
        logger.info("ACH file created", extra={"file_id": file_id, "user_id": user_id})
        return file_id

    async def get_file_contents(self, file_id: str, user_id: str) -> bytes:
        """Fetch the encoded file. The ACH service builds control records on this call."""
        response = await self._request(
            "GET", f"/files/{file_id}/contents", headers=self._headers(user_id),
        )
        return response.content

    async def validate_file(self, file_id: str, user_id: str) -> None:
        response = await self._request(
            "GET", f"/files/{file_id}/validate", headers=self._headers(user_id),
        )
        body = _json_body(response)
        problem = body.get("error") or body.get("err")
        if problem:
            raise AchServiceError(
                f"file {file_id} failed validation: {problem}",
                status_code=response.status_code,
            )

    async def delete_file(self, file_id: str, user_id: str) -> None:
        try:
            await self._request(
                "DELETE", f"/files/{file_id}", headers=self._headers(user_id),
            )
        except AchServiceError as e:
            if e.status_code == 404:
                logger.info(
                    "ACH file already absent", extra={"file_id": file_id, "user_id": user_id},
                )
                return
            raise

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Send with automatic retry on transient failures."""
        for attempt in range(self.max_retries + 1):
            try:
                response = await self.client.request(method, path, **kwargs)
            except (httpx.TimeoutException, httpx.TransportError) as e:
                await self._handle_transient_error(
                    f"{method} {path}: {e}", attempt, None,
                )
                continue

            if response.status_code in _RETRYABLE_STATUS:
                await self._handle_transient_error(
                    f"{method} {path}: HTTP {response.status_code}",
                    attempt, response.status_code,
                )
                continue
            if response.is_error:
                raise AchServiceError(
                    f"{method} {path}: HTTP {response.status_code} {response.text[:200]}",
                    retryable=False,
                    status_code=response.status_code,
                )
            if attempt:
                logger.info(
                    f"ACH call {method} {path} succeeded after retry",
                    extra={"attempt": attempt + 1},
                )
            return response
        raise AssertionError("unreachable")  # pragma: no cover

    async def _handle_transient_error(
        self, message: str, attempt: int, status_code: int | None,
    ) -> None:
        """Sleep before the next attempt, or raise once retries are spent."""
        if attempt >= self.max_retries:
            raise AchServiceError(
                f"transient failure after {self.max_retries} retries: {message}",
                retryable=True,
                status_code=status_code,
            )
        delay = self._backoff(attempt)
        logger.warning(
            f"Transient ACH error, retry after {delay}ms: {message}",
            extra={"attempt": attempt + 1},
        )
        await asyncio.sleep(delay / 1000)

    def _backoff(self, attempt: int) -> int:
        """Exponential backoff with ±25% jitter."""
        delay = min(self.max_delay_ms, (2 ** attempt) * self.base_delay_ms)
        return int(delay * random.uniform(0.75, 1.25))  # nosec B311

    @staticmethod
    def _headers(user_id: str, idempotency_key: str | None = None) -> dict[str, str]:
        headers = {"X-User-Id": user_id}
        if idempotency_key:
            headers["X-Idempotency-Key"] = idempotency_key
        return headers


def _json_body(response: httpx.Response) -> dict:
    if not response.content:
        return {}
    try:
        body = response.json()
    except ValueError:
        raise AchServiceError(
            f"non-JSON response from {response.request.url}",
            status_code=response.status_code,
        )
    return body if isinstance(body, dict) else {}
