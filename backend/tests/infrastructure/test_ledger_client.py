"""Ledger Client — transaction payload and failure mapping."""

import json

import httpx
import pytest

from paygate.core.errors import LedgerServiceError
from paygate.infrastructure.ledger_client import LedgerClient


async def test_posts_transaction_with_auth():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(201)

    client = LedgerClient(
        "http://ledger.test", auth_token="secret", transport=httpx.MockTransport(handler),
    )
    lines = [{"account": "123456780-gl-code1", "delta": 100}]
    assert await client.create_transaction("tx-1", lines, {"customer": "c"}) == "tx-1"

    [request] = seen
    assert request.url.path == "/v1/transactions"
    assert request.headers["Authorization"] == "secret"
    assert json.loads(request.content) == {
        "id": "tx-1", "data": {"customer": "c"}, "lines": lines,
    }
    await client.close()


async def test_no_auth_header_without_token():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200)

    client = LedgerClient("http://ledger.test", transport=httpx.MockTransport(handler))
    await client.create_transaction("tx-1", [], {})
    assert "Authorization" not in seen[0].headers


async def test_server_error_is_retryable():
    client = LedgerClient(
        "http://ledger.test", transport=httpx.MockTransport(lambda r: httpx.Response(500)),
    )
    with pytest.raises(LedgerServiceError) as exc:
        await client.create_transaction("tx-1", [], {})
    assert exc.value.retryable is True


async def test_client_error_is_not_retryable():
    client = LedgerClient(
        "http://ledger.test", transport=httpx.MockTransport(lambda r: httpx.Response(422)),
    )
    with pytest.raises(LedgerServiceError) as exc:
        await client.create_transaction("tx-1", [], {})
    assert exc.value.retryable is False


async def test_connection_error_maps_to_ledger_error():
    def handler(request):
        raise httpx.ConnectError("down", request=request)

    client = LedgerClient("http://ledger.test", transport=httpx.MockTransport(handler))
    with pytest.raises(LedgerServiceError, match="connection error"):
        await client.create_transaction("tx-1", [], {})
