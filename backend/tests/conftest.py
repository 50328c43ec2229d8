"""Root conftest — shared test configuration."""

import os

import pytest

# Tests never reach real downstream services
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("ACH_ENDPOINT", "http://ach.test")
os.environ.setdefault("LEDGER_ENDPOINT", "http://ledger.test")
os.environ.setdefault("LOG_FORMAT", "text")

from tests.factories import make_parties, make_transfer  # noqa: E402


@pytest.fixture
def parties():
    return make_parties()


@pytest.fixture
def transfer():
    return make_transfer()
