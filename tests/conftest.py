"""
Pytest Configuration and Shared Fixtures
"""
from typing import Any, List, Optional
from unittest.mock import MagicMock

import pytest

from widerow.codecs import BytesCodec, Utf8Codec
from widerow.column_family import ColumnFamilyModel
from widerow.driver import WideRowDriver


# =============================================================================
# Fake Driver Objects
# =============================================================================

class FakeResponseFuture:
    """Stand-in for cassandra.cluster.ResponseFuture that settles immediately."""

    def __init__(self, rows: Optional[List[Any]] = None, error: Optional[Exception] = None):
        self.rows = rows if rows is not None else []
        self.error = error

    def add_callbacks(self, callback, errback):
        if self.error is not None:
            errback(self.error)
        else:
            callback(self.rows)


def make_prepared(cql: str) -> MagicMock:
    prepared = MagicMock()
    prepared.query_string = cql
    return prepared


# =============================================================================
# Sample Data Fixtures
# =============================================================================

@pytest.fixture
def raw_rows() -> List[tuple]:
    """Raw (name, value, ttl) rows as the engine returns them."""
    return [
        (b"a", b"value-a", None),
        (b"b", b"value-b", 0),
        (b"c", b"value-c", 30),
    ]


# =============================================================================
# Mock Fixtures
# =============================================================================

@pytest.fixture
def response_future():
    """Factory for settled response futures: response_future(rows=..., error=...)."""
    return FakeResponseFuture


@pytest.fixture
def mock_session():
    """Mock Cassandra session preparing statements and executing async."""
    session = MagicMock()
    session.prepare.side_effect = make_prepared
    session.execute_async.return_value = FakeResponseFuture()
    return session


@pytest.fixture
def column_family(mock_session) -> ColumnFamilyModel:
    """Prepared column family with UTF-8 keys and names, byte values."""
    return ColumnFamilyModel(
        mock_session,
        "wide_rows",
        key_codec=Utf8Codec(),
        name_codec=Utf8Codec(),
        value_codec=BytesCodec(),
    ).prepare()


@pytest.fixture
def driver(column_family) -> WideRowDriver:
    """Driver with the default no-op instrumentation."""
    return WideRowDriver(column_family)


# =============================================================================
# Environment Fixtures
# =============================================================================

@pytest.fixture
def env_vars(monkeypatch):
    """Set test environment variables."""
    monkeypatch.setenv("CASSANDRA_HOSTS", "cass1,cass2")
    monkeypatch.setenv("CASSANDRA_PORT", "9142")
    monkeypatch.setenv("CASSANDRA_KEYSPACE", "test_rows")
    monkeypatch.setenv("CASSANDRA_WRITE_CONSISTENCY", "QUORUM")
    monkeypatch.setenv("WIDEROW_BATCH_TYPE", "UNLOGGED")
    monkeypatch.setenv("WIDEROW_REJECT_DROP_WITH_INSERT", "true")
