"""
Unit Tests for WideRowClient
"""
from unittest.mock import MagicMock, patch

import pytest
from cassandra import ConsistencyLevel
from cassandra.query import BatchType

from widerow.client import WideRowClient
from widerow.codecs import LongCodec
from widerow.config import CassandraConfig, DriverConfig, WideRowConfig
from widerow.driver import WideRowDriver
from widerow.instrumentation import TimingInstrumentation


@pytest.fixture
def config():
    return WideRowConfig(
        cassandra=CassandraConfig(
            hosts=["cass1"],
            port=9042,
            keyspace="test_rows",
            username=None,
            password=None,
            read_consistency="ONE",
            write_consistency="QUORUM",
        ),
        driver=DriverConfig(batch_type="UNLOGGED", reject_drop_with_insert=True),
    )


@pytest.fixture
def mock_cluster(mock_session):
    with patch("widerow.client.Cluster") as cluster_cls:
        cluster_cls.return_value.connect.return_value = mock_session
        yield cluster_cls


class TestConnection:
    """Tests for connection lifecycle."""

    def test_connect_uses_keyspace(self, config, mock_cluster, mock_session):
        client = WideRowClient(config)

        assert client.session is mock_session
        mock_cluster.assert_called_once_with(["cass1"], port=9042, auth_provider=None)
        mock_cluster.return_value.connect.assert_called_once_with("test_rows")

    def test_connect_with_credentials(self, config, mock_cluster):
        config.cassandra.username = "user"
        config.cassandra.password = "secret"

        with patch("widerow.client.PlainTextAuthProvider") as auth:
            WideRowClient(config).connect()

        auth.assert_called_once_with(username="user", password="secret")
        assert mock_cluster.call_args.kwargs["auth_provider"] is auth.return_value

    def test_close_shuts_down_cluster(self, config, mock_cluster):
        client = WideRowClient(config)
        client.connect()

        client.close()

        mock_cluster.return_value.shutdown.assert_called_once()

    def test_close_without_connect(self, config):
        WideRowClient(config).close()


class TestFactories:
    """Tests for column family and driver factories."""

    def test_column_family_uses_config(self, config, mock_cluster):
        cf = WideRowClient(config).column_family("events", name_codec=LongCodec())

        assert cf.table == "events"
        assert isinstance(cf.name_codec, LongCodec)
        assert cf.read_consistency == ConsistencyLevel.ONE
        assert cf.write_consistency == ConsistencyLevel.QUORUM
        assert cf.batch_type == BatchType.UNLOGGED
        assert "insert" in cf.prepared

    def test_driver(self, config, mock_cluster):
        timing = TimingInstrumentation()

        driver = WideRowClient(config).driver("events", instrument=timing)

        assert isinstance(driver, WideRowDriver)
        assert driver.instrument is timing
        assert driver.reject_drop_with_insert is True

    def test_create_table(self, config, mock_cluster, mock_session):
        WideRowClient(config).create_table("events")

        cql = mock_session.execute.call_args[0][0]
        assert "CREATE TABLE IF NOT EXISTS events" in cql


class TestHealthCheck:
    """Tests for health_check."""

    def test_healthy(self, config, mock_cluster, mock_session):
        mock_session.execute.return_value.one.return_value = MagicMock(release_version="4.1.3")

        healthy, message = WideRowClient(config).health_check()

        assert healthy is True
        assert "4.1.3" in message

    def test_unhealthy(self, config, mock_cluster, mock_session):
        mock_session.execute.side_effect = Exception("no hosts")

        healthy, message = WideRowClient(config).health_check()

        assert healthy is False
        assert "no hosts" in message
