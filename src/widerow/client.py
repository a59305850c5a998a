"""
Wide Row Client
Connection management and column family factory for Cassandra.
"""
import logging
from typing import Optional, Tuple

from cassandra.auth import PlainTextAuthProvider
from cassandra.cluster import Cluster

from .codecs import Codec
from .column_family import ColumnFamilyModel
from .config import CassandraConfig, DriverConfig, WideRowConfig
from .driver import WideRowDriver
from .instrumentation import Instrumentation, no_instrumentation
from .schema import create_column_family

logger = logging.getLogger(__name__)


class WideRowClient:
    """
    Owns the Cassandra cluster and session used by wide row drivers.

    Drivers and column family models created here share the session; they
    never mutate it.
    """

    def __init__(self, config: Optional[WideRowConfig] = None):
        self.config = config or WideRowConfig.from_env()
        self._cluster = None
        self._session = None

    @property
    def cassandra_config(self) -> CassandraConfig:
        return self.config.cassandra

    @property
    def driver_config(self) -> DriverConfig:
        return self.config.driver

    def connect(self) -> None:
        """Establish connection to Cassandra cluster."""
        config = self.cassandra_config
        logger.info(f"Connecting to Cassandra: {config.hosts}")

        auth_provider = None
        if config.username and config.password:
            auth_provider = PlainTextAuthProvider(
                username=config.username,
                password=config.password
            )

        self._cluster = Cluster(
            config.hosts,
            port=config.port,
            auth_provider=auth_provider
        )
        self._session = self._cluster.connect(config.keyspace)

        logger.info(f"Connected to Cassandra keyspace {config.keyspace}")

    @property
    def session(self):
        """Get the Cassandra session, connecting if needed."""
        if self._session is None:
            self.connect()
        return self._session

    def close(self) -> None:
        """Close the Cassandra connection."""
        if self._cluster:
            self._cluster.shutdown()
            self._cluster = None
            self._session = None
            logger.info("Cassandra connection closed")

    # =========================================================================
    # Column Families
    # =========================================================================

    def create_table(self, table: str) -> None:
        """Create a wide-row table in the configured keyspace if missing."""
        create_column_family(self.session, table)

    def column_family(
        self,
        table: str,
        key_codec: Optional[Codec] = None,
        name_codec: Optional[Codec] = None,
        value_codec: Optional[Codec] = None
    ) -> ColumnFamilyModel:
        """
        Build a column family model and prepare its statements.

        Args:
            table: Wide-row table name
            key_codec: Row key codec
            name_codec: Column name codec (must be order-preserving)
            value_codec: Column value codec

        Returns:
            Prepared ColumnFamilyModel
        """
        return ColumnFamilyModel(
            self.session,
            table,
            key_codec=key_codec,
            name_codec=name_codec,
            value_codec=value_codec,
            read_consistency=self.cassandra_config.read_consistency,
            write_consistency=self.cassandra_config.write_consistency,
            batch=self.driver_config.batch_type
        ).prepare()

    def driver(
        self,
        table: str,
        key_codec: Optional[Codec] = None,
        name_codec: Optional[Codec] = None,
        value_codec: Optional[Codec] = None,
        instrument: Instrumentation = no_instrumentation
    ) -> WideRowDriver:
        """Build a driver for one table."""
        return WideRowDriver(
            self.column_family(table, key_codec, name_codec, value_codec),
            instrument=instrument,
            reject_drop_with_insert=self.driver_config.reject_drop_with_insert
        )

    # =========================================================================
    # Health Check
    # =========================================================================

    def health_check(self) -> Tuple[bool, str]:
        """
        Check Cassandra connection health.

        Returns:
            Tuple of (is_healthy, message)
        """
        try:
            result = self.session.execute("SELECT release_version FROM system.local")
            version = result.one().release_version
            return True, f"Cassandra {version} is healthy"
        except Exception as e:
            return False, f"Cassandra health check failed: {e}"
