"""
Configuration Management
Centralized configuration for the wide row driver.
"""
import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class CassandraConfig:
    """Cassandra connection configuration."""
    hosts: List[str] = field(
        default_factory=lambda: os.getenv("CASSANDRA_HOSTS", "localhost").split(",")
    )
    port: int = field(
        default_factory=lambda: int(os.getenv("CASSANDRA_PORT", "9042"))
    )
    keyspace: str = field(
        default_factory=lambda: os.getenv("CASSANDRA_KEYSPACE", "wide_rows")
    )
    username: Optional[str] = field(
        default_factory=lambda: os.getenv("CASSANDRA_USERNAME")
    )
    password: Optional[str] = field(
        default_factory=lambda: os.getenv("CASSANDRA_PASSWORD")
    )

    # Consistency levels, by cassandra.ConsistencyLevel name
    read_consistency: str = field(
        default_factory=lambda: os.getenv("CASSANDRA_READ_CONSISTENCY", "LOCAL_QUORUM")
    )
    write_consistency: str = field(
        default_factory=lambda: os.getenv("CASSANDRA_WRITE_CONSISTENCY", "LOCAL_QUORUM")
    )

    # Provisioning settings
    replication_factor: int = field(
        default_factory=lambda: int(os.getenv("CASSANDRA_REPLICATION_FACTOR", "1"))
    )


@dataclass
class DriverConfig:
    """Wide row driver behaviour."""
    batch_type: str = field(
        default_factory=lambda: os.getenv("WIDEROW_BATCH_TYPE", "LOGGED")
    )
    reject_drop_with_insert: bool = field(
        default_factory=lambda: _env_flag("WIDEROW_REJECT_DROP_WITH_INSERT")
    )


@dataclass
class WideRowConfig:
    """Complete driver configuration."""
    cassandra: CassandraConfig = field(default_factory=CassandraConfig)
    driver: DriverConfig = field(default_factory=DriverConfig)

    # General settings
    log_level: str = field(
        default_factory=lambda: os.getenv("LOG_LEVEL", "INFO")
    )

    @classmethod
    def from_env(cls) -> "WideRowConfig":
        """Load configuration from environment variables."""
        return cls()


def get_config() -> WideRowConfig:
    """Get wide row driver configuration."""
    return WideRowConfig.from_env()
