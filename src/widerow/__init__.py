# src/widerow package
"""Wide row driver for Cassandra column families."""

from .client import WideRowClient
from .codecs import BytesCodec, Codec, JsonCodec, LongCodec, Utf8Codec
from .column_family import ColumnFamilyModel
from .config import CassandraConfig, DriverConfig, WideRowConfig, get_config
from .driver import WideRowDriver
from .instrumentation import (
    Instrumentation,
    OperationStats,
    TimingInstrumentation,
    no_instrumentation,
)
from .mapper import map_columns, ttl_from_engine, ttl_to_engine
from .models import ColumnRange, Entry, EntryColumn, MutationBatch

__version__ = "0.1.0"

__all__ = [
    "WideRowClient",
    "WideRowDriver",
    "ColumnFamilyModel",
    "CassandraConfig",
    "DriverConfig",
    "WideRowConfig",
    "get_config",
    "Codec",
    "BytesCodec",
    "JsonCodec",
    "LongCodec",
    "Utf8Codec",
    "Instrumentation",
    "OperationStats",
    "TimingInstrumentation",
    "no_instrumentation",
    "map_columns",
    "ttl_from_engine",
    "ttl_to_engine",
    "ColumnRange",
    "Entry",
    "EntryColumn",
    "MutationBatch",
]
