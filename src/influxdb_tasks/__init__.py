"""influxdb_tasks package."""

from .config import ConnectionConfig, connection_from_env, load_env, resolve_connection_config
from .connection import InfluxDBConnection
from .context import RunContext
from .exceptions import (
    ConfigurationError,
    InfluxDBError,
    InfluxDBAuthenticationError,
    InfluxDBConnectionError,
    InfluxDBOperationError,
    InfluxDBQueryError,
    InfluxDBWriteError,
    MalformedLineError,
    StorageError,
)
from .line_protocol import Measurement, count_lines, parse_line, parse_lines
from .models import FetchType, QueryOutput, WriteOutput
from .storage import LocalStorage, read_rows, write_rows
from .tasks import FluxQuery, Write

__all__ = [
    "ConnectionConfig",
    "connection_from_env",
    "load_env",
    "resolve_connection_config",
    "InfluxDBConnection",
    "RunContext",
    "ConfigurationError",
    "InfluxDBError",
    "InfluxDBAuthenticationError",
    "InfluxDBConnectionError",
    "InfluxDBOperationError",
    "InfluxDBQueryError",
    "InfluxDBWriteError",
    "MalformedLineError",
    "StorageError",
    "Measurement",
    "count_lines",
    "parse_line",
    "parse_lines",
    "FetchType",
    "QueryOutput",
    "WriteOutput",
    "LocalStorage",
    "read_rows",
    "write_rows",
    "FluxQuery",
    "Write",
]
