"""Exceptions for influxdb_tasks."""

from __future__ import annotations

from typing import Optional


class InfluxDBError(Exception):
    """Base exception for influxdb_tasks."""


class ConfigurationError(InfluxDBError):
    """A required task property is missing or rendered to an invalid value."""


class MalformedLineError(InfluxDBError):
    """A line-protocol line could not be parsed."""

    def __init__(self, message: str, line: Optional[str] = None, line_number: Optional[int] = None) -> None:
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line = line
        self.line_number = line_number


class InfluxDBConnectionError(InfluxDBError):
    """Connection to InfluxDB failed."""


class InfluxDBAuthenticationError(InfluxDBConnectionError):
    """Authentication failed."""


class InfluxDBOperationError(InfluxDBError):
    """The server rejected a query or a write."""


class InfluxDBQueryError(InfluxDBOperationError):
    """Query execution failed."""


class InfluxDBWriteError(InfluxDBOperationError):
    """Write request failed."""


class StorageError(InfluxDBError):
    """Storing a result file failed."""
