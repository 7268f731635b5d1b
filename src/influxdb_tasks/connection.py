"""Scoped InfluxDB v2 connection used by the tasks."""

from __future__ import annotations

from typing import Any, List, Optional, Type
import logging

from influxdb_client import WritePrecision
from influxdb_client.client.write_api import SYNCHRONOUS
from influxdb_client.rest import ApiException

from .config import ConnectionConfig
from .exceptions import (
    InfluxDBAuthenticationError,
    InfluxDBConnectionError,
    InfluxDBError,
    InfluxDBOperationError,
    InfluxDBQueryError,
    InfluxDBWriteError,
)

logger = logging.getLogger(__name__)


class InfluxDBConnection:
    """Opens an ``influxdb_client.InfluxDBClient`` on enter and closes it on exit."""

    def __init__(self, config: ConnectionConfig, client: Optional[object] = None) -> None:
        self.config = config
        self._client: Any = client
        self.connected = False

    def __enter__(self) -> "InfluxDBConnection":
        if self._client is None:
            from influxdb_client import InfluxDBClient

            try:
                self._client = InfluxDBClient(
                    url=self.config.url,
                    token=self.config.token,
                    org=self.config.org,
                    timeout=self.config.timeout_ms,
                    verify_ssl=self.config.verify_ssl,
                )
            except Exception as exc:
                raise InfluxDBConnectionError(str(exc)) from exc
        self.connected = True
        logger.debug("Opened connection to %s (org=%s)", self.config.url, self.config.org)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False

    def close(self) -> None:
        if self._client is not None and hasattr(self._client, "close"):
            self._client.close()
        self.connected = False

    def query(self, query: str) -> List[Any]:
        """Run a Flux query and return the client's tables."""
        logger.debug("Flux query: %s", query)
        try:
            return list(self._client.query_api().query(query, org=self.config.org))
        except Exception as exc:
            raise _translate_error(exc, InfluxDBQueryError) from exc

    def write_lines(self, data: str, precision: str = WritePrecision.NS) -> None:
        """Write a block of line protocol as-is with the blocking write API."""
        logger.debug(
            "Writing %d bytes to bucket=%s org=%s", len(data), self.config.bucket, self.config.org
        )
        try:
            write_api = self._client.write_api(write_options=SYNCHRONOUS)
            write_api.write(
                bucket=self.config.bucket,
                org=self.config.org,
                record=data,
                write_precision=precision,
            )
        except Exception as exc:
            raise _translate_error(exc, InfluxDBWriteError) from exc


def _translate_error(exc: Exception, operation_error: Type[InfluxDBOperationError]) -> InfluxDBError:
    if isinstance(exc, ApiException):
        message = f"{exc.status} {exc.reason}: {exc.body}" if exc.body else f"{exc.status} {exc.reason}"
        if exc.status == 401:
            return InfluxDBAuthenticationError(message)
        return operation_error(message)
    return InfluxDBConnectionError(str(exc))
