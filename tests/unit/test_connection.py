from __future__ import annotations

import pytest
from influxdb_client.rest import ApiException

from influxdb_tasks.config import ConnectionConfig
from influxdb_tasks.connection import InfluxDBConnection, _translate_error
from influxdb_tasks.exceptions import (
    InfluxDBAuthenticationError,
    InfluxDBConnectionError,
    InfluxDBQueryError,
    InfluxDBWriteError,
)


class FakeClient:
    def __init__(self) -> None:
        self.closed = False

    def query_api(self):
        raise ConnectionRefusedError("connection refused")

    def close(self):
        self.closed = True


def test_connection_closes_client_on_exit() -> None:
    fake = FakeClient()
    with InfluxDBConnection(ConnectionConfig(), client=fake) as conn:
        assert conn.connected is True
    assert fake.closed is True
    assert conn.connected is False


def test_connection_closes_client_on_interrupt() -> None:
    fake = FakeClient()
    with pytest.raises(KeyboardInterrupt):
        with InfluxDBConnection(ConnectionConfig(), client=fake):
            raise KeyboardInterrupt
    assert fake.closed is True


def test_transport_failure_is_connection_error() -> None:
    fake = FakeClient()
    with pytest.raises(InfluxDBConnectionError, match="connection refused"):
        with InfluxDBConnection(ConnectionConfig(), client=fake) as conn:
            conn.query("from(bucket: \"b\")")
    assert fake.closed is True


def test_connection_creates_vendor_client_from_config() -> None:
    cfg = ConnectionConfig(url="http://influx.local:8086", token="t", org="o", timeout_ms=2500)
    conn = InfluxDBConnection(cfg)
    with conn:
        client = conn._client
        assert client.url == "http://influx.local:8086"
        assert client.org == "o"
    assert conn.connected is False


@pytest.mark.parametrize(
    "status, operation_error, expected",
    [
        (401, InfluxDBQueryError, InfluxDBAuthenticationError),
        (403, InfluxDBQueryError, InfluxDBQueryError),
        (400, InfluxDBWriteError, InfluxDBWriteError),
        (404, InfluxDBWriteError, InfluxDBWriteError),
    ],
)
def test_translate_api_exceptions(status, operation_error, expected) -> None:
    err = _translate_error(ApiException(status=status, reason="r"), operation_error)
    assert type(err) is expected
    assert str(status) in str(err)


def test_translate_other_exceptions_to_connection_error() -> None:
    err = _translate_error(TimeoutError("timed out"), InfluxDBQueryError)
    assert type(err) is InfluxDBConnectionError


def test_config_repr_hides_token() -> None:
    assert "secret" not in repr(ConnectionConfig(token="secret"))
