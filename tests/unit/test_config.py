from __future__ import annotations

from influxdb_tasks.config import (
    ConnectionConfig,
    _get_bool,
    connection_from_env,
    resolve_connection_config,
)

ENV_KEYS = (
    "INFLUXDB_V2_URL",
    "INFLUXDB_URL",
    "INFLUXDB_V2_TOKEN",
    "INFLUXDB_TOKEN",
    "INFLUXDB_V2_ORG",
    "INFLUXDB_ORG",
    "INFLUXDB_V2_BUCKET",
    "INFLUXDB_BUCKET",
    "INFLUXDB_TIMEOUT_MS",
    "INFLUXDB_VERIFY_SSL",
)


def _clear_env(monkeypatch) -> None:
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr("influxdb_tasks.config.load_env", lambda: None)


def test_get_bool_variants() -> None:
    assert _get_bool("true") is True
    assert _get_bool("Yes") is True
    assert _get_bool("ON") is True
    assert _get_bool("0") is False
    assert _get_bool(None, default=True) is True


def test_defaults_match_task_defaults() -> None:
    cfg = ConnectionConfig()
    assert cfg.url == "http://localhost:8086"
    assert cfg.token == "my-token"
    assert cfg.org == "my-org"
    assert cfg.bucket == "my-bucket"


def test_connection_from_env_defaults_when_unset(monkeypatch) -> None:
    _clear_env(monkeypatch)
    assert connection_from_env() == ConnectionConfig()


def test_connection_from_env_prefers_v2_keys(monkeypatch) -> None:
    _clear_env(monkeypatch)
    monkeypatch.setenv("INFLUXDB_URL", "https://fallback")
    monkeypatch.setenv("INFLUXDB_V2_URL", "https://v2.local")
    monkeypatch.setenv("INFLUXDB_TOKEN", "tok")
    monkeypatch.setenv("INFLUXDB_V2_ORG", "org")
    monkeypatch.setenv("INFLUXDB_BUCKET", "bucket")
    monkeypatch.setenv("INFLUXDB_TIMEOUT_MS", "2500")
    monkeypatch.setenv("INFLUXDB_VERIFY_SSL", "false")

    cfg = connection_from_env()

    assert cfg.url == "https://v2.local"
    assert cfg.token == "tok"
    assert cfg.org == "org"
    assert cfg.bucket == "bucket"
    assert cfg.timeout_ms == 2500
    assert cfg.verify_ssl is False


def test_resolve_connection_config_from_mapping() -> None:
    cfg = resolve_connection_config({"url": "http://h:8086", "org": "o", "bucket": None, "timeout_ms": "100"})
    assert cfg == ConnectionConfig(url="http://h:8086", org="o", timeout_ms=100)


def test_resolve_connection_config_dataclass_passthrough() -> None:
    original = ConnectionConfig(url="https://v2", token="t", org="o", bucket="b")
    assert resolve_connection_config(original) is original
