"""Configuration loading for influxdb_tasks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional
import os

from dotenv import load_dotenv

DEFAULT_URL = "http://localhost:8086"
DEFAULT_TOKEN = "my-token"
DEFAULT_ORG = "my-org"
DEFAULT_BUCKET = "my-bucket"
DEFAULT_TIMEOUT_MS = 10_000


def load_env() -> None:
    """Load environment variables from a .env file if present."""
    load_dotenv()


def _get_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


@dataclass(frozen=True)
class ConnectionConfig:
    url: str = DEFAULT_URL
    token: str = DEFAULT_TOKEN
    org: str = DEFAULT_ORG
    bucket: str = DEFAULT_BUCKET
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    verify_ssl: bool = True

    def __repr__(self) -> str:
        return (
            f"ConnectionConfig(url={self.url!r}, org={self.org!r}, bucket={self.bucket!r}, "
            f"timeout_ms={self.timeout_ms}, verify_ssl={self.verify_ssl})"
        )


def connection_from_env() -> ConnectionConfig:
    load_env()
    return ConnectionConfig(
        url=os.getenv("INFLUXDB_V2_URL", os.getenv("INFLUXDB_URL", DEFAULT_URL)),
        token=os.getenv("INFLUXDB_V2_TOKEN", os.getenv("INFLUXDB_TOKEN", DEFAULT_TOKEN)),
        org=os.getenv("INFLUXDB_V2_ORG", os.getenv("INFLUXDB_ORG", DEFAULT_ORG)),
        bucket=os.getenv("INFLUXDB_V2_BUCKET", os.getenv("INFLUXDB_BUCKET", DEFAULT_BUCKET)),
        timeout_ms=int(os.getenv("INFLUXDB_TIMEOUT_MS", str(DEFAULT_TIMEOUT_MS))),
        verify_ssl=_get_bool(os.getenv("INFLUXDB_VERIFY_SSL"), True),
    )


def _dict_get(d: Mapping[str, Any], key: str, fallback: Any = None) -> Any:
    if key in d and d[key] is not None:
        return d[key]
    return fallback


def resolve_connection_config(config: ConnectionConfig | Mapping[str, Any]) -> ConnectionConfig:
    if isinstance(config, ConnectionConfig):
        return config
    return ConnectionConfig(
        url=_dict_get(config, "url", DEFAULT_URL),
        token=_dict_get(config, "token", DEFAULT_TOKEN),
        org=_dict_get(config, "org", DEFAULT_ORG),
        bucket=_dict_get(config, "bucket", DEFAULT_BUCKET),
        timeout_ms=int(_dict_get(config, "timeout_ms", DEFAULT_TIMEOUT_MS)),
        verify_ssl=bool(_dict_get(config, "verify_ssl", True)),
    )
