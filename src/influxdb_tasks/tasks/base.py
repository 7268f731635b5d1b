"""Abstract base task for influxdb_tasks."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Optional, TypeVar
import logging

from ..config import (
    DEFAULT_BUCKET,
    DEFAULT_ORG,
    DEFAULT_TIMEOUT_MS,
    DEFAULT_TOKEN,
    DEFAULT_URL,
    ConnectionConfig,
)
from ..connection import InfluxDBConnection
from ..context import RunContext

R = TypeVar("R")
O = TypeVar("O")

ClientFactory = Callable[[ConnectionConfig], Any]


@dataclass
class Task(ABC, Generic[R, O]):
    """A task run by the host as ``run(context) -> output``.

    ``render`` turns templated properties into a concrete, resolved config
    and ``execute`` does the work; only ``render`` sees the run context's
    templating.
    """

    url: str = DEFAULT_URL
    token: str = field(default=DEFAULT_TOKEN, repr=False)
    org: str = DEFAULT_ORG
    bucket: str = DEFAULT_BUCKET
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    verify_ssl: bool = True
    client_factory: Optional[ClientFactory] = field(default=None, repr=False, compare=False)

    @property
    def logger(self) -> logging.Logger:
        return logging.getLogger(f"{type(self).__module__}.{type(self).__name__}")

    def run(self, context: RunContext) -> O:
        return self.execute(self.render(context), context)

    @abstractmethod
    def render(self, context: RunContext) -> R:
        """Resolve templated properties."""

    @abstractmethod
    def execute(self, resolved: R, context: Optional[RunContext] = None) -> O:
        """Run the task against resolved properties."""

    def connection_config(self) -> ConnectionConfig:
        return ConnectionConfig(
            url=self.url,
            token=self.token,
            org=self.org,
            bucket=self.bucket,
            timeout_ms=self.timeout_ms,
            verify_ssl=self.verify_ssl,
        )

    def connect(self, config: ConnectionConfig) -> InfluxDBConnection:
        client = self.client_factory(config) if self.client_factory is not None else None
        return InfluxDBConnection(config, client=client)
