"""Flux query task."""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Integral, Real
from pathlib import Path
from typing import Any, Iterable, List, Optional

from ..config import ConnectionConfig
from ..context import RunContext
from ..exceptions import ConfigurationError, StorageError
from ..models import FetchType, QueryOutput, Row
from ..storage import write_rows
from .base import Task


@dataclass(frozen=True)
class ResolvedQuery:
    connection: ConnectionConfig
    query: str
    fetch_type: FetchType = FetchType.FETCH


@dataclass
class FluxQuery(Task[ResolvedQuery, QueryOutput]):
    """Query measurements using Flux.

    ``fetch_type`` selects the output: FETCH_ONE returns the first row,
    FETCH all rows, STORE writes all rows to a file in storage and NONE only
    the row count.
    """

    query: Optional[str] = None
    fetch_type: FetchType | str = FetchType.FETCH

    def render(self, context: RunContext) -> ResolvedQuery:
        query = context.render(self.query)
        if not query or not query.strip():
            raise ConfigurationError("query is required")
        fetch_type = context.render_enum(self.fetch_type, FetchType)
        return ResolvedQuery(connection=self.connection_config(), query=query, fetch_type=fetch_type)

    def execute(self, resolved: ResolvedQuery, context: Optional[RunContext] = None) -> QueryOutput:
        with self.connect(resolved.connection) as conn:
            tables = conn.query(resolved.query)
            rows = flatten_tables(tables)

        if not rows:
            self.logger.info("Query returned no rows")
            return QueryOutput(count=0)

        fetch_type = resolved.fetch_type
        self.logger.info("Query returned %d rows (fetch_type=%s)", len(rows), fetch_type.value)
        if fetch_type is FetchType.FETCH_ONE:
            return QueryOutput(count=len(rows), row=rows[0])
        if fetch_type is FetchType.FETCH:
            return QueryOutput(count=len(rows), rows=rows)
        if fetch_type is FetchType.STORE:
            return QueryOutput(count=len(rows), uri=_store_rows(rows, context))
        return QueryOutput(count=len(rows))


def flatten_tables(tables: Iterable[Any]) -> List[Row]:
    """Flatten every table's records, in order, into rows."""
    return [record_to_row(record) for table in tables for record in table.records]


def record_to_row(record: Any) -> Row:
    row: Row = {}
    for key, value in record.values.items():
        if value is None:
            continue
        row[key] = normalize_value(value)
    return row


def normalize_value(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, Integral):
        return int(value)
    if isinstance(value, Real):
        return float(value)
    return value


def _store_rows(rows: List[Row], context: Optional[RunContext]) -> str:
    if context is None or context.storage is None:
        raise StorageError("STORE fetch type requires a storage backend")
    path: Optional[Path] = None
    try:
        path = context.create_temp_file(".jsonl")
        with path.open("w", encoding="utf-8") as fh:
            write_rows(fh, rows)
        return context.storage.put_file(path)
    except StorageError:
        raise
    except Exception as exc:
        raise StorageError(f"Could not store result file: {exc}") from exc
    finally:
        if path is not None:
            path.unlink(missing_ok=True)
