"""Data models for influxdb_tasks."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional
import pandas as pd

Row = Dict[str, Any]


class FetchType(str, Enum):
    """How query results are returned."""

    FETCH_ONE = "FETCH_ONE"
    FETCH = "FETCH"
    STORE = "STORE"
    NONE = "NONE"

    @classmethod
    def parse(cls, value: "FetchType | str") -> "FetchType":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            allowed = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown fetch type {value!r}. Allowed: {allowed}") from None


@dataclass(frozen=True)
class QueryOutput:
    """Result of a Flux query task.

    Only the field matching the fetch type is populated: ``row`` for
    FETCH_ONE, ``rows`` for FETCH and ``uri`` for STORE.
    """

    count: int
    row: Optional[Row] = None
    rows: Optional[List[Row]] = None
    uri: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"count": self.count}
        for key in ("row", "rows", "uri"):
            value = getattr(self, key)
            if value is not None:
                out[key] = value
        return out

    def to_dataframe(self) -> pd.DataFrame:
        if self.rows is not None:
            return pd.DataFrame(self.rows)
        if self.row is not None:
            return pd.DataFrame([self.row])
        return pd.DataFrame()


@dataclass(frozen=True)
class WriteOutput:
    """Result of a write task."""

    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {"count": self.count}
