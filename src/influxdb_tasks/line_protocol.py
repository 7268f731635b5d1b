"""Line-protocol parsing.

A line has the shape::

    measurement[,tag=value,...] field=value[,field=value,...] timestamp_ns

Escaped spaces and commas are not supported; a value containing whitespace
makes the line malformed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Union
import re

from .exceptions import MalformedLineError

FieldValue = Union[int, float, str]

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_DECIMAL_RE = re.compile(r"[+-]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?")
_INTEGER_RE = re.compile(r"[+-]?\d+")
_WHITESPACE = " \t\n\x0b\f\r"
_WHITESPACE_RE = re.compile(r"[ \t\n\x0b\f\r]+")
_NEWLINE_RE = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class Measurement:
    """One decoded data point."""

    name: str
    tags: Dict[str, str] = field(default_factory=dict)
    fields: Dict[str, FieldValue] = field(default_factory=dict)
    timestamp: int = 0

    @classmethod
    def from_line(cls, line: str) -> "Measurement":
        return parse_line(line)

    @classmethod
    def from_lines(cls, block: str) -> List["Measurement"]:
        return parse_lines(block)


def parse_line(line: str) -> Measurement:
    parts = _WHITESPACE_RE.split(line.strip(_WHITESPACE))
    if parts == [""]:
        parts = []
    if len(parts) != 3:
        raise MalformedLineError(
            f"expected 3 whitespace-separated parts, got {len(parts)}: {line.strip()!r}",
            line=line,
        )
    head, field_part, ts_part = parts

    name, sep, tag_part = head.partition(",")
    if not name:
        raise MalformedLineError(f"missing measurement name: {line.strip()!r}", line=line)

    tags: Dict[str, str] = {}
    if sep:
        for key, value in _split_pairs(tag_part, "tag", line):
            tags[key] = value

    fields: Dict[str, FieldValue] = {}
    for key, raw in _split_pairs(field_part, "field", line):
        fields[key] = infer_field_value(raw)

    return Measurement(name=name, tags=tags, fields=fields, timestamp=_parse_timestamp(ts_part, line))


def parse_lines(block: str) -> List[Measurement]:
    measurements: List[Measurement] = []
    for number, raw in enumerate(block.split("\n"), start=1):
        stripped = raw.strip(_WHITESPACE)
        if not stripped:
            continue
        try:
            measurements.append(parse_line(stripped))
        except MalformedLineError as exc:
            raise MalformedLineError(str(exc), line=stripped, line_number=number) from exc
    return measurements


def count_lines(block: str) -> int:
    """Return the number of non-blank lines in a line-protocol block."""
    return sum(1 for raw in _NEWLINE_RE.split(block) if raw.strip(_WHITESPACE))


def infer_field_value(raw: str) -> FieldValue:
    """Infer a field value type: float if dotted decimal, then int64, else string."""
    if "." in raw and _DECIMAL_RE.fullmatch(raw):
        return float(raw)
    if _INTEGER_RE.fullmatch(raw):
        value = int(raw)
        if INT64_MIN <= value <= INT64_MAX:
            return value
    if raw.startswith('"'):
        raw = raw[1:]
    if raw.endswith('"'):
        raw = raw[:-1]
    return raw


def _split_pairs(segment: str, kind: str, line: str):
    for pair in segment.split(","):
        key, sep, value = pair.partition("=")
        if not sep:
            raise MalformedLineError(f"{kind} pair {pair!r} has no '=': {line.strip()!r}", line=line)
        yield key, value


def _parse_timestamp(token: str, line: str) -> int:
    if _INTEGER_RE.fullmatch(token):
        value = int(token)
        if INT64_MIN <= value <= INT64_MAX:
            return value
    raise MalformedLineError(f"invalid timestamp {token!r}: {line.strip()!r}", line=line)
