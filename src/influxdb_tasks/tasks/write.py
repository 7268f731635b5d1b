"""Line-protocol write task."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..config import ConnectionConfig
from ..context import RunContext
from ..line_protocol import count_lines, parse_lines
from ..models import WriteOutput
from .base import Task


@dataclass(frozen=True)
class ResolvedWrite:
    connection: ConnectionConfig
    data: str = ""
    validate_lines: bool = False


@dataclass
class Write(Task[ResolvedWrite, WriteOutput]):
    """Write measurements from a line-protocol multiline string.

    Example input::

        cpu,host=server01,region=us_west value=0.64 1422568543702900257
        mem,host=server01,region=us_west free=1024,total=4096 1422568543702900260

    The text is sent as-is with nanosecond precision. The reported count is
    the number of non-blank lines; the server accepts or rejects the whole
    block. With ``validate_lines`` the block is parsed first and a malformed
    line fails the task before anything is sent.
    """

    wire_input_multiline_data: Optional[str] = None
    validate_lines: bool = False

    def render(self, context: RunContext) -> ResolvedWrite:
        data = context.render(self.wire_input_multiline_data) or ""
        return ResolvedWrite(
            connection=self.connection_config(),
            data=data,
            validate_lines=self.validate_lines,
        )

    def execute(self, resolved: ResolvedWrite, context: Optional[RunContext] = None) -> WriteOutput:
        if resolved.validate_lines:
            count = len(parse_lines(resolved.data))
        else:
            count = count_lines(resolved.data)

        if count == 0:
            self.logger.info("Nothing to write")
            return WriteOutput(count=0)

        with self.connect(resolved.connection) as conn:
            conn.write_lines(resolved.data)

        self.logger.info("Wrote %d lines to bucket %s", count, resolved.connection.bucket)
        return WriteOutput(count=count)
