"""Run an influxdb-tasks task locally.

Connection settings default to INFLUXDB_V2_* / INFLUXDB_* environment
variables (a .env file is loaded if present).

Usage:
    py scripts/run_task.py query --query 'from(bucket: "b") |> range(start: -1h)'
    py scripts/run_task.py query --query-file q.flux --fetch-type STORE --storage-dir out
    py scripts/run_task.py write --file metrics.lp --validate
    py scripts/run_task.py write < metrics.lp
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys
from typing import Dict, List, Optional

from influxdb_tasks import (
    FetchType,
    FluxQuery,
    InfluxDBError,
    LocalStorage,
    RunContext,
    Write,
    connection_from_env,
)


def _parse_vars(items: Optional[List[str]]) -> Dict[str, str]:
    variables: Dict[str, str] = {}
    for item in items or []:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise ValueError(f"--var expects KEY=VALUE, got {item!r}")
        variables[key] = value
    return variables


def _connection_kwargs(args: argparse.Namespace) -> dict:
    cfg = connection_from_env()
    return {
        "url": args.url or cfg.url,
        "token": args.token or cfg.token,
        "org": args.org or cfg.org,
        "bucket": args.bucket or cfg.bucket,
        "timeout_ms": cfg.timeout_ms,
        "verify_ssl": cfg.verify_ssl,
    }


def _build_task(args: argparse.Namespace):
    if args.command == "query":
        query = args.query
        if args.query_file:
            query = Path(args.query_file).read_text(encoding="utf-8")
        return FluxQuery(query=query, fetch_type=args.fetch_type, **_connection_kwargs(args))
    if args.file:
        data = Path(args.file).read_text(encoding="utf-8")
    else:
        data = sys.stdin.read()
    return Write(wire_input_multiline_data=data, validate_lines=args.validate, **_connection_kwargs(args))


def _build_context(args: argparse.Namespace) -> RunContext:
    storage_dir = getattr(args, "storage_dir", None)
    storage = LocalStorage(storage_dir) if storage_dir else None
    return RunContext(variables=_parse_vars(args.var), storage=storage)


def run(args: argparse.Namespace) -> int:
    task = _build_task(args)
    output = task.run(_build_context(args))
    print(json.dumps(output.to_dict(), default=str, indent=2))
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run influxdb-tasks tasks against InfluxDB v2")
    parser.add_argument("--url", help="InfluxDB URL")
    parser.add_argument("--token", help="InfluxDB token")
    parser.add_argument("--org", help="InfluxDB organization")
    parser.add_argument("--bucket", help="InfluxDB bucket")
    parser.add_argument("--var", action="append", help="Template variable KEY=VALUE (repeatable)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    query = sub.add_parser("query", help="Run a Flux query")
    source = query.add_mutually_exclusive_group(required=True)
    source.add_argument("--query", help="Flux query text")
    source.add_argument("--query-file", help="File containing the Flux query")
    query.add_argument(
        "--fetch-type",
        default=FetchType.FETCH.value,
        choices=[m.value for m in FetchType],
        help="How to return rows",
    )
    query.add_argument("--storage-dir", help="Directory for STORE result files")

    write = sub.add_parser("write", help="Write line protocol")
    write.add_argument("--file", help="Line-protocol file (default: stdin)")
    write.add_argument("--validate", action="store_true", help="Parse lines before writing")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return run(args)
    except (InfluxDBError, ValueError, OSError) as exc:
        print(f"Task failed: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
