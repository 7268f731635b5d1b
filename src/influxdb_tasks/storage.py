"""Result file storage and the JSON Lines row format used by STORE."""

from __future__ import annotations

from datetime import date, datetime
from pathlib import Path
from typing import IO, Any, Iterable, List, Protocol
from urllib.parse import unquote, urlparse
import json
import logging
import shutil
import uuid

from .exceptions import StorageError
from .models import Row

logger = logging.getLogger(__name__)


class Storage(Protocol):
    def put_file(self, path: Path) -> str:
        """Persist a local file and return a URI addressing it."""


class LocalStorage:
    """Storage backed by a local directory, addressed by ``file://`` URIs."""

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)

    def put_file(self, path: Path) -> str:
        source = Path(path)
        target = self.root / uuid.uuid4().hex / source.name
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, target)
        except OSError as exc:
            raise StorageError(f"Could not store {source}: {exc}") from exc
        uri = target.resolve().as_uri()
        logger.debug("Stored %s as %s", source, uri)
        return uri

    def get_file(self, uri: str) -> Path:
        parsed = urlparse(uri)
        if parsed.scheme != "file":
            raise StorageError(f"Unsupported storage URI: {uri}")
        path = Path(unquote(parsed.path))
        if not path.is_file():
            raise StorageError(f"Stored file not found: {uri}")
        return path


def _default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def write_rows(fh: IO[str], rows: Iterable[Row]) -> int:
    """Write rows as JSON Lines, one object per row. Returns the row count."""
    count = 0
    for row in rows:
        fh.write(json.dumps(row, default=_default))
        fh.write("\n")
        count += 1
    return count


def read_rows(fh: IO[str]) -> List[Row]:
    return [json.loads(line) for line in fh if line.strip()]
