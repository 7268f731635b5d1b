"""Run context: template rendering, working directory and storage for a task run."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Optional, Type, TypeVar
import os
import tempfile

from jinja2 import Environment, StrictUndefined, TemplateError

from .exceptions import ConfigurationError

E = TypeVar("E", bound=Enum)


class RunContext:
    """Variables and collaborators available while a task runs.

    Property values are Jinja2 templates (``{{ inputs.day }}``) rendered
    against ``variables``; rendering an undefined name is an error.
    """

    def __init__(
        self,
        variables: Optional[Mapping[str, Any]] = None,
        storage: Optional[object] = None,
        working_dir: Optional[Path | str] = None,
    ) -> None:
        self.variables = dict(variables or {})
        self.storage = storage
        self.working_dir = Path(working_dir) if working_dir is not None else Path(tempfile.gettempdir())
        self._env = Environment(undefined=StrictUndefined, keep_trailing_newline=True, autoescape=False)

    def render(self, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        if not isinstance(value, str):
            return value
        try:
            return self._env.from_string(value).render(self.variables)
        except TemplateError as exc:
            raise ConfigurationError(f"Could not render {value!r}: {exc}") from exc

    def render_enum(self, value: E | str, enum_cls: Type[E]) -> E:
        if isinstance(value, enum_cls):
            return value
        rendered = self.render(value)
        if not rendered:
            raise ConfigurationError(f"{enum_cls.__name__} value is required")
        parse = getattr(enum_cls, "parse", None)
        try:
            return parse(rendered) if parse else enum_cls(rendered)
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc

    def create_temp_file(self, suffix: str = "") -> Path:
        self.working_dir.mkdir(parents=True, exist_ok=True)
        fd, name = tempfile.mkstemp(suffix=suffix, dir=self.working_dir)
        os.close(fd)
        return Path(name)
