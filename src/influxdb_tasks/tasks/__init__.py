"""Task implementations."""

from .base import Task
from .query import FluxQuery, ResolvedQuery
from .write import ResolvedWrite, Write

__all__ = ["Task", "FluxQuery", "ResolvedQuery", "Write", "ResolvedWrite"]
