"""SQLite persistence for the application state."""

from .schema import ensure_schema
from .state import SQLiteStorage

__all__ = [
    "SQLiteStorage",
    "ensure_schema",
]
