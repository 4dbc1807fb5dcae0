# Exceptions raised by the data-access layer.
from __future__ import annotations

from typing import Optional


class DataAccessError(Exception):
    """A statement could not be executed (connectivity, malformed SQL, constraint violation)."""

    def __init__(self, detail: str, sql: Optional[str] = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.sql = sql


class FilterValidationError(ValueError):
    """Property filter options or the result limit have the wrong type or range."""

    def __init__(self, detail: str, field: Optional[str] = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.field = field
