# Query execution boundary: runs "$n"-style positional SQL templates against the engine.
# Accessors only depend on the QueryExecutor protocol so tests can swap in fakes.
from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Protocol, Sequence, Tuple, runtime_checkable

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from .errors import DataAccessError

# Namespaced logger for statement execution diagnostics
logger = logging.getLogger("lightbnb.db")

# Positional placeholders as written in templates: $1, $2, ...
_PLACEHOLDER = re.compile(r"\$(\d+)")

Row = Dict[str, Any]


@runtime_checkable
class QueryExecutor(Protocol):
    """Runs a SQL template with positional "$n" placeholders and returns rows as dicts."""

    def execute(self, sql: str, params: Sequence[Any]) -> List[Row]:
        ...


def to_named_binds(sql: str, params: Sequence[Any]) -> Tuple[str, Dict[str, Any]]:
    """
    Rewrite "$n" placeholders into SQLAlchemy named binds (":p<n>").

    Rejects templates whose placeholders do not cover 1..len(params) exactly,
    so a mismatched statement never reaches the database.
    """
    indices = {int(m) for m in _PLACEHOLDER.findall(sql)}
    expected = set(range(1, len(params) + 1))
    if indices != expected:
        raise DataAccessError(
            f"Placeholder mismatch: template uses {sorted(indices)}, got {len(params)} parameter(s)",
            sql=sql,
        )
    named = _PLACEHOLDER.sub(lambda m: f":p{m.group(1)}", sql)
    return named, {f"p{i}": value for i, value in enumerate(params, start=1)}


class SqlExecutor:
    """
    QueryExecutor backed by a SQLAlchemy engine.

    Each call checks out one connection inside a transaction: committed on
    success, rolled back on any error.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def execute(self, sql: str, params: Sequence[Any]) -> List[Row]:
        named_sql, binds = to_named_binds(sql, params)
        try:
            with self.engine.begin() as conn:
                result = conn.execute(text(named_sql), binds)
                rows = [dict(r) for r in result.mappings()] if result.returns_rows else []
        except SQLAlchemyError as exc:
            logger.debug("Statement failed: %s", exc)
            raise DataAccessError(f"Query execution failed: {exc}", sql=sql) from exc
        logger.debug("Statement returned %d row(s)", len(rows))
        return rows
