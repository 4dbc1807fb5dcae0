# Tagged outcome of single-row lookups.
# Lets callers tell "no such row" apart from "the query failed".
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Found(Generic[T]):
    value: T


@dataclass(frozen=True)
class NotFound:
    pass


@dataclass(frozen=True)
class ExecutionFailed:
    cause: Exception


LookupResult = Union[Found[T], NotFound, ExecutionFailed]


def unwrap_or_none(result: "LookupResult[T]") -> Optional[T]:
    """Collapse a lookup result to the value or None, for callers that don't care why it's missing."""
    if isinstance(result, Found):
        return result.value
    return None
