# Turns property filter options into ordered (fragment, value) predicates.
# Fragments carry no placeholder numbers; the query assembler numbers them as it binds values.
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Literal, Mapping, Optional, Union

from pydantic import ValidationError

from .errors import FilterValidationError
from .schemas import PropertyFilters

Clause = Literal["where", "having"]

AVERAGE_RATING = "avg(property_reviews.rating)"


@dataclass(frozen=True)
class Predicate:
    """One comparison bound to exactly one parameter. `template` holds a single "{}" for the placeholder."""
    field: str
    template: str
    value: Any
    clause: Clause = "where"

    def render(self, placeholder: str) -> str:
        return self.template.format(placeholder)


def coerce_filters(options: Union[PropertyFilters, Mapping[str, Any], None]) -> PropertyFilters:
    """
    Accept a PropertyFilters, a plain mapping (e.g. query-string params) or None.

    Raises FilterValidationError when a value has the wrong type or range.
    Unknown keys are ignored.
    """
    if options is None:
        return PropertyFilters()
    if isinstance(options, PropertyFilters):
        return options
    try:
        return PropertyFilters.model_validate(dict(options))
    except ValidationError as exc:
        first = exc.errors()[0]
        field: Optional[str] = ".".join(str(p) for p in first.get("loc", ())) or None
        raise FilterValidationError(f"Invalid filter {field}: {first.get('msg')}", field=field) from exc


def build_predicates(options: Union[PropertyFilters, Mapping[str, Any], None]) -> List[Predicate]:
    """
    Build predicates in canonical order, independent of how the caller ordered its options:
    city, owner_id, minimum_price_per_night, maximum_price_per_night, minimum_rating.

    minimum_rating filters on an aggregate, so it is tagged for HAVING rather than WHERE.
    """
    filters = coerce_filters(options)
    predicates: List[Predicate] = []

    if filters.city is not None:
        predicates.append(Predicate("city", "city LIKE {}", f"%{filters.city}%"))
    if filters.owner_id is not None:
        predicates.append(Predicate("owner_id", "owner_id = {}", filters.owner_id))
    if filters.minimum_price_per_night is not None:
        predicates.append(Predicate("minimum_price_per_night", "cost_per_night > {}", filters.minimum_price_per_night))
    if filters.maximum_price_per_night is not None:
        predicates.append(Predicate("maximum_price_per_night", "cost_per_night < {}", filters.maximum_price_per_night))
    if filters.minimum_rating is not None:
        predicates.append(
            Predicate("minimum_rating", AVERAGE_RATING + " > {}", filters.minimum_rating, clause="having")
        )

    return predicates
