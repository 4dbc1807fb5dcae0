# SQL statements used by the accessors.
# Fixed-shape lookups are static templates; the property listing is assembled from filter predicates.
from __future__ import annotations

from typing import Any, List, Mapping, Tuple, Union

from .errors import FilterValidationError
from .filters import AVERAGE_RATING, build_predicates
from .schemas import PropertyFilters

DEFAULT_LIMIT = 10


USER_BY_EMAIL = """
SELECT *
FROM users
WHERE email = $1;
"""

USER_BY_ID = """
SELECT *
FROM users
WHERE id = $1;
"""

INSERT_USER = """
INSERT INTO users (name, email, password)
VALUES ($1, $2, $3)
RETURNING *;
"""

# Past stays only: the reservation must have ended before today
PAST_RESERVATIONS = f"""
SELECT reservations.id AS id, properties.id AS property_id, properties.title, properties.cost_per_night,
       reservations.start_date, reservations.end_date, {AVERAGE_RATING} AS average_rating
FROM reservations
JOIN properties ON reservations.property_id = properties.id
JOIN property_reviews ON properties.id = property_reviews.property_id
WHERE reservations.guest_id = $1
AND reservations.end_date < CURRENT_DATE
GROUP BY properties.id, reservations.id
ORDER BY reservations.start_date
LIMIT $2;
"""

PROPERTY_LISTING_SELECT = f"""
SELECT properties.*, {AVERAGE_RATING} AS average_rating
FROM properties
JOIN property_reviews ON properties.id = property_reviews.property_id
"""

# Columns written by add_property, in bind order
PROPERTY_COLUMNS = (
    "owner_id",
    "title",
    "description",
    "thumbnail_photo_url",
    "cover_photo_url",
    "cost_per_night",
    "parking_spaces",
    "number_of_bathrooms",
    "number_of_bedrooms",
    "country",
    "street",
    "city",
    "province",
    "post_code",
)


class ParamBinder:
    """
    Collects positional parameters and hands back their placeholder.

    The placeholder is always derived from the parameter's position in the
    list, so SQL text and params cannot drift apart.
    """

    def __init__(self) -> None:
        self.params: List[Any] = []

    def bind(self, value: Any) -> str:
        self.params.append(value)
        return f"${len(self.params)}"


def validate_limit(limit: Any) -> int:
    # bool is an int subclass; reject it explicitly
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise FilterValidationError(f"limit must be a positive integer, got {limit!r}", field="limit")
    return limit


def assemble_property_query(
    options: Union[PropertyFilters, Mapping[str, Any], None],
    limit: int = DEFAULT_LIMIT,
) -> Tuple[str, List[Any]]:
    """
    Build the property listing statement and its parameter list.

    Layout:
    - WHERE with city/owner/price predicates joined by AND (omitted when there are none)
    - GROUP BY properties.id, always
    - HAVING on the average rating when minimum_rating is set
    - ORDER BY cost_per_night LIMIT, always; the limit is the last parameter
    """
    limit = validate_limit(limit)
    predicates = build_predicates(options)
    binder = ParamBinder()

    parts = [PROPERTY_LISTING_SELECT.strip()]

    where = [p.render(binder.bind(p.value)) for p in predicates if p.clause == "where"]
    if where:
        parts.append("WHERE " + "\nAND ".join(where))

    parts.append("GROUP BY properties.id")

    having = [p.render(binder.bind(p.value)) for p in predicates if p.clause == "having"]
    if having:
        parts.append("HAVING " + "\nAND ".join(having))

    parts.append(f"ORDER BY cost_per_night\nLIMIT {binder.bind(limit)};")
    return "\n".join(parts), binder.params


def insert_property_statement(values: Mapping[str, Any]) -> Tuple[str, List[Any]]:
    """INSERT ... RETURNING * for one property, binding PROPERTY_COLUMNS in order."""
    binder = ParamBinder()
    placeholders = ", ".join(binder.bind(values.get(col)) for col in PROPERTY_COLUMNS)
    sql = (
        f"INSERT INTO properties ({', '.join(PROPERTY_COLUMNS)})\n"
        f"VALUES ({placeholders})\n"
        "RETURNING *;"
    )
    return sql, binder.params
