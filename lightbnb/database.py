# Entity accessors: one fixed-shape read or write per function against an injected QueryExecutor.
# Single-row lookups return a tagged LookupResult; list and insert operations raise DataAccessError.
from __future__ import annotations

import logging
from typing import Any, List, Mapping, Union

from . import queries, schemas
from .errors import DataAccessError
from .executor import QueryExecutor
from .results import ExecutionFailed, Found, LookupResult, NotFound

# Namespaced logger for accessor-level outcomes
logger = logging.getLogger("lightbnb.database")


def _lookup_user(executor: QueryExecutor, sql: str, key: str, value: Any) -> LookupResult[schemas.User]:
    try:
        rows = executor.execute(sql, [value])
    except DataAccessError as exc:
        logger.exception("users.lookup failed", extra={"key": key})
        return ExecutionFailed(exc)
    if not rows:
        logger.debug("users.lookup miss", extra={"key": key})
        return NotFound()
    return Found(schemas.User.model_validate(rows[0]))


# ----------------
# Users
# ----------------
def get_user_with_email(executor: QueryExecutor, email: str) -> LookupResult[schemas.User]:
    """
    Look up a single user by email.

    The email is normalized the same way UserCreate stores it (trimmed, lowercased).
    """
    if isinstance(email, str):
        email = email.strip().lower()
    return _lookup_user(executor, queries.USER_BY_EMAIL, "email", email)


def get_user_with_id(executor: QueryExecutor, user_id: int) -> LookupResult[schemas.User]:
    """Look up a single user by id."""
    return _lookup_user(executor, queries.USER_BY_ID, "id", user_id)


def add_user(executor: QueryExecutor, user: Union[schemas.UserCreate, Mapping[str, Any]]) -> List[schemas.User]:
    """
    Insert one user and return the inserted row as a one-element list.

    The password is stored as given; hashing belongs to the caller.
    """
    payload = user if isinstance(user, schemas.UserCreate) else schemas.UserCreate.model_validate(dict(user))
    try:
        rows = executor.execute(queries.INSERT_USER, [payload.name, payload.email, payload.password])
    except DataAccessError:
        logger.exception("users.insert failed", extra={"email": payload.email})
        raise
    created = [schemas.User.model_validate(r) for r in rows]
    logger.info("users.insert", extra={"user_ids": [u.id for u in created]})
    return created


# ----------------
# Reservations
# ----------------
def get_all_reservations(
    executor: QueryExecutor,
    guest_id: int,
    limit: int = queries.DEFAULT_LIMIT,
) -> List[schemas.ReservationSummary]:
    """
    Return a guest's past reservations (ended before today), oldest stay first.

    Each row carries the property's title, nightly cost and average review rating.
    `id` is the reservation id; the property id is in `property_id`.
    """
    limit = queries.validate_limit(limit)
    try:
        rows = executor.execute(queries.PAST_RESERVATIONS, [guest_id, limit])
    except DataAccessError:
        logger.exception("reservations.list failed", extra={"guest_id": guest_id})
        raise
    return [schemas.ReservationSummary.model_validate(r) for r in rows]


# ----------------
# Properties
# ----------------
def get_all_properties(
    executor: QueryExecutor,
    options: Union[schemas.PropertyFilters, Mapping[str, Any], None] = None,
    limit: int = queries.DEFAULT_LIMIT,
) -> List[schemas.PropertyWithRating]:
    """
    List properties matching the filter options, cheapest first, with their average rating.

    Raises FilterValidationError for malformed options before anything is executed.
    """
    sql, params = queries.assemble_property_query(options, limit)
    try:
        rows = executor.execute(sql, params)
    except DataAccessError:
        logger.exception("properties.list failed", extra={"param_count": len(params)})
        raise
    logger.info("properties.list", extra={"param_count": len(params), "count": len(rows)})
    return [schemas.PropertyWithRating.model_validate(r) for r in rows]


def add_property(
    executor: QueryExecutor,
    prop: Union[schemas.PropertyCreate, Mapping[str, Any]],
) -> schemas.Property:
    """Insert one property; the id is assigned by the database."""
    payload = prop if isinstance(prop, schemas.PropertyCreate) else schemas.PropertyCreate.model_validate(dict(prop))
    sql, params = queries.insert_property_statement(payload.model_dump())
    try:
        rows = executor.execute(sql, params)
    except DataAccessError:
        logger.exception("properties.insert failed", extra={"owner_id": payload.owner_id})
        raise
    if not rows:
        raise DataAccessError("Insert returned no row", sql=sql)
    created = schemas.Property.model_validate(rows[0])
    logger.info("properties.insert", extra={"property_id": created.id, "owner_id": created.owner_id})
    return created
