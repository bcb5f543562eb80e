"""
SkyRoutes Backend - Route Predicate Builder
============================================

What:  Turns the recognized, optional query parameters of a route endpoint
       into the list of WHERE conditions the query executor conjoins.
How:   Every optional filter is a pure function
           FilterSet -> Optional[condition]
       and each endpoint family owns a fixed, ordered tuple of them. Building
       the WHERE clause is a fold over that tuple: present filters contribute
       exactly one condition, absent ones contribute nothing.
Who:   RouteService, once per request, before any query runs.

Parameter binding:
    Conditions are SQLAlchemy expressions, so every value travels inside the
    condition it belongs to as a bound parameter. There is no separate
    positional parameter list that could drift out of step with the
    fragments when some filters are missing.

Endpoint families:
    Generic   (GET /routes)
        airline_id, airline_name, departure_iata, arrival_iata,
        departure_country, arrival_country, max_duration, min_duration
    Airport   (GET /airports/{iata}/routes)
        scope: departure_iata | arrival_iata = :iata (per direction)
        airline_id, airline_name
    Country   (GET /countries/{country}/routes)
        scope: departure_country | arrival_country = :country (per direction)
        destination_country (opposite side), airline_name

Value semantics:
    - Present means "not None". An empty string is a real value:
      departure_iata="" matches nothing, airline_name="" matches every
      named airline.
    - airline_id is a membership test against route_airlines through a
      sub-query, never a join, so multi-airline routes appear once.
    - airline_name is a case-sensitive substring match.
    - max_duration / min_duration are inclusive bounds. A value that is
      not a finite number drops the filter instead of failing the request.
"""

import logging
import math
from typing import Callable, List, Mapping, Optional, Sequence, Union

from sqlalchemy import func, select
from sqlalchemy.sql.elements import ColumnElement

from skyroutes.exceptions import ValidationError
from skyroutes.models.route import RouteAirline, RouteDetail
from skyroutes.schemas.route import SQLITE_INT_MAX, Direction

logger = logging.getLogger(__name__)

FilterSet = Mapping[str, Optional[str]]
Condition = ColumnElement[bool]
Predicate = Callable[[FilterSet], Optional[Condition]]

GENERIC_FILTER_NAMES = (
    "airline_id",
    "airline_name",
    "departure_iata",
    "arrival_iata",
    "departure_country",
    "arrival_country",
    "max_duration",
    "min_duration",
)


# ── Coercion ──────────────────────────────────────────────────────────────

def parse_direction(value: Optional[str]) -> Direction:
    """
    Strictly validate the `direction` parameter (default: departure).

    Raises:
        ValidationError: Anything other than "departure" or "arrival".
    """
    if value is None:
        return Direction.DEPARTURE
    try:
        return Direction(value)
    except ValueError:
        raise ValidationError(
            message="Invalid direction parameter",
            field="direction",
            context={
                "value": value,
                "allowed": [d.value for d in Direction],
            },
        )


def coerce_number(value: str) -> Optional[Union[int, float]]:
    """
    Convert a duration bound to a number, or None if it is not one.

    Integral values stay ints ("90" -> 90, "90.0" -> 90); fractional values
    and integers beyond SQLite's range are kept as floats. NaN, infinities
    and digit-group underscores ("1_0") are rejected.
    """
    if "_" in value:
        return None
    try:
        number = float(value.strip())
    except (AttributeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    if number.is_integer() and abs(number) <= SQLITE_INT_MAX:
        return int(number)
    return number


def coerce_airline_id(value: str) -> Union[int, str]:
    """
    Airline ids are integers; anything else, including integers SQLite
    cannot bind, is bound verbatim and matches no airline.
    """
    if "_" in value:
        return value
    try:
        airline_id = int(value.strip())
    except ValueError:
        return value
    return airline_id if abs(airline_id) <= SQLITE_INT_MAX else value


# ── Predicate factories ───────────────────────────────────────────────────

def equals(name: str, column) -> Predicate:
    """Exact match of `column` against filter `name`."""

    def predicate(filters: FilterSet) -> Optional[Condition]:
        value = filters.get(name)
        if value is None:
            return None
        return column == value

    return predicate


def contains(name: str, column) -> Predicate:
    """
    Case-sensitive substring match of `column` against filter `name`.

    instr() keeps the match case-sensitive and treats % and _ literally,
    which LIKE on SQLite does not.
    """

    def predicate(filters: FilterSet) -> Optional[Condition]:
        value = filters.get(name)
        if value is None:
            return None
        return func.instr(column, value) > 0

    return predicate


def duration_bound(name: str, upper: bool) -> Predicate:
    """Inclusive bound on duration_min; dropped when the value is not numeric."""

    def predicate(filters: FilterSet) -> Optional[Condition]:
        raw = filters.get(name)
        if raw is None:
            return None
        bound = coerce_number(raw)
        if bound is None:
            logger.debug("Ignoring non-numeric %s=%r", name, raw)
            return None
        if upper:
            return RouteDetail.duration_min <= bound
        return RouteDetail.duration_min >= bound

    return predicate


def airline_membership(filters: FilterSet) -> Optional[Condition]:
    """route_id IN (SELECT route_id FROM route_airlines WHERE airline_id = :id)"""
    value = filters.get("airline_id")
    if value is None:
        return None
    operated = select(RouteAirline.route_id).where(
        RouteAirline.airline_id == coerce_airline_id(value)
    )
    return RouteDetail.route_id.in_(operated)


def _departure_or_arrival(direction: Direction, departure_column, arrival_column):
    return departure_column if direction is Direction.DEPARTURE else arrival_column


def scoped_to(value: str, column) -> Predicate:
    """The mandatory scoping condition of airport and country queries."""

    def predicate(filters: FilterSet) -> Optional[Condition]:
        return column == value

    return predicate


# ── Filter tables per endpoint family ─────────────────────────────────────

GENERIC_PREDICATES: Sequence[Predicate] = (
    airline_membership,
    contains("airline_name", RouteDetail.airline_name),
    equals("departure_iata", RouteDetail.departure_iata),
    equals("arrival_iata", RouteDetail.arrival_iata),
    equals("departure_country", RouteDetail.departure_country),
    equals("arrival_country", RouteDetail.arrival_country),
    duration_bound("max_duration", upper=True),
    duration_bound("min_duration", upper=False),
)


def build_conditions(filters: FilterSet, predicates: Sequence[Predicate]) -> List[Condition]:
    """
    Fold a FilterSet over an ordered predicate table.

    The output order follows the table, never the order of `filters`, and
    each condition carries its own bound value.
    """
    conditions: List[Condition] = []
    for predicate in predicates:
        condition = predicate(filters)
        if condition is not None:
            conditions.append(condition)
    return conditions


def build_route_conditions(filters: FilterSet) -> List[Condition]:
    """Conditions for GET /routes. Unrecognized keys are ignored."""
    return build_conditions(filters, GENERIC_PREDICATES)


def build_airport_conditions(
    iata: str, direction: Direction, filters: FilterSet
) -> List[Condition]:
    """Conditions for GET /airports/{iata}/routes."""
    column = _departure_or_arrival(
        direction, RouteDetail.departure_iata, RouteDetail.arrival_iata
    )
    predicates = (
        scoped_to(iata, column),
        airline_membership,
        contains("airline_name", RouteDetail.airline_name),
    )
    return build_conditions(filters, predicates)


def build_country_conditions(
    country: str, direction: Direction, filters: FilterSet
) -> List[Condition]:
    """
    Conditions for GET /countries/{country}/routes.

    `destination_country` constrains the opposite end from the scoped one:
    departure routes from Germany with destination_country=Italy bind
    arrival_country = 'Italy'.
    """
    scope_column = _departure_or_arrival(
        direction, RouteDetail.departure_country, RouteDetail.arrival_country
    )
    destination_column = _departure_or_arrival(
        direction.opposite, RouteDetail.departure_country, RouteDetail.arrival_country
    )
    predicates = (
        scoped_to(country, scope_column),
        equals("destination_country", destination_column),
        contains("airline_name", RouteDetail.airline_name),
    )
    return build_conditions(filters, predicates)
