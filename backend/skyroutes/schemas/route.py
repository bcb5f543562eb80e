"""
SkyRoutes Backend - Route Query Schemas
========================================

What:  Pydantic models for the route query engine: the per-request pagination
       policy, the executor's result, and the three route endpoint responses.
How:   Response models are serialized by FastAPI; the JSON field
       `returnedCount` is a camelCase alias of `returned_count`.

Pagination echo per mode (GET /routes):
    all=true   → {"total", "returnedCount", "all": true}
    all=false  → {"total", "returnedCount", "limit", "offset", "all": false}
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_LIMIT = 100
DEFAULT_OFFSET = 0

# Largest integer SQLite can bind
SQLITE_INT_MAX = 2**63 - 1


class Direction(str, Enum):
    """Which end of a route a scoping key (airport or country) binds to."""

    DEPARTURE = "departure"
    ARRIVAL = "arrival"

    @property
    def opposite(self) -> "Direction":
        return Direction.ARRIVAL if self is Direction.DEPARTURE else Direction.DEPARTURE


# ══════════════════════════════════════════════════════════════════════════
# Query Parameter Models
# ══════════════════════════════════════════════════════════════════════════


def _parse_int(value: Optional[str], default: int, minimum: int) -> int:
    """
    Parse a query-string integer, falling back to `default` on any problem.

    Digit-group underscores ("1_000") and values SQLite cannot bind count
    as problems.
    """
    if value is None or "_" in value:
        return default
    try:
        parsed = int(value.strip())
    except (TypeError, ValueError):
        return default
    return parsed if minimum <= parsed <= SQLITE_INT_MAX else default


class PaginationRequest(BaseModel):
    """
    What:  How much of a filtered result set to return.

    Parameters:
        return_all: Skip LIMIT/OFFSET and return every matching row
        limit:      Page size, positive (default 100)
        offset:     Rows to skip, non-negative (default 0)

    Built from raw query strings by `from_query`, which never fails:
    a limit or offset that is not an integer in range silently becomes
    the default.
    """

    model_config = ConfigDict(frozen=True)

    return_all: bool = False
    limit: int = Field(default=DEFAULT_LIMIT, ge=1)
    offset: int = Field(default=DEFAULT_OFFSET, ge=0)

    @classmethod
    def from_query(
        cls,
        all_: Optional[str] = None,
        limit: Optional[str] = None,
        offset: Optional[str] = None,
        default_all: bool = False,
    ) -> "PaginationRequest":
        """
        Coerce the `all`, `limit` and `offset` query strings.

        `all` is true only for the string "true" (any case); when absent the
        endpoint's own default applies.
        """
        return_all = default_all if all_ is None else all_.strip().lower() == "true"
        return cls(
            return_all=return_all,
            limit=_parse_int(limit, DEFAULT_LIMIT, minimum=1),
            offset=_parse_int(offset, DEFAULT_OFFSET, minimum=0),
        )


# ══════════════════════════════════════════════════════════════════════════
# Row and Result Models
# ══════════════════════════════════════════════════════════════════════════


class RouteDetailResponse(BaseModel):
    """One row of the `route_details` view as returned by the API."""

    route_id: int = Field(description="Unique route identifier")
    departure_iata: str = Field(description="IATA code of the departure airport")
    departure_city: Optional[str] = None
    departure_country: Optional[str] = None
    arrival_iata: str = Field(description="IATA code of the arrival airport")
    arrival_city: Optional[str] = None
    arrival_country: Optional[str] = None
    distance_km: Optional[float] = Field(default=None, description="Great-circle distance")
    duration_min: Optional[int] = Field(default=None, description="Scheduled duration in minutes")
    airline_iata: Optional[str] = None
    airline_name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class QueryResult(BaseModel):
    """
    What:  Output of the paginated query executor.

    `total` counts every row matching the filters, regardless of pagination.
    `rows` holds the rows actually returned (all of them, or one page).
    """

    rows: List[RouteDetailResponse]
    total: int = Field(ge=0)
    pagination: PaginationRequest

    @property
    def returned_count(self) -> int:
        return len(self.rows)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class RoutePagination(BaseModel):
    """
    Pagination block of GET /routes.

    `limit` and `offset` are only set (and so only serialized) for paged
    responses; the endpoint is registered with `response_model_exclude_unset`.
    """

    model_config = ConfigDict(populate_by_name=True)

    total: int = Field(description="Rows matching the filters, ignoring pagination")
    returned_count: int = Field(alias="returnedCount", description="Rows in this response")
    limit: Optional[int] = Field(default=None, description="Page size (paged mode only)")
    offset: Optional[int] = Field(default=None, description="Rows skipped (paged mode only)")
    all: bool = Field(description="Whether every matching row was returned")


class RouteSearchResponse(BaseModel):
    """GET /routes"""

    routes: List[RouteDetailResponse]
    pagination: RoutePagination


class AirportRoutesResponse(BaseModel):
    """GET /airports/{iata}/routes"""

    model_config = ConfigDict(populate_by_name=True)

    airport: str
    direction: Direction
    total: int
    returned_count: int = Field(alias="returnedCount")
    all: bool
    routes: List[RouteDetailResponse]


class CountryRoutesResponse(BaseModel):
    """GET /countries/{country}/routes"""

    model_config = ConfigDict(populate_by_name=True)

    country: str
    direction: Direction
    destination_country: Optional[str] = Field(
        default=None,
        description="Country on the opposite end of the route (null when not filtered)",
    )
    total: int
    returned_count: int = Field(alias="returnedCount")
    all: bool
    routes: List[RouteDetailResponse]
