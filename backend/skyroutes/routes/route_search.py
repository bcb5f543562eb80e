"""
SkyRoutes Backend - Route Search Handler
=========================================

What:  GET /routes, routes matching any combination of optional filters.
How:   Collects the recognized filters into a FilterSet, coerces the
       pagination strings and delegates to RouteService.

Example client usage:
    Page 1:  GET /routes?departure_country=United+Kingdom&limit=10
    Page 2:  GET /routes?departure_country=United+Kingdom&limit=10&offset=10
    All:     GET /routes?departure_country=United+Kingdom&all=true

Response shape:
    all=true   → pagination: {total, returnedCount, all}
    otherwise  → pagination: {total, returnedCount, limit, offset, all}
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from skyroutes.database import get_db_session
from skyroutes.schemas.catalog import ErrorResponse
from skyroutes.schemas.route import PaginationRequest, RouteSearchResponse
from skyroutes.services.route_query import route_service

router = APIRouter(tags=["Routes"])


@router.get(
    "/routes",
    response_model=RouteSearchResponse,
    response_model_exclude_unset=True,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="Search routes",
    description=(
        "Returns routes ordered by duration. Filters are optional and combine "
        "with AND. Results are paged (100 rows by default) unless all=true."
    ),
)
async def search_routes(
    airline_id: str | None = Query(default=None, description="Operated by this airline id"),
    airline_name: str | None = Query(
        default=None, description="Airline name contains this text (case-sensitive)"
    ),
    departure_iata: str | None = Query(default=None, description="Departure airport code"),
    arrival_iata: str | None = Query(default=None, description="Arrival airport code"),
    departure_country: str | None = Query(default=None, description="Departure country"),
    arrival_country: str | None = Query(default=None, description="Arrival country"),
    max_duration: str | None = Query(default=None, description="Maximum duration in minutes"),
    min_duration: str | None = Query(default=None, description="Minimum duration in minutes"),
    limit: str | None = Query(default=None, description="Page size (default 100)"),
    offset: str | None = Query(default=None, description="Rows to skip (default 0)"),
    all_: str | None = Query(default=None, alias="all", description="'true' disables paging"),
    db: AsyncSession = Depends(get_db_session),
) -> RouteSearchResponse:
    filters = {
        "airline_id": airline_id,
        "airline_name": airline_name,
        "departure_iata": departure_iata,
        "arrival_iata": arrival_iata,
        "departure_country": departure_country,
        "arrival_country": arrival_country,
        "max_duration": max_duration,
        "min_duration": min_duration,
    }
    pagination = PaginationRequest.from_query(all_, limit, offset, default_all=False)
    return await route_service.search_routes(db, filters, pagination)
