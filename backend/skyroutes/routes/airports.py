"""
SkyRoutes Backend - Airport Handlers
=====================================

What:  GET /airports (listing) and GET /airports/{iata}/routes.

Airport routes default to returning every row (all=true); pass all=false
with limit/offset to page through a hub's routes.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from skyroutes.database import get_db_session
from skyroutes.schemas.catalog import AirportListResponse, ErrorResponse
from skyroutes.schemas.route import AirportRoutesResponse, PaginationRequest
from skyroutes.services.catalog_service import catalog_service
from skyroutes.services.route_query import route_service

router = APIRouter(tags=["Airports"])


@router.get(
    "/airports",
    response_model=AirportListResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List airports",
    description="Optionally restricted to one country or, failing that, one continent.",
)
async def list_airports(
    country: str | None = Query(default=None, description="Country name, e.g. 'France'"),
    continent: str | None = Query(default=None, description="Continent code, e.g. 'EU'"),
    db: AsyncSession = Depends(get_db_session),
) -> AirportListResponse:
    return await catalog_service.list_airports(db, country=country, continent=continent)


@router.get(
    "/airports/{iata}/routes",
    response_model=AirportRoutesResponse,
    responses={
        400: {"description": "Invalid direction", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Routes from or to an airport",
)
async def airport_routes(
    iata: str,
    direction: str | None = Query(
        default=None, description="'departure' (default) or 'arrival'"
    ),
    airline_id: str | None = Query(default=None, description="Operated by this airline id"),
    airline_name: str | None = Query(
        default=None, description="Airline name contains this text (case-sensitive)"
    ),
    limit: str | None = Query(default=None, description="Page size when all=false"),
    offset: str | None = Query(default=None, description="Rows to skip when all=false"),
    all_: str | None = Query(default=None, alias="all", description="Defaults to 'true'"),
    db: AsyncSession = Depends(get_db_session),
) -> AirportRoutesResponse:
    filters = {"airline_id": airline_id, "airline_name": airline_name}
    pagination = PaginationRequest.from_query(all_, limit, offset, default_all=True)
    return await route_service.airport_routes(db, iata, direction, filters, pagination)
