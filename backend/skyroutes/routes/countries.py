"""
SkyRoutes Backend - Country Handlers
=====================================

What:  GET /countries (listing) and GET /countries/{country}/routes.

Example:
    GET /countries/Germany/routes?destination_country=Italy
        → routes departing Germany and arriving in Italy
    GET /countries/Germany/routes?direction=arrival&destination_country=Italy
        → routes departing Italy and arriving in Germany
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from skyroutes.database import get_db_session
from skyroutes.schemas.catalog import CountryListResponse, ErrorResponse
from skyroutes.schemas.route import CountryRoutesResponse, PaginationRequest
from skyroutes.services.catalog_service import catalog_service
from skyroutes.services.route_query import route_service

router = APIRouter(tags=["Countries"])


@router.get(
    "/countries",
    response_model=CountryListResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List countries with airports",
)
async def list_countries(
    db: AsyncSession = Depends(get_db_session),
) -> CountryListResponse:
    return await catalog_service.list_countries(db)


@router.get(
    "/countries/{country}/routes",
    response_model=CountryRoutesResponse,
    responses={
        400: {"description": "Invalid direction", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Routes from or to a country",
)
async def country_routes(
    country: str,
    direction: str | None = Query(
        default=None, description="'departure' (default) or 'arrival'"
    ),
    destination_country: str | None = Query(
        default=None, description="Country at the other end of the route"
    ),
    airline_name: str | None = Query(
        default=None, description="Airline name contains this text (case-sensitive)"
    ),
    limit: str | None = Query(default=None, description="Page size (default 100)"),
    offset: str | None = Query(default=None, description="Rows to skip (default 0)"),
    all_: str | None = Query(default=None, alias="all", description="'true' disables paging"),
    db: AsyncSession = Depends(get_db_session),
) -> CountryRoutesResponse:
    filters = {
        "destination_country": destination_country,
        "airline_name": airline_name,
    }
    pagination = PaginationRequest.from_query(all_, limit, offset, default_all=False)
    return await route_service.country_routes(db, country, direction, filters, pagination)
