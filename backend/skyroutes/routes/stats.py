"""
SkyRoutes Backend - Stats Route
================================

What:  GET /stats, fixed aggregate counts and top-5 rankings.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from skyroutes.database import get_db_session
from skyroutes.schemas.catalog import ErrorResponse, StatsResponse
from skyroutes.services.stats_service import stats_service

router = APIRouter(tags=["Stats"])


@router.get(
    "/stats",
    response_model=StatsResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="Dataset statistics",
    description=(
        "Counts of airports, airlines, routes and countries, plus the five "
        "airlines with the most routes and the five busiest departure airports."
    ),
)
async def get_stats(db: AsyncSession = Depends(get_db_session)) -> StatsResponse:
    return await stats_service.get_stats(db)
