"""
SkyRoutes Backend - Airline Routes
===================================

What:  GET /airlines, every airline ordered by name.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from skyroutes.database import get_db_session
from skyroutes.schemas.catalog import AirlineListResponse, ErrorResponse
from skyroutes.services.catalog_service import catalog_service

router = APIRouter(tags=["Airlines"])


@router.get(
    "/airlines",
    response_model=AirlineListResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List all airlines",
)
async def list_airlines(
    db: AsyncSession = Depends(get_db_session),
) -> AirlineListResponse:
    return await catalog_service.list_airlines(db)
