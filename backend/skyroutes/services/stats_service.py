"""
SkyRoutes Backend - Stats Service
==================================

What:  The fixed aggregate queries behind GET /stats.
How:   Four scalar counts plus two top-5 rankings, all run on one session.

Queries:
    airports    SELECT COUNT(*) FROM airports
    airlines    SELECT COUNT(*) FROM airlines
    routes      SELECT COUNT(*) FROM routes
    countries   SELECT COUNT(DISTINCT country) FROM airports WHERE country != ''
    top airlines            route_airlines ⋈ airlines, grouped by airline
    top departure airports  routes ⋈ airports on departure_iata, grouped by airport
"""

import logging

from sqlalchemy import desc, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from skyroutes.exceptions import DatabaseError
from skyroutes.models.airline import Airline
from skyroutes.models.airport import Airport
from skyroutes.models.route import Route, RouteAirline
from skyroutes.schemas.catalog import (
    StatsCounts,
    StatsResponse,
    TopAirline,
    TopDepartureAirport,
)

logger = logging.getLogger(__name__)

TOP_N = 5


class StatsService:
    async def get_stats(self, db: AsyncSession) -> StatsResponse:
        """
        Aggregate counts and rankings of the dataset.

        Rankings are ordered by route count descending, ties by name, so the
        response is stable across calls.

        Raises:
            DatabaseError: Any of the queries failed.
        """
        route_count = func.count().label("route_count")

        top_airlines_stmt = (
            select(Airline.name, route_count)
            .select_from(RouteAirline)
            .join(Airline, RouteAirline.airline_id == Airline.id)
            .group_by(Airline.id, Airline.name)
            .order_by(desc("route_count"), Airline.name)
            .limit(TOP_N)
        )
        top_airports_stmt = (
            select(Airport.name, Airport.city_name, Airport.country, route_count)
            .select_from(Route)
            .join(Airport, Route.departure_iata == Airport.iata)
            .group_by(Route.departure_iata, Airport.name, Airport.city_name, Airport.country)
            .order_by(desc("route_count"), Airport.name)
            .limit(TOP_N)
        )

        try:
            counts = StatsCounts(
                airports=await self._count(db, select(func.count()).select_from(Airport)),
                airlines=await self._count(db, select(func.count()).select_from(Airline)),
                routes=await self._count(db, select(func.count()).select_from(Route)),
                countries=await self._count(
                    db,
                    select(func.count(func.distinct(Airport.country))).where(
                        Airport.country != ""
                    ),
                ),
            )
            top_airlines = (await db.execute(top_airlines_stmt)).all()
            top_airports = (await db.execute(top_airports_stmt)).all()
        except SQLAlchemyError as e:
            logger.error("Database error computing stats: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not compute statistics. Please try again.",
                context={"error_type": type(e).__name__},
            )

        return StatsResponse(
            counts=counts,
            top_airlines=[TopAirline.model_validate(row) for row in top_airlines],
            top_departure_airports=[
                TopDepartureAirport.model_validate(row) for row in top_airports
            ],
        )

    async def _count(self, db: AsyncSession, stmt) -> int:
        return (await db.execute(stmt)).scalar_one()


stats_service = StatsService()
