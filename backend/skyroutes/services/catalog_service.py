"""
SkyRoutes Backend - Catalog Service
====================================

What:  Fixed listing queries for airlines, airports and countries.
Who:   GET /airlines, GET /airports, GET /countries.

Airport filtering precedence:
    country (non-empty)    → WHERE country = :country ORDER BY city_name, name
    continent (non-empty)  → WHERE continent = :continent ORDER BY country, city_name, name
    neither                → ORDER BY country, city_name, name
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from skyroutes.exceptions import DatabaseError
from skyroutes.models.airline import Airline
from skyroutes.models.airport import Airport
from skyroutes.schemas.catalog import (
    AirlineListResponse,
    AirlineResponse,
    AirportListResponse,
    AirportResponse,
    CountryListResponse,
    CountryResponse,
)

logger = logging.getLogger(__name__)


class CatalogService:
    """Read-only listings of the reference tables."""

    async def list_airlines(self, db: AsyncSession) -> AirlineListResponse:
        stmt = select(Airline).order_by(Airline.name)
        try:
            airlines = (await db.execute(stmt)).scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing airlines: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve airlines. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return AirlineListResponse(
            airlines=[AirlineResponse.model_validate(a) for a in airlines]
        )

    async def list_airports(
        self,
        db: AsyncSession,
        country: Optional[str] = None,
        continent: Optional[str] = None,
    ) -> AirportListResponse:
        """
        List airports, restricted to one country or one continent.

        At most one restriction applies; `country` wins when both are given.
        Empty values count as not given.
        """
        stmt = select(Airport)
        if country:
            stmt = stmt.where(Airport.country == country).order_by(
                Airport.city_name, Airport.name
            )
        else:
            if continent:
                stmt = stmt.where(Airport.continent == continent)
            stmt = stmt.order_by(Airport.country, Airport.city_name, Airport.name)

        try:
            airports = (await db.execute(stmt)).scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing airports: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve airports. Please try again.",
                context={"country": country, "continent": continent},
            )
        return AirportListResponse(
            airports=[AirportResponse.model_validate(a) for a in airports]
        )

    async def list_countries(self, db: AsyncSession) -> CountryListResponse:
        """Distinct (country, country_code, continent), skipping the empty country."""
        stmt = (
            select(Airport.country, Airport.country_code, Airport.continent)
            .where(Airport.country != "")
            .distinct()
            .order_by(Airport.country)
        )
        try:
            rows = (await db.execute(stmt)).all()
        except SQLAlchemyError as e:
            logger.error("Database error listing countries: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve countries. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return CountryListResponse(
            countries=[CountryResponse.model_validate(row) for row in rows]
        )


catalog_service = CatalogService()
