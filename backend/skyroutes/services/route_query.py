"""
SkyRoutes Backend - Paginated Route Query Executor and Route Service
=====================================================================

What:  Runs a filtered route query twice, once as COUNT(*) and once for the
       rows, and wraps the three route endpoint families around it.
How:   PaginatedQueryExecutor takes the WHERE conditions produced by the
       predicate builder plus a PaginationRequest. RouteService validates
       the request, picks the family's conditions and pagination default,
       and shapes the endpoint response.
Who:   Route handlers in skyroutes.routes.

Execution Flow:
    ┌──────────────┐    ┌──────────────────┐    ┌───────────────────────────┐
    │ FilterSet +  │───▶│ Predicate Builder│───▶│ COUNT(*) WHERE ...        │
    │ direction    │    │ (conditions)     │    │ SELECT ... WHERE ...      │
    └──────────────┘    └──────────────────┘    │   ORDER BY duration, id   │
                                                │   [LIMIT :n OFFSET :m]    │
                                                └───────────────────────────┘

Invariants:
    - total is computed over the filtered set only, never capped by
      LIMIT/OFFSET.
    - Rows are ordered by duration_min, then route_id, so consecutive pages
      tile the full result with no gaps or duplicates.
    - Both statements run on the caller's session, inside one read
      transaction.
    - Default return-all policy: generic and country queries page,
      airport queries return everything.
"""

import logging
from typing import List, Optional

from sqlalchemy import and_, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from skyroutes.exceptions import DatabaseError
from skyroutes.models.route import RouteDetail
from skyroutes.schemas.route import (
    AirportRoutesResponse,
    CountryRoutesResponse,
    PaginationRequest,
    QueryResult,
    RouteDetailResponse,
    RoutePagination,
    RouteSearchResponse,
)
from skyroutes.services.predicates import (
    Condition,
    FilterSet,
    build_airport_conditions,
    build_country_conditions,
    build_route_conditions,
    parse_direction,
)

logger = logging.getLogger(__name__)

ROUTE_ORDERING = (RouteDetail.duration_min.asc(), RouteDetail.route_id.asc())


class PaginatedQueryExecutor:
    """
    Count-then-fetch execution over the `route_details` view.

    Stateless: the same instance serves every request concurrently.
    """

    def _filtered(self, stmt, conditions: List[Condition]):
        if conditions:
            stmt = stmt.where(and_(*conditions))
        return stmt

    def count_statement(self, conditions: List[Condition]):
        """SELECT count(*) FROM route_details WHERE <conditions>"""
        return self._filtered(
            select(func.count()).select_from(RouteDetail), conditions
        )

    def rows_statement(self, conditions: List[Condition], pagination: PaginationRequest):
        """The ordered row query, paged unless `return_all` is set."""
        stmt = self._filtered(select(RouteDetail), conditions).order_by(*ROUTE_ORDERING)
        if not pagination.return_all:
            stmt = stmt.limit(pagination.limit).offset(pagination.offset)
        return stmt

    async def execute(
        self,
        db: AsyncSession,
        conditions: List[Condition],
        pagination: PaginationRequest,
    ) -> QueryResult:
        """
        Return the total match count and the requested rows.

        Args:
            db: Request-scoped session; both statements run on it
            conditions: WHERE conditions from the predicate builder
            pagination: Return-all flag, limit and offset

        Raises:
            DatabaseError: Either statement failed. No partial result is
                           returned.
        """
        try:
            total = (await db.execute(self.count_statement(conditions))).scalar_one()
            result = await db.execute(self.rows_statement(conditions, pagination))
            rows = [RouteDetailResponse.model_validate(row) for row in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error("Route query failed: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve routes. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.debug(
            "Route query matched %d rows, returned %d (all=%s limit=%d offset=%d)",
            total,
            len(rows),
            pagination.return_all,
            pagination.limit,
            pagination.offset,
        )
        return QueryResult(rows=rows, total=total, pagination=pagination)


class RouteService:
    """
    Route queries per endpoint family.

    Responsibilities:
        - search_routes():   GET /routes (any combination of generic filters)
        - airport_routes():  GET /airports/{iata}/routes
        - country_routes():  GET /countries/{country}/routes

    `direction` is validated before anything touches the database.
    """

    def __init__(self, executor: Optional[PaginatedQueryExecutor] = None):
        self.executor = executor or PaginatedQueryExecutor()

    async def search_routes(
        self,
        db: AsyncSession,
        filters: FilterSet,
        pagination: PaginationRequest,
    ) -> RouteSearchResponse:
        result = await self.executor.execute(db, build_route_conditions(filters), pagination)

        if pagination.return_all:
            meta = RoutePagination(
                total=result.total,
                returned_count=result.returned_count,
                all=True,
            )
        else:
            meta = RoutePagination(
                total=result.total,
                returned_count=result.returned_count,
                limit=pagination.limit,
                offset=pagination.offset,
                all=False,
            )
        return RouteSearchResponse(routes=result.rows, pagination=meta)

    async def airport_routes(
        self,
        db: AsyncSession,
        iata: str,
        direction: Optional[str],
        filters: FilterSet,
        pagination: PaginationRequest,
    ) -> AirportRoutesResponse:
        """
        Routes departing from (or arriving at) one airport.

        Raises:
            ValidationError: Unknown direction.
        """
        bound_direction = parse_direction(direction)
        conditions = build_airport_conditions(iata, bound_direction, filters)
        result = await self.executor.execute(db, conditions, pagination)

        return AirportRoutesResponse(
            airport=iata,
            direction=bound_direction,
            total=result.total,
            returned_count=result.returned_count,
            all=pagination.return_all,
            routes=result.rows,
        )

    async def country_routes(
        self,
        db: AsyncSession,
        country: str,
        direction: Optional[str],
        filters: FilterSet,
        pagination: PaginationRequest,
    ) -> CountryRoutesResponse:
        """
        Routes departing from (or arriving in) one country, optionally
        restricted to a destination country on the other end.

        Raises:
            ValidationError: Unknown direction.
        """
        bound_direction = parse_direction(direction)
        conditions = build_country_conditions(country, bound_direction, filters)
        result = await self.executor.execute(db, conditions, pagination)

        return CountryRoutesResponse(
            country=country,
            direction=bound_direction,
            destination_country=filters.get("destination_country") or None,
            total=result.total,
            returned_count=result.returned_count,
            all=pagination.return_all,
            routes=result.rows,
        )


# ── Singleton Instance ────────────────────────────────────────────────────
route_service = RouteService()
