"""
SkyRoutes Backend - Route SQLAlchemy Models
============================================

What:  ORM mappings of `routes`, the `route_airlines` junction table and the
       denormalized `route_details` view.
Who:   The predicate builder and query executor (RouteDetail, RouteAirline)
       and the stats service (Route, RouteAirline).

The mappings are read-only views of a prebuilt dataset. `route_details` is a
database VIEW; SQLAlchemy maps it like a table because `route_id` is unique.

    route_details
    ─────────────
    route_id                                        one row per route
    departure_iata / departure_city / departure_country
    arrival_iata / arrival_city / arrival_country
    distance_km, duration_min
    airline_iata, airline_name                      operating airline
"""

from typing import Optional

from sqlalchemy import Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from skyroutes.database import Base


class Route(Base):
    """A direct connection between two airports."""

    __tablename__ = "routes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    departure_iata: Mapped[str] = mapped_column(String(3), ForeignKey("airports.iata"))
    arrival_iata: Mapped[str] = mapped_column(String(3), ForeignKey("airports.iata"))
    distance_km: Mapped[Optional[float]] = mapped_column(Float)
    duration_min: Mapped[Optional[int]] = mapped_column(Integer)

    def __repr__(self) -> str:
        return f"<Route(id={self.id}, {self.departure_iata}->{self.arrival_iata})>"


class RouteAirline(Base):
    """
    Junction between routes and the airlines operating them.

    A route may appear several times (one row per operating airline), which is
    why filtering by airline goes through a membership sub-query instead of a
    join against the view.
    """

    __tablename__ = "route_airlines"

    route_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("routes.id"), primary_key=True
    )
    airline_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("airlines.id"), primary_key=True
    )


class RouteDetail(Base):
    """
    One denormalized row per route: both endpoints with city and country,
    distance, duration and the operating airline.

    Query Patterns:
        - Filter on any combination of columns, ORDER BY duration_min, route_id
        - COUNT(*) over the same filter for pagination metadata
    """

    __tablename__ = "route_details"

    route_id: Mapped[int] = mapped_column(Integer, primary_key=True)

    departure_iata: Mapped[str] = mapped_column(String(3))
    departure_city: Mapped[Optional[str]] = mapped_column(String)
    departure_country: Mapped[Optional[str]] = mapped_column(String)

    arrival_iata: Mapped[str] = mapped_column(String(3))
    arrival_city: Mapped[Optional[str]] = mapped_column(String)
    arrival_country: Mapped[Optional[str]] = mapped_column(String)

    distance_km: Mapped[Optional[float]] = mapped_column(Float)
    duration_min: Mapped[Optional[int]] = mapped_column(Integer)

    airline_iata: Mapped[Optional[str]] = mapped_column(String)
    airline_name: Mapped[Optional[str]] = mapped_column(String)

    def __repr__(self) -> str:
        return (
            f"<RouteDetail(route_id={self.route_id}, "
            f"{self.departure_iata}->{self.arrival_iata}, {self.duration_min}min)>"
        )
