"""
SkyRoutes Backend - Catalog, Stats and Error Schemas
=====================================================

What:  Pydantic response models for the simple fixed-query endpoints
       (/airlines, /airports, /countries, /stats, /health) and the shared
       error body.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ══════════════════════════════════════════════════════════════════════════
# Catalog Models
# ══════════════════════════════════════════════════════════════════════════


class AirlineResponse(BaseModel):
    id: int
    iata: Optional[str] = None
    name: str

    model_config = ConfigDict(from_attributes=True)


class AirlineListResponse(BaseModel):
    """GET /airlines, ordered by name."""

    airlines: List[AirlineResponse]


class AirportResponse(BaseModel):
    iata: str
    name: str
    city_name: Optional[str] = None
    country: Optional[str] = None
    country_code: Optional[str] = None
    continent: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    model_config = ConfigDict(from_attributes=True)


class AirportListResponse(BaseModel):
    """GET /airports, optionally restricted to one country or continent."""

    airports: List[AirportResponse]


class CountryResponse(BaseModel):
    country: str
    country_code: Optional[str] = None
    continent: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class CountryListResponse(BaseModel):
    """GET /countries, distinct and without the empty-string country."""

    countries: List[CountryResponse]


# ══════════════════════════════════════════════════════════════════════════
# Stats Models
# ══════════════════════════════════════════════════════════════════════════


class StatsCounts(BaseModel):
    airports: int
    airlines: int
    routes: int
    countries: int


class TopAirline(BaseModel):
    name: str
    route_count: int

    model_config = ConfigDict(from_attributes=True)


class TopDepartureAirport(BaseModel):
    name: str
    city_name: Optional[str] = None
    country: Optional[str] = None
    route_count: int

    model_config = ConfigDict(from_attributes=True)


class StatsResponse(BaseModel):
    """
    What:  Fixed aggregate view of the dataset.

    Fields:
        counts: Totals of airports, airlines, routes and non-empty countries
        top_airlines: The 5 airlines operating the most routes
        top_departure_airports: The 5 airports with the most departing routes
    """

    counts: StatsCounts
    top_airlines: List[TopAirline]
    top_departure_airports: List[TopDepartureAirport]


# ══════════════════════════════════════════════════════════════════════════
# Service and Error Models
# ══════════════════════════════════════════════════════════════════════════


class HealthResponse(BaseModel):
    status: str = Field(default="ok", description="Always 'ok' while the process serves requests")


class ErrorResponse(BaseModel):
    """
    What:  Standardized error body for all API errors.

    Example:
        {
            "error": "validation_error",
            "message": "Invalid direction parameter",
            "details": {"field": "direction", "allowed": ["departure", "arrival"]},
            "request_id": "1f3a9c2e"
        }
    """

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")
