"""
SkyRoutes Backend - Airport SQLAlchemy Model
=============================================

What:  ORM mapping of the `airports` table.
Who:   Catalog service (airport and country listings) and stats service.

Country names come straight from the source data. Some airports have an
empty-string country; country listings and counts leave those out.
"""

from typing import Optional

from sqlalchemy import Float, String
from sqlalchemy.orm import Mapped, mapped_column

from skyroutes.database import Base


class Airport(Base):
    """An airport identified by its IATA code."""

    __tablename__ = "airports"

    iata: Mapped[str] = mapped_column(String(3), primary_key=True)
    name: Mapped[str] = mapped_column(String)
    city_name: Mapped[Optional[str]] = mapped_column(String)
    country: Mapped[Optional[str]] = mapped_column(String)
    country_code: Mapped[Optional[str]] = mapped_column(String(2))
    # Two-letter continent code, e.g. EU, NA, AS
    continent: Mapped[Optional[str]] = mapped_column(String(2))
    latitude: Mapped[Optional[float]] = mapped_column(Float)
    longitude: Mapped[Optional[float]] = mapped_column(Float)

    def __repr__(self) -> str:
        return f"<Airport(iata='{self.iata}', name='{self.name}')>"
