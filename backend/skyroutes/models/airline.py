"""
SkyRoutes Backend - Airline SQLAlchemy Model
=============================================

What:  ORM mapping of the `airlines` table.
Who:   Catalog service (GET /airlines) and stats service (top airlines).
"""

from typing import Optional

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from skyroutes.database import Base


class Airline(Base):
    __tablename__ = "airlines"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    iata: Mapped[Optional[str]] = mapped_column(String(2))
    name: Mapped[str] = mapped_column(String)

    def __repr__(self) -> str:
        return f"<Airline(id={self.id}, name='{self.name}')>"
