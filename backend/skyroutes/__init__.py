"""
SkyRoutes Backend - Application Package Initializer
===================================================

What: Marks the `skyroutes` directory as a Python package.
Who:  Imported by uvicorn (`skyroutes.main:app`), pytest and the service layer.

Architecture Note:
    The backend is a read-only query API over a fixed flight routes dataset,
    organised in layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← query-string parsing, HTTP only
    ├─────────────────────────────────────┤
    │         Services (Query Logic)      │  ← predicate building, pagination
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy mappings + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Data Source)       │  ← async engine, read-only sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
