"""
SkyRoutes Backend - Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures and a small SQLite copy of the routes dataset.
How:   DATABASE_URL is pointed at a temporary file BEFORE any skyroutes import,
       so the module-level engine reads the fixture data. The file is built
       once per session with the same tables and `route_details` view as the
       production dataset.

Fixture dataset (17 routes):
    Airports:  LHR LGW MAN (United Kingdom), CDG ORY (France),
               FRA MUC (Germany), FCO (Italy), JFK (United States),
               NRT (Japan), ZZZ (empty country, no routes)
    Airlines:  1 British Airways, 2 Air France, 3 Lufthansa,
               4 ITA Airways, 5 Japan Airlines
    Route 2 (LGW→CDG) is operated by both British Airways and Air France;
    the view shows the lowest airline id, route_airlines holds both.

Fixture Hierarchy:
    Session-scoped:   fixture_database (builds the SQLite file)
    Function-scoped:  db_session, mock_db_session, test_client
"""

import os
import shutil
import tempfile
from pathlib import Path
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import create_engine, text

# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

_DB_DIR = Path(tempfile.mkdtemp(prefix="skyroutes_test_"))
TEST_DB_PATH = _DB_DIR / "routes.db"

os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{TEST_DB_PATH}"
os.environ["LOG_LEVEL"] = "WARNING"


# ══════════════════════════════════════════════════════════════════════════
# Fixture Dataset
# ══════════════════════════════════════════════════════════════════════════

SCHEMA = (
    """
    CREATE TABLE airports (
        iata TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        city_name TEXT,
        country TEXT,
        country_code TEXT,
        continent TEXT,
        latitude REAL,
        longitude REAL
    )
    """,
    """
    CREATE TABLE airlines (
        id INTEGER PRIMARY KEY,
        iata TEXT,
        name TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE routes (
        id INTEGER PRIMARY KEY,
        departure_iata TEXT NOT NULL REFERENCES airports(iata),
        arrival_iata TEXT NOT NULL REFERENCES airports(iata),
        distance_km REAL,
        duration_min INTEGER
    )
    """,
    """
    CREATE TABLE route_airlines (
        route_id INTEGER NOT NULL REFERENCES routes(id),
        airline_id INTEGER NOT NULL REFERENCES airlines(id),
        PRIMARY KEY (route_id, airline_id)
    )
    """,
    """
    CREATE VIEW route_details AS
    SELECT
        r.id AS route_id,
        dep.iata AS departure_iata,
        dep.city_name AS departure_city,
        dep.country AS departure_country,
        arr.iata AS arrival_iata,
        arr.city_name AS arrival_city,
        arr.country AS arrival_country,
        r.distance_km AS distance_km,
        r.duration_min AS duration_min,
        al.iata AS airline_iata,
        al.name AS airline_name
    FROM routes r
    JOIN airports dep ON dep.iata = r.departure_iata
    JOIN airports arr ON arr.iata = r.arrival_iata
    LEFT JOIN airlines al ON al.id = (
        SELECT MIN(ra.airline_id) FROM route_airlines ra WHERE ra.route_id = r.id
    )
    """,
)

AIRPORTS = [
    ("LHR", "Heathrow", "London", "United Kingdom", "GB", "EU", 51.4700, -0.4543),
    ("LGW", "Gatwick", "London", "United Kingdom", "GB", "EU", 51.1537, -0.1821),
    ("MAN", "Manchester Airport", "Manchester", "United Kingdom", "GB", "EU", 53.3537, -2.2750),
    ("CDG", "Charles de Gaulle", "Paris", "France", "FR", "EU", 49.0097, 2.5479),
    ("ORY", "Orly", "Paris", "France", "FR", "EU", 48.7262, 2.3652),
    ("FRA", "Frankfurt am Main", "Frankfurt", "Germany", "DE", "EU", 50.0379, 8.5622),
    ("MUC", "Munich Airport", "Munich", "Germany", "DE", "EU", 48.3537, 11.7750),
    ("FCO", "Leonardo da Vinci-Fiumicino", "Rome", "Italy", "IT", "EU", 41.8003, 12.2389),
    ("JFK", "John F Kennedy International", "New York", "United States", "US", "NA", 40.6413, -73.7781),
    ("NRT", "Narita International", "Tokyo", "Japan", "JP", "AS", 35.7720, 140.3929),
    ("ZZZ", "Unknown Field", "", "", "", "", None, None),
]

AIRLINES = [
    (1, "BA", "British Airways"),
    (2, "AF", "Air France"),
    (3, "LH", "Lufthansa"),
    (4, "AZ", "ITA Airways"),
    (5, "JL", "Japan Airlines"),
]

# (id, departure, arrival, distance_km, duration_min, operating airline ids)
ROUTES = [
    (1, "LHR", "CDG", 348.0, 75, [1]),
    (2, "LGW", "CDG", 320.0, 70, [1, 2]),
    (3, "MAN", "CDG", 600.0, 95, [2]),
    (4, "LHR", "ORY", 365.0, 80, [2]),
    (5, "CDG", "LHR", 348.0, 75, [2]),
    (6, "LHR", "JFK", 5540.0, 480, [1]),
    (7, "JFK", "LHR", 5540.0, 420, [1]),
    (8, "LHR", "FRA", 650.0, 100, [3]),
    (9, "FRA", "FCO", 960.0, 110, [3]),
    (10, "MUC", "FCO", 700.0, 90, [3]),
    (11, "FRA", "MUC", 300.0, 55, [3]),
    (12, "LHR", "NRT", 9560.0, 720, [5]),
    (13, "NRT", "LHR", 9560.0, 760, [5]),
    (14, "LHR", "MAN", 260.0, 60, [1]),
    (15, "MUC", "LHR", 940.0, 115, [1]),
    (16, "FCO", "FRA", 960.0, 110, [4]),
    (17, "FRA", "CDG", 450.0, 70, [3]),
]


def build_fixture_database(path: Path) -> None:
    """Create the fixture dataset at `path` with a synchronous engine."""
    engine = create_engine(f"sqlite:///{path}")
    with engine.begin() as conn:
        for statement in SCHEMA:
            conn.exec_driver_sql(statement)
        conn.execute(
            text(
                "INSERT INTO airports VALUES "
                "(:iata, :name, :city, :country, :code, :continent, :lat, :lon)"
            ),
            [
                dict(zip(("iata", "name", "city", "country", "code", "continent", "lat", "lon"), row))
                for row in AIRPORTS
            ],
        )
        conn.execute(
            text("INSERT INTO airlines VALUES (:id, :iata, :name)"),
            [{"id": i, "iata": code, "name": name} for i, code, name in AIRLINES],
        )
        conn.execute(
            text("INSERT INTO routes VALUES (:id, :dep, :arr, :dist, :dur)"),
            [
                {"id": rid, "dep": dep, "arr": arr, "dist": dist, "dur": dur}
                for rid, dep, arr, dist, dur, _ in ROUTES
            ],
        )
        conn.execute(
            text("INSERT INTO route_airlines VALUES (:route_id, :airline_id)"),
            [
                {"route_id": rid, "airline_id": airline_id}
                for rid, *_, airline_ids in ROUTES
                for airline_id in airline_ids
            ],
        )
    engine.dispose()


# ══════════════════════════════════════════════════════════════════════════
# Session-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture(scope="session", autouse=True)
def fixture_database():
    """Builds the SQLite dataset once and removes it after the run."""
    build_fixture_database(TEST_DB_PATH)
    yield TEST_DB_PATH
    shutil.rmtree(_DB_DIR, ignore_errors=True)


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_session():
    """A real read-only session on the fixture dataset."""
    from skyroutes.database import async_session_factory

    async with async_session_factory() as session:
        yield session


@pytest.fixture
def mock_db_session():
    """
    A mock AsyncSession for tests that must prove no query runs, or that
    simulate driver failures.
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.close = AsyncMock()
    return session


@pytest_asyncio.fixture
async def test_client():
    """
    HTTPX AsyncClient wired to the FastAPI app through ASGITransport.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from skyroutes.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
