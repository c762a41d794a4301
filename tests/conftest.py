"""
Pytest Configuration and Fixtures

Provides shared fixtures for all tests.
"""

import json
import os
import sqlite3
import tempfile
from pathlib import Path
from typing import Any, Callable, Dict, Generator, List

import pytest

# Add src to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from xactestate.core.database import get_connection, init_schema  # noqa: E402


OWNER_ID = "owner-1"
OTHER_OWNER_ID = "owner-2"


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture(scope="function")
def temp_db() -> Generator[str, None, None]:
    """Create a temporary test database with the full schema.

    Yields:
        Path to temporary database file.
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = f.name

    with get_connection(db_path) as conn:
        init_schema(conn)

    yield db_path

    # Cleanup
    try:
        os.unlink(db_path)
    except (OSError, PermissionError):
        pass


@pytest.fixture(scope="function")
def test_config(temp_db: str, monkeypatch):
    """Create test configuration with temp database.

    Rate limiting is off unless a test turns it back on.

    Yields:
        Config object configured for testing.
    """
    # Set environment variables
    monkeypatch.setenv("XACT_DB_PATH", temp_db)
    monkeypatch.setenv("XACT_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("XACT_RATE_LIMIT_ENABLED", "false")

    # Reset config singleton
    from xactestate.config import reset_config, get_config
    reset_config()

    config = get_config()
    yield config

    # Cleanup
    reset_config()


def _insert_property(conn: sqlite3.Connection, **fields: Any) -> str:
    images: List[str] = fields.pop("images", [])
    row: Dict[str, Any] = {
        "id": fields.get("id") or f"prop-{fields['slug']}",
        "description": "A fine property.",
        "category": "RESIDENTIAL",
        "listing_type": "SALE",
        "status": "PUBLISHED",
        "address": "1 Rue de Test",
        "city": "Luxembourg",
        "features": "[]",
        "is_featured": 0,
        "owner_id": OWNER_ID,
        "created_at": "2024-01-01T00:00:00.000000Z",
    }
    row.update(fields)
    if isinstance(row["features"], list):
        row["features"] = json.dumps(row["features"])

    columns = ", ".join(row)
    placeholders = ", ".join(f":{name}" for name in row)
    conn.execute(f"INSERT INTO properties ({columns}) VALUES ({placeholders})", row)
    for order, url in enumerate(images):
        conn.execute(
            "INSERT INTO property_images (property_id, url, sort_order) VALUES (?, ?, ?)",
            (row["id"], url, order),
        )
    conn.commit()
    return row["id"]


@pytest.fixture(scope="function")
def add_property(temp_db: str) -> Callable[..., str]:
    """Insert a listing row directly; returns its id.

    Defaults: published, for sale, in Luxembourg, owned by ``owner-1``.
    """
    def _add(**fields: Any) -> str:
        with get_connection(temp_db) as conn:
            return _insert_property(conn, **fields)
    return _add


@pytest.fixture(scope="function")
def populated_db(temp_db: str) -> str:
    """Create a database with agencies, an agent and sample listings.

    Published listings, newest first: kirchberg apartment (featured),
    bertrange house, gare studio (rental), cloche d'or office (rental).
    The strassen villa is pending review and never public.

    Returns:
        Path to populated database.
    """
    with get_connection(temp_db) as conn:
        conn.execute("""
            INSERT INTO agencies (id, name, slug, logo, is_verified, created_at)
            VALUES ('agency-1', 'Xact Kirchberg', 'xact-kirchberg', '/logos/kirchberg.svg', 1, '2023-01-01'),
                   ('agency-2', 'Unverified Homes', 'unverified-homes', NULL, 0, '2023-01-01')
        """)
        conn.execute("""
            INSERT INTO agents (id, name, email, phone, image, agency_id)
            VALUES ('agent-1', 'Marie Weber', 'marie@xact.lu', NULL, NULL, 'agency-1')
        """)
        conn.commit()

        _insert_property(
            conn,
            id="prop-1",
            title="Modern Apartment in Kirchberg",
            slug="modern-apartment-in-kirchberg",
            type="APARTMENT",
            price=750000,
            bedrooms=2,
            bathrooms=1,
            living_area=85,
            energy_class="B",
            floor=3,
            total_floors=6,
            features=["Balcony", "Elevator"],
            is_featured=1,
            agency_id="agency-1",
            created_at="2024-01-03T09:00:00.000000Z",
            images=["/img/kirchberg-1.jpg", "/img/kirchberg-2.jpg"],
        )
        _insert_property(
            conn,
            id="prop-2",
            title="Family House in Bertrange",
            slug="family-house-in-bertrange",
            type="HOUSE",
            price=1250000,
            bedrooms=4,
            bathrooms=2,
            living_area=180,
            land_area=600,
            year_built=1998,
            city="Bertrange",
            agent_id="agent-1",
            created_at="2024-01-02T09:00:00.000000Z",
            images=["/img/bertrange.jpg"],
        )
        _insert_property(
            conn,
            id="prop-3",
            title="Studio near Gare",
            slug="studio-near-gare",
            type="STUDIO",
            listing_type="RENT",
            price=1400,
            bathrooms=1,
            living_area=35,
            owner_id=OTHER_OWNER_ID,
            created_at="2024-01-01T09:00:00.000000Z",
        )
        _insert_property(
            conn,
            id="prop-4",
            title="Villa in Strassen",
            slug="villa-in-strassen",
            type="VILLA",
            price=2500000,
            bedrooms=5,
            living_area=320,
            city="Strassen",
            status="PENDING_REVIEW",
            created_at="2024-01-04T09:00:00.000000Z",
        )
        _insert_property(
            conn,
            id="prop-5",
            title="Office Space Cloche d'Or",
            slug="office-space-cloche-d-or",
            type="OFFICE",
            category="COMMERCIAL",
            listing_type="RENT",
            price=5000,
            living_area=200,
            owner_id=OTHER_OWNER_ID,
            created_at="2023-12-31T09:00:00.000000Z",
        )

    return temp_db


@pytest.fixture(scope="function")
def conn(populated_db: str) -> Generator[sqlite3.Connection, None, None]:
    """Open connection to the populated database."""
    with get_connection(populated_db) as connection:
        yield connection


@pytest.fixture(scope="function")
def client(test_config, populated_db):
    """Flask test client backed by the populated database."""
    from xactestate.api.server import create_app
    from xactestate.utils.rate_limit import get_rate_limiter

    get_rate_limiter().reset()
    app = create_app({"TESTING": True})
    with app.test_client() as test_client:
        yield test_client
    get_rate_limiter().reset()


@pytest.fixture(scope="function")
def contact_payload() -> Dict[str, Any]:
    """Valid contact form submission."""
    return {
        "name": "Jean Muller",
        "email": "Jean.Muller@Example.lu",
        "phone": "+352 621 123 456",
        "inquiryType": "buying",
        "message": "I would like to visit the apartment next week.",
    }


@pytest.fixture(scope="function")
def estimate_payload() -> Dict[str, Any]:
    """Valid valuation request as posted by the estimate page."""
    return {
        "name": "Anne Schmit",
        "email": "anne@example.lu",
        "phone": "621 987 654",
        "propertyType": "Apartment",
        "address": "12 Rue des Prés",
        "location": "Bertrange",
        "size": "95",
        "bedrooms": "2",
        "bathrooms": 1,
        "yearBuilt": "2005",
        "condition": "Good condition",
        "parking": "1 indoor",
        "outdoor": "balcony",
        "timeline": "3-6 months",
        "features": ["Elevator"],
        "extras": "Renovated kitchen in 2021",
    }


@pytest.fixture(scope="function")
def listing_payload() -> Dict[str, Any]:
    """Valid seller listing payload."""
    return {
        "title": "Bright Penthouse in Belair",
        "description": "Top floor penthouse with a large terrace.",
        "type": "PENTHOUSE",
        "listingType": "SALE",
        "price": "1.450.000",
        "bedrooms": "3",
        "bathrooms": "2",
        "livingArea": "140",
        "address": "5 Avenue du X Septembre",
        "city": "Luxembourg",
        "postalCode": "L-2550",
        "energyClass": "A",
        "features": ["Terrace", "Elevator"],
        "images": ["/img/belair-1.jpg", "/img/belair-2.jpg", "/img/belair-3.jpg"],
    }


@pytest.fixture(autouse=True)
def _reset_singletons() -> Generator[None, None, None]:
    """Drop cached config and rate limit windows after each test."""
    yield
    from xactestate.config import reset_config
    from xactestate.utils.rate_limit import get_rate_limiter

    reset_config()
    get_rate_limiter().reset()
