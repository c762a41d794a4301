"""
Homepage market statistics.
"""

import sqlite3
from typing import Dict, Tuple

from xactestate.core.constants import SATISFIED_CLIENTS, STATUS_PUBLISHED
from xactestate.core.database import fetch_all, fetch_value
from xactestate.core.models import MarketStats
from xactestate.utils.formatting import format_compact_value

# Homepage category tile -> property types counted in it
CATEGORY_TYPES: Dict[str, Tuple[str, ...]] = {
    "Apartments": ("APARTMENT",),
    "Houses": ("HOUSE",),
    "Villas": ("VILLA",),
    "Land": ("LAND",),
    "Commercial": ("OFFICE", "COMMERCIAL"),
    "Studios": ("STUDIO",),
}


def get_market_stats(conn: sqlite3.Connection) -> MarketStats:
    """Counters for the homepage: listings, total value, agencies, categories."""
    total_listings = fetch_value(
        conn, "SELECT COUNT(*) AS n FROM properties WHERE status = ?", (STATUS_PUBLISHED,), 0
    )
    total_value = fetch_value(
        conn, "SELECT SUM(price) AS total FROM properties WHERE status = ?", (STATUS_PUBLISHED,), 0
    )
    total_agencies = fetch_value(
        conn, "SELECT COUNT(*) AS n FROM agencies WHERE is_verified = 1", None, 0
    )

    type_counts = {
        row["type"]: row["n"]
        for row in fetch_all(conn, """
            SELECT type, COUNT(*) AS n
            FROM properties
            WHERE status = ?
            GROUP BY type
        """, (STATUS_PUBLISHED,))
    }

    return MarketStats(
        active_listings=f"{total_listings:,}+",
        property_value=format_compact_value(total_value),
        satisfied_clients=SATISFIED_CLIENTS,
        categories={
            name: sum(type_counts.get(t, 0) for t in types)
            for name, types in CATEGORY_TYPES.items()
        },
        total_agencies=total_agencies,
    )
