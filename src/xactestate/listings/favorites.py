"""
Saved (favourite) listings per user.
"""

import sqlite3
from typing import Any, Dict, List

from xactestate.config import get_config
from xactestate.core.database import execute, fetch_all, fetch_one, now_iso
from xactestate.exceptions import NotFoundError, ValidationError
from xactestate.listings.search import FIRST_IMAGE_SQL


def is_favorite(conn: sqlite3.Connection, user_id: str, property_id: str) -> bool:
    row = fetch_one(
        conn,
        "SELECT 1 AS hit FROM favorites WHERE user_id = ? AND property_id = ?",
        (user_id, property_id),
    )
    return row is not None


def add_favorite(conn: sqlite3.Connection, user_id: str, property_id: str) -> None:
    """Save a listing for ``user_id``.

    Raises:
        NotFoundError: If the listing does not exist.
        ValidationError: If it is already saved.
    """
    if not fetch_one(conn, "SELECT id FROM properties WHERE id = ?", (property_id,)):
        raise NotFoundError("Property not found", resource="property", identifier=property_id)
    if is_favorite(conn, user_id, property_id):
        raise ValidationError("Already in favorites", field="propertyId", value=property_id)
    execute(
        conn,
        "INSERT INTO favorites (user_id, property_id, created_at) VALUES (?, ?, ?)",
        (user_id, property_id, now_iso()),
    )


def remove_favorite(conn: sqlite3.Connection, user_id: str, property_id: str) -> bool:
    """Forget a saved listing. Returns False if it was not saved."""
    removed = execute(
        conn,
        "DELETE FROM favorites WHERE user_id = ? AND property_id = ?",
        (user_id, property_id),
    )
    return removed > 0


def list_favorites(conn: sqlite3.Connection, user_id: str) -> List[Dict[str, Any]]:
    """The user's saved listings, most recently saved first."""
    placeholder = get_config().listings.placeholder_image
    rows = fetch_all(conn, f"""
        SELECT
            f.created_at AS saved_at,
            p.id, p.title, p.slug, p.address, p.city, p.price, p.listing_type,
            p.bedrooms, p.bathrooms, p.living_area,
            {FIRST_IMAGE_SQL}
        FROM favorites f
        JOIN properties p ON p.id = f.property_id
        WHERE f.user_id = ?
        ORDER BY f.created_at DESC
    """, (user_id,))
    return [
        {
            "propertyId": row["id"],
            "title": row["title"],
            "slug": row["slug"],
            "address": f"{row['address']}, {row['city']}",
            "price": row["price"],
            "listingType": row["listing_type"],
            "bedrooms": row["bedrooms"],
            "bathrooms": row["bathrooms"],
            "livingArea": row["living_area"],
            "image": row["image"] or placeholder,
            "savedAt": row["saved_at"],
        }
        for row in rows
    ]
