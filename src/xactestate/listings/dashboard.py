"""
Seller Dashboard Operations

Create, edit and delete a seller's own listings. There is no session layer:
callers pass the acting ``owner_id`` (and ``is_admin`` for back-office edits).

New listings always start in PENDING_REVIEW; editing a published listing
sends it back for review.
"""

import json
import sqlite3
from typing import Any, Dict, List, Mapping, Optional

from xactestate.config import get_config
from xactestate.core.constants import (
    DASHBOARD_STATUS_FILTERS,
    STATUS_PENDING_REVIEW,
    STATUS_PUBLISHED,
)
from xactestate.core.database import (
    execute,
    execute_many,
    fetch_all,
    fetch_one,
    new_id,
    now_iso,
)
from xactestate.exceptions import DatabaseError, ForbiddenError, NotFoundError, ValidationError
from xactestate.forms.listing import validate_listing
from xactestate.listings.search import FIRST_IMAGE_SQL, load_features
from xactestate.listings.slugs import unique_slug
from xactestate.logging_config import get_logger

logger = get_logger(__name__)


def _listing_to_dict(row: Mapping[str, Any], images: List[str]) -> Dict[str, Any]:
    return {
        "id": row["id"],
        "title": row["title"],
        "slug": row["slug"],
        "description": row["description"],
        "type": row["type"],
        "category": row["category"],
        "listingType": row["listing_type"],
        "status": row["status"],
        "price": row["price"],
        "bedrooms": row["bedrooms"],
        "bathrooms": row["bathrooms"],
        "livingArea": row["living_area"],
        "landArea": row["land_area"],
        "floor": row["floor"],
        "totalFloors": row["total_floors"],
        "yearBuilt": row["year_built"],
        "energyClass": row["energy_class"],
        "address": row["address"],
        "city": row["city"],
        "postalCode": row["postal_code"],
        "features": load_features(row["features"]),
        "images": images,
        "isFeatured": bool(row["is_featured"]),
        "ownerId": row["owner_id"],
        "createdAt": row["created_at"],
        "updatedAt": row["updated_at"],
        "publishedAt": row["published_at"],
    }


def _images(conn: sqlite3.Connection, listing_id: str) -> List[str]:
    rows = fetch_all(conn, """
        SELECT url FROM property_images
        WHERE property_id = ?
        ORDER BY sort_order, id
    """, (listing_id,))
    return [row["url"] for row in rows]


def _replace_images(conn: sqlite3.Connection, listing_id: str, urls: List[str]) -> None:
    execute(conn, "DELETE FROM property_images WHERE property_id = ?", (listing_id,), commit=False)
    if urls:
        execute_many(
            conn,
            "INSERT INTO property_images (property_id, url, sort_order) VALUES (?, ?, ?)",
            [(listing_id, url, index) for index, url in enumerate(urls)],
            commit=False,
        )


def load_listing(
    conn: sqlite3.Connection,
    listing_id: str,
    owner_id: Optional[str],
    is_admin: bool = False,
) -> Dict[str, Any]:
    """Fetch a raw listing row the caller is allowed to manage.

    Raises:
        NotFoundError: If the listing does not exist.
        ForbiddenError: If the caller neither owns it nor is an admin.
    """
    row = fetch_one(conn, "SELECT * FROM properties WHERE id = ?", (listing_id,))
    if not row:
        raise NotFoundError("Listing not found", resource="listing", identifier=listing_id)
    if not is_admin and row["owner_id"] != owner_id:
        raise ForbiddenError("Forbidden")
    return row


def get_owner_listing(
    conn: sqlite3.Connection,
    listing_id: str,
    owner_id: Optional[str],
    is_admin: bool = False,
) -> Dict[str, Any]:
    """A single listing with all its images, for the edit form."""
    row = load_listing(conn, listing_id, owner_id, is_admin)
    return _listing_to_dict(row, _images(conn, listing_id))


def list_owner_listings(
    conn: sqlite3.Connection,
    owner_id: str,
    status: str = "all",
) -> List[Dict[str, Any]]:
    """The owner's listings, newest first, with engagement counters.

    Args:
        conn: Database connection.
        owner_id: Listing owner.
        status: ``all``, ``active``, ``pending`` or ``sold``; anything else
            is treated as ``all``.
    """
    query = f"""
        SELECT
            p.id, p.title, p.slug, p.address, p.city, p.price, p.listing_type,
            p.status, p.bedrooms, p.bathrooms, p.living_area, p.view_count,
            p.created_at, p.published_at,
            {FIRST_IMAGE_SQL},
            (SELECT COUNT(*) FROM messages m WHERE m.property_id = p.id) AS inquiry_count,
            (SELECT COUNT(*) FROM favorites f WHERE f.property_id = p.id) AS favorite_count
        FROM properties p
        WHERE p.owner_id = ?
    """
    params: List[Any] = [owner_id]

    statuses = DASHBOARD_STATUS_FILTERS.get(status)
    if statuses:
        query += f" AND p.status IN ({', '.join('?' for _ in statuses)})"
        params.extend(statuses)
    query += " ORDER BY p.created_at DESC, p.id"

    placeholder = get_config().listings.placeholder_image
    return [
        {
            "id": row["id"],
            "title": row["title"],
            "slug": row["slug"],
            "address": f"{row['address']}, {row['city']}",
            "price": row["price"],
            "listingType": row["listing_type"],
            "status": row["status"],
            "bedrooms": row["bedrooms"],
            "bathrooms": row["bathrooms"],
            "livingArea": row["living_area"],
            "image": row["image"] or placeholder,
            "viewCount": row["view_count"] or 0,
            "inquiryCount": row["inquiry_count"],
            "favoriteCount": row["favorite_count"],
            "createdAt": row["created_at"],
            "publishedAt": row["published_at"],
        }
        for row in fetch_all(conn, query, tuple(params))
    ]


def create_listing(
    conn: sqlite3.Connection,
    owner_id: str,
    payload: Any,
) -> Dict[str, Any]:
    """Create a listing for ``owner_id``, queued for review.

    Returns:
        The stored listing (see ``get_owner_listing``).

    Raises:
        ValidationError: If the payload is invalid.
    """
    if not owner_id:
        raise ValidationError("Owner is required", field="ownerId")
    listing = validate_listing(payload)
    images = listing.pop("images")
    listing["features"] = json.dumps(listing["features"])

    listing_id = new_id()
    listing.update({
        "id": listing_id,
        "slug": unique_slug(conn, listing["title"]),
        "status": STATUS_PENDING_REVIEW,
        "owner_id": owner_id,
        "created_at": now_iso(),
    })

    columns = ", ".join(listing)
    placeholders = ", ".join(f":{name}" for name in listing)
    try:
        execute(conn, f"INSERT INTO properties ({columns}) VALUES ({placeholders})", listing, commit=False)
        _replace_images(conn, listing_id, images)
        conn.commit()
    except DatabaseError:
        conn.rollback()
        raise

    logger.info("Created listing %s (%s) for owner %s", listing_id, listing["slug"], owner_id)
    return get_owner_listing(conn, listing_id, owner_id)


def update_listing(
    conn: sqlite3.Connection,
    listing_id: str,
    owner_id: Optional[str],
    payload: Any,
    is_admin: bool = False,
) -> Dict[str, Any]:
    """Apply a partial update to a listing.

    A new title regenerates the slug, supplied images replace the existing
    ones, and a published listing goes back to PENDING_REVIEW.

    Raises:
        NotFoundError: If the listing does not exist.
        ForbiddenError: If the caller may not edit it.
        ValidationError: If a supplied field is invalid.
    """
    existing = load_listing(conn, listing_id, owner_id, is_admin)
    changes = validate_listing(payload, partial=True)
    images = changes.pop("images", None)

    if "features" in changes:
        changes["features"] = json.dumps(changes["features"])
    if changes.get("title") and changes["title"] != existing["title"]:
        changes["slug"] = unique_slug(conn, changes["title"], exclude_id=listing_id)
    if existing["status"] == STATUS_PUBLISHED:
        changes["status"] = STATUS_PENDING_REVIEW
    changes["updated_at"] = now_iso()

    assignments = ", ".join(f"{name} = :{name}" for name in changes)
    try:
        execute(
            conn,
            f"UPDATE properties SET {assignments} WHERE id = :listing_id",
            {**changes, "listing_id": listing_id},
            commit=False,
        )
        if images is not None:
            _replace_images(conn, listing_id, images)
        conn.commit()
    except DatabaseError:
        conn.rollback()
        raise

    logger.info("Updated listing %s", listing_id)
    return get_owner_listing(conn, listing_id, owner_id, is_admin=True)


def delete_listing(
    conn: sqlite3.Connection,
    listing_id: str,
    owner_id: Optional[str],
    is_admin: bool = False,
) -> None:
    """Delete a listing with its images, messages and favourites."""
    load_listing(conn, listing_id, owner_id, is_admin)
    execute(conn, "DELETE FROM properties WHERE id = ?", (listing_id,))
    logger.info("Deleted listing %s", listing_id)
