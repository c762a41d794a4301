"""
Public Listing Queries

Filtered, paginated search over published listings and the property detail
page with its "similar properties" strip.

Usage:
    from xactestate.listings.search import parse_filters, search_properties

    with get_connection() as conn:
        page = search_properties(conn, parse_filters(request.args))
"""

import json
import math
import sqlite3
from typing import Any, Dict, List, Mapping, Optional, Tuple

from xactestate.config import get_config
from xactestate.core.constants import (
    DEFAULT_AGENT_CONTACT,
    LISTING_RENT,
    STATUS_PUBLISHED,
)
from xactestate.core.database import fetch_all, fetch_one, fetch_value
from xactestate.core.locations import ALL_LOCATIONS
from xactestate.core.models import (
    AgencyRef,
    AgentContact,
    PropertyDetail,
    PropertySummary,
    SearchFilters,
    SearchPage,
    SimilarProperty,
)
from xactestate.exceptions import NotFoundError, ValidationError
from xactestate.logging_config import get_logger

logger = get_logger(__name__)

SORT_ORDERS: Dict[str, str] = {
    "newest": "p.created_at DESC",
    "price-low": "p.price ASC",
    "price-high": "p.price DESC",
    "area-high": "p.living_area DESC",
    "beds-high": "p.bedrooms DESC",
}
DEFAULT_SORT = "newest"

FIRST_IMAGE_SQL = """
    (SELECT url FROM property_images i
     WHERE i.property_id = p.id
     ORDER BY i.sort_order, i.id
     LIMIT 1) AS image
"""


def _int_arg(args: Mapping[str, Any], name: str) -> Optional[int]:
    value = args.get(name)
    if value is None or str(value).strip() == "":
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        raise ValidationError(f"Invalid {name}", field=name, value=value) from None


def _choice_arg(args: Mapping[str, Any], name: str, ignore: str) -> Optional[str]:
    value = args.get(name)
    if value is None:
        return None
    value = str(value).strip()
    if not value or value == ignore:
        return None
    return value


def parse_filters(args: Mapping[str, Any]) -> SearchFilters:
    """Build search filters from query string arguments.

    ``listingType=ALL``, ``propertyType=All`` and ``location=All`` mean no
    filter. Unknown sort keys fall back to newest first. The page is at least
    1 and the page size is clamped to the configured maximum.

    Raises:
        ValidationError: If a numeric argument is not a whole number.
    """
    listings = get_config().listings

    property_type = _choice_arg(args, "propertyType", "All")
    sort_by = str(args.get("sortBy") or DEFAULT_SORT)
    page = _int_arg(args, "page")
    limit = _int_arg(args, "limit")

    return SearchFilters(
        listing_type=_choice_arg(args, "listingType", "ALL"),
        property_type=property_type.upper() if property_type else None,
        location=_choice_arg(args, "location", ALL_LOCATIONS),
        min_beds=_int_arg(args, "minBeds"),
        max_price=_int_arg(args, "maxPrice"),
        min_area=_int_arg(args, "minArea"),
        featured=str(args.get("featured", "")).lower() == "true",
        sort_by=sort_by if sort_by in SORT_ORDERS else DEFAULT_SORT,
        page=max(1, page if page is not None else 1),
        limit=max(1, min(limit if limit is not None else listings.page_size, listings.max_page_size)),
    )


def _where_clause(filters: SearchFilters) -> Tuple[str, List[Any]]:
    conditions = ["p.status = ?"]
    params: List[Any] = [STATUS_PUBLISHED]

    if filters.listing_type:
        conditions.append("p.listing_type = ?")
        params.append(filters.listing_type)
    if filters.property_type:
        conditions.append("p.type = ?")
        params.append(filters.property_type)
    if filters.location:
        conditions.append("p.city = ?")
        params.append(filters.location)
    if filters.min_beds is not None:
        conditions.append("p.bedrooms >= ?")
        params.append(filters.min_beds)
    if filters.max_price is not None:
        conditions.append("p.price <= ?")
        params.append(filters.max_price)
    if filters.min_area is not None:
        conditions.append("p.living_area >= ?")
        params.append(filters.min_area)
    if filters.featured:
        conditions.append("p.is_featured = 1")

    return " AND ".join(conditions), params


def _tag(row: Mapping[str, Any]) -> str:
    if row.get("is_featured"):
        return "Featured"
    if row.get("listing_type") == LISTING_RENT:
        return "Rental"
    return "For Sale"


def load_features(raw: Optional[str]) -> List[str]:
    """Decode the JSON ``features`` column; bad or empty values give []."""
    if not raw:
        return []
    try:
        features = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("Ignoring malformed features value: %r", raw[:50])
        return []
    return [str(f) for f in features] if isinstance(features, list) else []


def _summary(row: Mapping[str, Any], placeholder: str) -> PropertySummary:
    agency = None
    if row.get("agency_name") is not None:
        agency = AgencyRef(
            id=row["agency_id"],
            name=row["agency_name"],
            slug=row["agency_slug"],
            logo=row.get("agency_logo"),
        )
    return PropertySummary(
        id=row["id"],
        title=row["title"],
        slug=row["slug"],
        location=row["city"],
        address=f"{row['address']}, {row['city']}",
        price=row["price"],
        type=row["type"],
        listing_type=row["listing_type"],
        beds=row.get("bedrooms") or 0,
        baths=row.get("bathrooms") or 0,
        area=row.get("living_area") or 0,
        image=row.get("image") or placeholder,
        tag=_tag(row),
        agency=agency,
    )


def search_properties(conn: sqlite3.Connection, filters: SearchFilters) -> SearchPage:
    """One page of published listings matching ``filters``.

    Returns:
        SearchPage with summary cards, the total match count and page count.
    """
    placeholder = get_config().listings.placeholder_image
    where, params = _where_clause(filters)
    order = SORT_ORDERS.get(filters.sort_by, SORT_ORDERS[DEFAULT_SORT])
    offset = (filters.page - 1) * filters.limit

    total = fetch_value(conn, f"SELECT COUNT(*) AS total FROM properties p WHERE {where}", tuple(params), 0)

    rows = fetch_all(conn, f"""
        SELECT
            p.id, p.title, p.slug, p.city, p.address, p.price, p.type,
            p.listing_type, p.bedrooms, p.bathrooms, p.living_area,
            p.is_featured, p.agency_id,
            a.name AS agency_name,
            a.slug AS agency_slug,
            a.logo AS agency_logo,
            {FIRST_IMAGE_SQL}
        FROM properties p
        LEFT JOIN agencies a ON a.id = p.agency_id
        WHERE {where}
        ORDER BY {order}, p.created_at DESC, p.id
        LIMIT ? OFFSET ?
    """, tuple(params) + (filters.limit, offset))

    logger.debug("Search matched %d listings (page %d)", total, filters.page)
    return SearchPage(
        properties=[_summary(row, placeholder) for row in rows],
        total=total,
        page=filters.page,
        limit=filters.limit,
        total_pages=math.ceil(total / filters.limit),
    )


def _agent_contact(row: Mapping[str, Any]) -> AgentContact:
    default = DEFAULT_AGENT_CONTACT
    if row.get("agent_name") is None:
        return AgentContact(**default)
    return AgentContact(
        name=row["agent_name"],
        phone=row.get("agent_phone") or default["phone"],
        email=row.get("agent_email") or default["email"],
        image=row.get("agent_image") or default["image"],
        agency=default["agency"],
    )


def get_similar_properties(
    conn: sqlite3.Connection,
    property_id: str,
    city: str,
    property_type: str,
    limit: Optional[int] = None,
) -> List[SimilarProperty]:
    """Newest published listings in the same city or of the same type."""
    listings = get_config().listings
    limit = listings.similar_count if limit is None else limit

    rows = fetch_all(conn, f"""
        SELECT
            p.id, p.title, p.slug, p.city, p.price, p.type, p.listing_type,
            p.bedrooms, p.bathrooms, p.living_area,
            {FIRST_IMAGE_SQL}
        FROM properties p
        WHERE p.status = ?
        AND p.id != ?
        AND (p.city = ? OR p.type = ?)
        ORDER BY p.created_at DESC, p.id
        LIMIT ?
    """, (STATUS_PUBLISHED, property_id, city, property_type, limit))

    return [
        SimilarProperty(
            id=row["id"],
            title=row["title"],
            slug=row["slug"],
            location=row["city"],
            price=row["price"],
            type=row["type"],
            listing_type=row["listing_type"],
            beds=row["bedrooms"] or 0,
            baths=row["bathrooms"] or 0,
            area=row["living_area"] or 0,
            image=row["image"] or listings.placeholder_image,
        )
        for row in rows
    ]


def get_property_detail(conn: sqlite3.Connection, slug: str) -> PropertyDetail:
    """Full public view of a published listing.

    Raises:
        NotFoundError: If no published listing has this slug.
    """
    row = fetch_one(conn, """
        SELECT
            p.*,
            ag.name AS agent_name,
            ag.phone AS agent_phone,
            ag.email AS agent_email,
            ag.image AS agent_image
        FROM properties p
        LEFT JOIN agents ag ON ag.id = p.agent_id
        WHERE p.slug = ? AND p.status = ?
    """, (slug, STATUS_PUBLISHED))

    if not row:
        raise NotFoundError("Property not found", resource="property", identifier=slug)

    images = [img["url"] for img in fetch_all(conn, """
        SELECT url FROM property_images
        WHERE property_id = ?
        ORDER BY sort_order, id
    """, (row["id"],))]

    return PropertyDetail(
        id=row["id"],
        title=row["title"],
        slug=row["slug"],
        description=row["description"],
        location=row["city"],
        address=f"{row['address']}, {row['city']}",
        price=row["price"],
        type=row["type"],
        listing_type=row["listing_type"],
        beds=row["bedrooms"] or 0,
        baths=row["bathrooms"] or 0,
        area=row["living_area"] or 0,
        images=images or [get_config().listings.placeholder_image],
        features=load_features(row["features"]),
        agent=_agent_contact(row),
        land_area=row["land_area"],
        year_built=row["year_built"],
        energy_class=row["energy_class"],
        floor=row["floor"],
        total_floors=row["total_floors"],
        similar=get_similar_properties(conn, row["id"], row["city"], row["type"]),
    )
