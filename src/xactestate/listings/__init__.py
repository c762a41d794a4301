"""
Listing queries and management.

Provides:
- search: public search and property detail pages
- stats: homepage market counters
- slugs: URL slug generation
- dashboard: seller listing management
- inbox: contact, valuation and inquiry storage
- moderation: back-office status changes, agencies and agents
- favorites: saved listings
"""

from xactestate.listings.search import parse_filters, search_properties, get_property_detail
from xactestate.listings.stats import get_market_stats
from xactestate.listings.slugs import slugify, unique_slug
from xactestate.listings.dashboard import (
    list_owner_listings,
    get_owner_listing,
    create_listing,
    update_listing,
    delete_listing,
)
from xactestate.listings.inbox import (
    save_contact_submission,
    save_estimate_request,
    create_inquiry,
    list_owner_messages,
    mark_message_read,
    delete_message,
)
from xactestate.listings.moderation import (
    available_actions,
    apply_action,
    set_status,
    set_featured,
    set_agency_verified,
    delete_agency,
    create_agent,
    assign_agent,
)
from xactestate.listings.favorites import add_favorite, remove_favorite, list_favorites, is_favorite

__all__ = [
    "parse_filters",
    "search_properties",
    "get_property_detail",
    "get_market_stats",
    "slugify",
    "unique_slug",
    "list_owner_listings",
    "get_owner_listing",
    "create_listing",
    "update_listing",
    "delete_listing",
    "save_contact_submission",
    "save_estimate_request",
    "create_inquiry",
    "list_owner_messages",
    "mark_message_read",
    "delete_message",
    "available_actions",
    "apply_action",
    "set_status",
    "set_featured",
    "set_agency_verified",
    "delete_agency",
    "create_agent",
    "assign_agent",
    "add_favorite",
    "remove_favorite",
    "list_favorites",
    "is_favorite",
]
