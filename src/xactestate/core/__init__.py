"""
Core modules for the Xact Estate backend.

Contains database helpers, data models, locations and shared constants.
"""

from xactestate.core.constants import (
    LISTING_TYPES,
    PROPERTY_TYPES,
    PROPERTY_STATUSES,
    BANKS,
)
from xactestate.core.database import (
    get_connection,
    fetch_all,
    fetch_one,
    execute,
    init_schema,
)
from xactestate.core.locations import LOCATIONS, is_known_location
from xactestate.core.models import (
    PropertySummary,
    PropertyDetail,
    SearchFilters,
    SearchPage,
)

__all__ = [
    "LISTING_TYPES",
    "PROPERTY_TYPES",
    "PROPERTY_STATUSES",
    "BANKS",
    "get_connection",
    "fetch_all",
    "fetch_one",
    "execute",
    "init_schema",
    "LOCATIONS",
    "is_known_location",
    "PropertySummary",
    "PropertyDetail",
    "SearchFilters",
    "SearchPage",
]
