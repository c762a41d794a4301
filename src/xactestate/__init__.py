"""
Xact Estate Marketplace Backend

Listing search, lead capture and pricing tools behind the Xact real estate
website (Luxembourg).

Main components:
- core: database helpers, models, constants and locations
- finance: mortgage and commission calculators
- forms: contact, estimate, inquiry and listing wizard validation
- listings: search, detail, stats, seller dashboard and moderation
- utils: formatting, sanitising and rate limiting
- api: Flask REST API server
- cli: Command-line interfaces

Usage:
    from xactestate import config
    from xactestate.core import database
    from xactestate.finance import calculate_mortgage
"""

__version__ = "1.0.0"

from xactestate.config import get_config
from xactestate.logging_config import setup_logging

__all__ = [
    "__version__",
    "get_config",
    "setup_logging",
]
