"""
Flask REST API for the Xact Estate public site.

Provides endpoints for:
- Property search, detail and homepage statistics
- Mortgage and commission calculators
- Contact, valuation and inquiry forms
"""

from xactestate.api.server import create_app
from xactestate.api.routes import register_routes

__all__ = [
    "create_app",
    "register_routes",
]
