"""
Utility modules for the Xact Estate backend.

Provides formatting, input sanitising and rate limiting helpers.
"""

from xactestate.utils.formatting import (
    format_price,
    format_area,
    format_number_de,
    format_compact_value,
    parse_amount,
)
from xactestate.utils.sanitize import (
    escape_html,
    strip_html,
    sanitize_input,
    sanitize_object,
    sanitize_email,
    sanitize_phone,
)
from xactestate.utils.rate_limit import (
    RATE_LIMITS,
    RateLimiter,
    get_rate_limiter,
    get_client_ip,
)

__all__ = [
    "format_price",
    "format_area",
    "format_number_de",
    "format_compact_value",
    "parse_amount",
    "escape_html",
    "strip_html",
    "sanitize_input",
    "sanitize_object",
    "sanitize_email",
    "sanitize_phone",
    "RATE_LIMITS",
    "RateLimiter",
    "get_rate_limiter",
    "get_client_ip",
]
