"""
Input Sanitising Utilities

Basic XSS protection for text that visitors submit through public forms.
"""

import re
from typing import Any, Dict, Optional

HTML_ENTITIES: Dict[str, str] = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#x27;",
    "/": "&#x2F;",
}

_TAG_RE = re.compile(r"<[^>]*>")
_ENTITY_RE = re.compile(r"[&<>\"'/]")
_PHONE_STRIP_RE = re.compile(r"[^\d+\s\-()]")


def escape_html(text: str) -> str:
    """Escape HTML special characters."""
    return _ENTITY_RE.sub(lambda m: HTML_ENTITIES[m.group(0)], text)


def strip_html(text: str) -> str:
    """Strip all HTML tags from a string."""
    return _TAG_RE.sub("", text)


def sanitize_input(text: str) -> str:
    """Sanitize a string for safe storage and display."""
    return strip_html(text).strip()


def sanitize_object(data: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``data`` with every string value sanitized."""
    return {
        key: sanitize_input(value) if isinstance(value, str) else value
        for key, value in data.items()
    }


def sanitize_email(email: Optional[str]) -> str:
    """Lower-case and trim an email address; non-strings become ``""``."""
    if not email or not isinstance(email, str):
        return ""
    return email.lower().strip()


def sanitize_phone(phone: str) -> str:
    """Keep only digits, ``+``, spaces, hyphens and parentheses."""
    return _PHONE_STRIP_RE.sub("", phone).strip()
