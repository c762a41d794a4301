"""
Listing URL slugs.

Public property pages are addressed by slug (``/properties/<slug>``), derived
from the listing title and unique across all listings.
"""

import re
import sqlite3
import unicodedata
from typing import Optional

from xactestate.core.database import fetch_all

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(title: str) -> str:
    """Turn a title into a URL slug.

    Accents are folded to ASCII, runs of anything other than ``[a-z0-9]``
    become a single hyphen and leading/trailing hyphens are dropped.

    Example:
        >>> slugify("Appartement à Bertrange, 3 chambres!")
        'appartement-a-bertrange-3-chambres'
    """
    folded = unicodedata.normalize("NFKD", title or "")
    folded = folded.encode("ascii", "ignore").decode("ascii").lower()
    return _NON_ALNUM.sub("-", folded).strip("-")


def unique_slug(
    conn: sqlite3.Connection,
    title: str,
    exclude_id: Optional[str] = None,
) -> str:
    """Slug for ``title`` that no other listing uses.

    Collisions get the smallest free numeric suffix (``-2``, ``-3``, ...).

    Args:
        conn: Database connection.
        title: Listing title.
        exclude_id: Listing being renamed; its own slug does not count as taken.
    """
    base = slugify(title) or "property"
    query = "SELECT slug FROM properties WHERE (slug = ? OR slug LIKE ?)"
    params = [base, f"{base}-%"]
    if exclude_id:
        query += " AND id != ?"
        params.append(exclude_id)

    taken = {row["slug"] for row in fetch_all(conn, query, tuple(params))}
    if base not in taken:
        return base

    suffix = 2
    while f"{base}-{suffix}" in taken:
        suffix += 1
    return f"{base}-{suffix}"
