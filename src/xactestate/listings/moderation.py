"""
Listing Moderation

Back-office status changes for listings: approving or rejecting submissions,
archiving published listings and toggling the "Featured" flag. Also covers
agency verification and the agents shown as a listing's contact.
"""

import sqlite3
from typing import Any, Dict, List, Mapping, Optional

from xactestate.core.constants import (
    PROPERTY_STATUSES,
    STATUS_ARCHIVED,
    STATUS_DRAFT,
    STATUS_PENDING_REVIEW,
    STATUS_PUBLISHED,
    STATUS_REJECTED,
)
from xactestate.core.database import execute, fetch_one, new_id, now_iso
from xactestate.exceptions import NotFoundError, ValidationError
from xactestate.forms.validators import clean_text, require_fields, validate_email
from xactestate.logging_config import get_logger
from xactestate.utils.sanitize import sanitize_email

logger = get_logger(__name__)

# Current status -> {action: target status}
MODERATION_ACTIONS: Dict[str, Dict[str, str]] = {
    STATUS_PENDING_REVIEW: {"approve": STATUS_PUBLISHED, "reject": STATUS_REJECTED},
    STATUS_PUBLISHED: {"archive": STATUS_ARCHIVED},
    STATUS_DRAFT: {"submit": STATUS_PENDING_REVIEW},
}


def available_actions(status: str) -> List[Dict[str, str]]:
    """Moderation buttons offered for a listing in ``status``.

    Example:
        >>> available_actions("PUBLISHED")
        [{'action': 'archive', 'status': 'ARCHIVED'}]
    """
    return [
        {"action": action, "status": target}
        for action, target in MODERATION_ACTIONS.get(status, {}).items()
    ]


def _require_listing(conn: sqlite3.Connection, listing_id: str) -> None:
    if not fetch_one(conn, "SELECT id FROM properties WHERE id = ?", (listing_id,)):
        raise NotFoundError("Listing not found", resource="listing", identifier=listing_id)


def set_status(conn: sqlite3.Connection, listing_id: str, status: str) -> str:
    """Move a listing to ``status``; publishing stamps ``published_at``.

    Raises:
        ValidationError: If the status is unknown.
        NotFoundError: If the listing does not exist.
    """
    if status not in PROPERTY_STATUSES:
        raise ValidationError(f"Invalid status: {status}", field="status", value=status)
    _require_listing(conn, listing_id)

    now = now_iso()
    if status == STATUS_PUBLISHED:
        execute(
            conn,
            "UPDATE properties SET status = ?, published_at = ?, updated_at = ? WHERE id = ?",
            (status, now, now, listing_id),
        )
    else:
        execute(
            conn,
            "UPDATE properties SET status = ?, updated_at = ? WHERE id = ?",
            (status, now, listing_id),
        )
    logger.info("Listing %s moved to %s", listing_id, status)
    return status


def apply_action(conn: sqlite3.Connection, listing_id: str, action: str) -> str:
    """Run a moderation action (``approve``, ``reject``, ...) on a listing.

    Raises:
        ValidationError: If the action is not available in the current status.
        NotFoundError: If the listing does not exist.
    """
    row = fetch_one(conn, "SELECT status FROM properties WHERE id = ?", (listing_id,))
    if not row:
        raise NotFoundError("Listing not found", resource="listing", identifier=listing_id)
    target = MODERATION_ACTIONS.get(row["status"], {}).get(action)
    if target is None:
        raise ValidationError(
            f"Cannot {action} a listing in status {row['status']}", field="action", value=action
        )
    return set_status(conn, listing_id, target)


def set_featured(conn: sqlite3.Connection, listing_id: str, featured: bool) -> bool:
    """Set or clear the Featured flag on a listing."""
    _require_listing(conn, listing_id)
    execute(
        conn,
        "UPDATE properties SET is_featured = ?, updated_at = ? WHERE id = ?",
        (1 if featured else 0, now_iso(), listing_id),
    )
    return bool(featured)


# Agencies
def _agency_dict(row: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "id": row["id"],
        "name": row["name"],
        "slug": row["slug"],
        "isVerified": bool(row["is_verified"]),
        "verifiedAt": row["verified_at"],
    }


def set_agency_verified(conn: sqlite3.Connection, agency_id: str, verified: bool) -> Dict[str, Any]:
    """Verify an agency (stamping ``verified_at``) or withdraw its verification.

    Raises:
        NotFoundError: If the agency does not exist.
    """
    if not fetch_one(conn, "SELECT id FROM agencies WHERE id = ?", (agency_id,)):
        raise NotFoundError("Agency not found", resource="agency", identifier=agency_id)

    execute(
        conn,
        "UPDATE agencies SET is_verified = ?, verified_at = ? WHERE id = ?",
        (1 if verified else 0, now_iso() if verified else None, agency_id),
    )
    logger.info("Agency %s %s", agency_id, "verified" if verified else "unverified")
    return _agency_dict(fetch_one(conn, "SELECT * FROM agencies WHERE id = ?", (agency_id,)))


def delete_agency(conn: sqlite3.Connection, agency_id: str) -> None:
    """Delete an agency. Its listings and agents stay, without an agency.

    Raises:
        NotFoundError: If the agency does not exist.
    """
    if not fetch_one(conn, "SELECT id FROM agencies WHERE id = ?", (agency_id,)):
        raise NotFoundError("Agency not found", resource="agency", identifier=agency_id)
    execute(conn, "DELETE FROM agencies WHERE id = ?", (agency_id,))
    logger.info("Deleted agency %s", agency_id)


# Agents
def _agent_dict(row: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "id": row["id"],
        "name": row["name"],
        "email": row["email"],
        "phone": row["phone"],
        "image": row["image"],
    }


def create_agent(conn: sqlite3.Connection, data: Any) -> Dict[str, Any]:
    """Add an agent who can be assigned to listings.

    Raises:
        ValidationError: If name or email is missing, or the email is invalid.
    """
    if not isinstance(data, Mapping):
        raise ValidationError("Request body must be a JSON object")
    name = clean_text(data.get("name"))
    require_fields({**data, "name": name}, ("name", "email"), "Name and email are required")
    validate_email(data["email"])

    agent_id = data.get("id") or new_id()
    execute(conn, """
        INSERT INTO agents (id, name, email, phone, image, agency_id)
        VALUES (?, ?, ?, ?, ?, ?)
    """, (
        agent_id,
        name,
        sanitize_email(data["email"]),
        clean_text(data.get("phone")),
        data.get("image") or None,
        data.get("agencyId") or None,
    ))
    return _agent_dict(fetch_one(conn, "SELECT * FROM agents WHERE id = ?", (agent_id,)))


def assign_agent(
    conn: sqlite3.Connection,
    listing_id: str,
    agent_id: Optional[str],
) -> Optional[Dict[str, Any]]:
    """Make ``agent_id`` the contact for a listing; a falsy id unassigns.

    Returns:
        The assigned agent, or None after unassigning.

    Raises:
        NotFoundError: If the listing or the agent does not exist.
    """
    _require_listing(conn, listing_id)

    agent = None
    if agent_id:
        agent = fetch_one(conn, "SELECT * FROM agents WHERE id = ?", (agent_id,))
        if not agent:
            raise NotFoundError("Agent not found", resource="agent", identifier=agent_id)

    execute(
        conn,
        "UPDATE properties SET agent_id = ?, updated_at = ? WHERE id = ?",
        (agent_id or None, now_iso(), listing_id),
    )
    logger.info("Listing %s agent set to %s", listing_id, agent_id or "agency contact")
    return _agent_dict(agent) if agent else None
