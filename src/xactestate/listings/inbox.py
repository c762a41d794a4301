"""
Lead Storage

Stores contact form submissions, valuation requests and listing inquiries.
Each kind of submission has a per-email cooldown checked against the rows
already stored, so a single sender cannot flood the inbox.
"""

import json
import sqlite3
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from xactestate.core.constants import (
    CONTACT_COOLDOWN,
    ESTIMATE_COOLDOWN,
    INQUIRY_COOLDOWN,
    TABLE_CONTACT_SUBMISSIONS,
    TABLE_ESTIMATE_REQUESTS,
    TABLE_MESSAGES,
)
from xactestate.core.database import execute, fetch_all, fetch_one, iso_before, new_id, now_iso
from xactestate.core.models import ContactSubmission, EstimateRequest, PropertyInquiry
from xactestate.exceptions import NotFoundError, RateLimitError
from xactestate.logging_config import get_logger

logger = get_logger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def _check_cooldown(
    conn: sqlite3.Connection,
    table: str,
    email_column: str,
    email: str,
    seconds: int,
    message: str,
) -> None:
    """Raise RateLimitError if ``email`` submitted to ``table`` within ``seconds``."""
    recent = fetch_one(conn, f"""
        SELECT created_at FROM {table}
        WHERE {email_column} = ? AND created_at >= ?
        ORDER BY created_at DESC
        LIMIT 1
    """, (email, iso_before(seconds)))
    if not recent:
        return

    last = datetime.strptime(recent["created_at"], TIMESTAMP_FORMAT).replace(tzinfo=timezone.utc)
    elapsed = (datetime.now(timezone.utc) - last).total_seconds()
    retry_after = max(1, int(seconds - elapsed))
    logger.info("Cooldown hit on %s for %s (%ds left)", table, email, retry_after)
    raise RateLimitError(message, retry_after=retry_after)


def save_contact_submission(conn: sqlite3.Connection, submission: ContactSubmission) -> str:
    """Store a contact form message.

    Returns:
        The new submission id.

    Raises:
        RateLimitError: If the same email wrote in the last five minutes.
    """
    _check_cooldown(
        conn, TABLE_CONTACT_SUBMISSIONS, "email", submission.email, CONTACT_COOLDOWN,
        "Please wait before sending another message",
    )
    submission_id = new_id()
    execute(conn, """
        INSERT INTO contact_submissions (id, name, email, phone, inquiry_type, message, created_at)
        VALUES (?, ?, ?, ?, ?, ?, ?)
    """, (
        submission_id,
        submission.name,
        submission.email,
        submission.phone,
        submission.inquiry_type,
        submission.message,
        now_iso(),
    ))
    logger.info("Stored contact submission %s (%s)", submission_id, submission.inquiry_type)
    return submission_id


def save_estimate_request(conn: sqlite3.Connection, request: EstimateRequest) -> str:
    """Store a property valuation request.

    Returns:
        The new request id.

    Raises:
        RateLimitError: If the same email asked for a valuation in the last hour.
    """
    _check_cooldown(
        conn, TABLE_ESTIMATE_REQUESTS, "email", request.email, ESTIMATE_COOLDOWN,
        "You have already submitted a request recently. Please wait before submitting another.",
    )
    row = request.to_dict()
    row["features"] = json.dumps(row["features"])
    row["images"] = json.dumps(row["images"])
    row["id"] = new_id()
    row["created_at"] = now_iso()

    columns = ", ".join(row)
    placeholders = ", ".join(f":{name}" for name in row)
    execute(conn, f"INSERT INTO estimate_requests ({columns}) VALUES ({placeholders})", row)
    logger.info("Stored estimate request %s for %s", row["id"], request.city)
    return row["id"]


def create_inquiry(conn: sqlite3.Connection, inquiry: PropertyInquiry) -> Dict[str, Any]:
    """Store a visitor's message and route it to the listing owner.

    Raises:
        RateLimitError: If the same email sent a message in the last minute.
        NotFoundError: If the listing does not exist.
    """
    _check_cooldown(
        conn, TABLE_MESSAGES, "from_email", inquiry.from_email, INQUIRY_COOLDOWN,
        "Please wait before sending another message",
    )
    listing = fetch_one(conn, "SELECT owner_id FROM properties WHERE id = ?", (inquiry.property_id,))
    if not listing:
        raise NotFoundError("Property not found", resource="property", identifier=inquiry.property_id)

    message = {
        "id": new_id(),
        "propertyId": inquiry.property_id,
        "toUserId": listing["owner_id"],
        "fromName": inquiry.from_name,
        "fromEmail": inquiry.from_email,
        "fromPhone": inquiry.from_phone,
        "content": inquiry.content,
        "isRead": False,
        "createdAt": now_iso(),
    }
    execute(conn, """
        INSERT INTO messages (
            id, property_id, to_user_id, from_name, from_email, from_phone,
            content, is_read, created_at
        ) VALUES (?, ?, ?, ?, ?, ?, ?, 0, ?)
    """, (
        message["id"],
        message["propertyId"],
        message["toUserId"],
        message["fromName"],
        message["fromEmail"],
        message["fromPhone"],
        message["content"],
        message["createdAt"],
    ))
    logger.info("Stored inquiry %s for listing %s", message["id"], inquiry.property_id)
    return message


def list_owner_messages(conn: sqlite3.Connection, owner_id: str) -> List[Dict[str, Any]]:
    """Messages addressed to ``owner_id``, newest first."""
    rows = fetch_all(conn, """
        SELECT
            m.id, m.content, m.from_name, m.from_email, m.from_phone,
            m.is_read, m.created_at,
            p.id AS property_id, p.title, p.slug, p.address, p.city
        FROM messages m
        JOIN properties p ON p.id = m.property_id
        WHERE m.to_user_id = ?
        ORDER BY m.created_at DESC, m.id
    """, (owner_id,))

    return [
        {
            "id": row["id"],
            "content": row["content"],
            "fromName": row["from_name"],
            "fromEmail": row["from_email"],
            "fromPhone": row["from_phone"],
            "isRead": bool(row["is_read"]),
            "createdAt": row["created_at"],
            "property": {
                "id": row["property_id"],
                "title": row["title"],
                "slug": row["slug"],
                "address": f"{row['address']}, {row['city']}",
            },
        }
        for row in rows
    ]


def _owned_message(conn: sqlite3.Connection, message_id: str, owner_id: Optional[str]) -> None:
    row = fetch_one(
        conn,
        "SELECT id FROM messages WHERE id = ? AND to_user_id = ?",
        (message_id, owner_id),
    )
    if not row:
        raise NotFoundError("Message not found", resource="message", identifier=message_id)


def mark_message_read(conn: sqlite3.Connection, message_id: str, owner_id: Optional[str]) -> None:
    """Mark a message in the owner's inbox as read.

    Raises:
        NotFoundError: If the owner has no such message.
    """
    _owned_message(conn, message_id, owner_id)
    execute(conn, "UPDATE messages SET is_read = 1 WHERE id = ?", (message_id,))


def delete_message(conn: sqlite3.Connection, message_id: str, owner_id: Optional[str]) -> None:
    _owned_message(conn, message_id, owner_id)
    execute(conn, "DELETE FROM messages WHERE id = ?", (message_id,))
