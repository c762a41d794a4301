#!/usr/bin/env python
"""
CLI for creating the Xact Estate database.

Creates any missing tables and, optionally, loads agencies, agents and
listings from a JSON seed file:

    {
        "agencies": [{"id": "...", "name": "...", "slug": "...", "isVerified": true}],
        "agents": [{"id": "...", "name": "...", "email": "...", "agencyId": "..."}],
        "properties": [{"title": "...", "type": "APARTMENT", "ownerId": "...", ...}]
    }

A bare list is read as the "properties" list. Seeded listings are published
unless they carry their own "status".

Usage:
    python -m xactestate.cli.init_db
    python -m xactestate.cli.init_db --seed data/listings.json
"""

import argparse
import json
import sqlite3
import sys
from pathlib import Path
from typing import Any, Dict

from xactestate.core.constants import STATUS_PENDING_REVIEW, STATUS_PUBLISHED
from xactestate.core.database import execute, get_connection, init_schema, new_id, now_iso
from xactestate.exceptions import XactError
from xactestate.listings.dashboard import create_listing
from xactestate.listings.moderation import assign_agent, create_agent, set_featured, set_status
from xactestate.logging_config import get_logger, setup_logging

SEED_OWNER = "seed"


def seed_database(conn: sqlite3.Connection, data: Any) -> Dict[str, int]:
    """Load agencies, agents and listings from parsed seed data.

    Returns:
        Number of agencies, agents and properties inserted.
    """
    if isinstance(data, list):
        data = {"properties": data}

    counts = {"agencies": 0, "agents": 0, "properties": 0}

    for agency in data.get("agencies", []):
        verified = bool(agency.get("isVerified"))
        execute(conn, """
            INSERT INTO agencies (id, name, slug, logo, phone, email, is_verified, verified_at, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
        """, (
            agency.get("id") or new_id(),
            agency["name"],
            agency["slug"],
            agency.get("logo"),
            agency.get("phone"),
            agency.get("email"),
            1 if verified else 0,
            now_iso() if verified else None,
            now_iso(),
        ))
        counts["agencies"] += 1

    for agent in data.get("agents", []):
        create_agent(conn, agent)
        counts["agents"] += 1

    for item in data.get("properties", []):
        listing = create_listing(conn, item.get("ownerId") or SEED_OWNER, item)
        status = item.get("status", STATUS_PUBLISHED)
        if status != STATUS_PENDING_REVIEW:
            set_status(conn, listing["id"], status)
        if item.get("isFeatured"):
            set_featured(conn, listing["id"], True)
        if item.get("agencyId"):
            execute(
                conn,
                "UPDATE properties SET agency_id = ? WHERE id = ?",
                (item["agencyId"], listing["id"]),
            )
        if item.get("agentId"):
            assign_agent(conn, listing["id"], item["agentId"])
        counts["properties"] += 1

    return counts


def main(argv=None):
    """Main entry point for the database setup CLI."""
    parser = argparse.ArgumentParser(description="Create the Xact Estate database")
    parser.add_argument(
        "--db",
        type=str,
        default=None,
        help="Database path (default: from config)",
    )
    parser.add_argument(
        "--seed",
        type=Path,
        default=None,
        help="JSON file with agencies and listings to load",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set log level",
    )
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level)
    logger = get_logger(__name__)

    try:
        with get_connection(args.db) as conn:
            created = init_schema(conn)
            logger.info("Schema ready (%d tables created)", len(created))

            if args.seed:
                with open(args.seed, encoding="utf-8") as f:
                    data = json.load(f)
                counts = seed_database(conn, data)
                logger.info(
                    "Seeded %d agencies, %d agents and %d properties from %s",
                    counts["agencies"], counts["agents"], counts["properties"], args.seed,
                )
    except (OSError, ValueError, XactError) as e:
        logger.error("Database setup failed: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
