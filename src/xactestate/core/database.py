"""
Database Helper Functions

Provides context managers and helper functions for SQLite database operations,
plus the schema for listings, agencies and lead submissions.

Usage:
    from xactestate.core.database import get_connection, fetch_all

    with get_connection() as conn:
        results = fetch_all(conn, "SELECT * FROM properties")
"""

import sqlite3
import uuid
from datetime import datetime, timedelta, timezone
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Generator, List, Optional, Tuple, Union

from xactestate.config import get_config
from xactestate.exceptions import DatabaseConnectionError, DatabaseError
from xactestate.logging_config import get_logger

logger = get_logger(__name__)

# Type aliases
Row = Dict[str, Any]
Params = Union[Tuple, Dict[str, Any], None]


SCHEMA: Dict[str, str] = {
    "agencies": """
        CREATE TABLE IF NOT EXISTS agencies (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            slug TEXT UNIQUE NOT NULL,
            logo TEXT,
            phone TEXT,
            email TEXT,
            is_verified INTEGER DEFAULT 0,
            verified_at TEXT,
            created_at TEXT NOT NULL
        )
    """,
    "agents": """
        CREATE TABLE IF NOT EXISTS agents (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            email TEXT,
            phone TEXT,
            image TEXT,
            agency_id TEXT REFERENCES agencies(id) ON DELETE SET NULL
        )
    """,
    "properties": """
        CREATE TABLE IF NOT EXISTS properties (
            id TEXT PRIMARY KEY,
            title TEXT NOT NULL,
            slug TEXT UNIQUE NOT NULL,
            description TEXT,
            type TEXT NOT NULL,
            category TEXT DEFAULT 'RESIDENTIAL',
            listing_type TEXT NOT NULL,
            status TEXT NOT NULL DEFAULT 'DRAFT',
            price REAL NOT NULL,
            bedrooms INTEGER,
            bathrooms INTEGER,
            living_area REAL,
            land_area REAL,
            floor INTEGER,
            total_floors INTEGER,
            year_built INTEGER,
            energy_class TEXT,
            address TEXT NOT NULL,
            city TEXT NOT NULL,
            postal_code TEXT,
            features TEXT DEFAULT '[]',
            is_featured INTEGER DEFAULT 0,
            view_count INTEGER DEFAULT 0,
            owner_id TEXT,
            agent_id TEXT REFERENCES agents(id) ON DELETE SET NULL,
            agency_id TEXT REFERENCES agencies(id) ON DELETE SET NULL,
            created_at TEXT NOT NULL,
            updated_at TEXT,
            published_at TEXT
        )
    """,
    "property_images": """
        CREATE TABLE IF NOT EXISTS property_images (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            property_id TEXT NOT NULL REFERENCES properties(id) ON DELETE CASCADE,
            url TEXT NOT NULL,
            sort_order INTEGER DEFAULT 0
        )
    """,
    "favorites": """
        CREATE TABLE IF NOT EXISTS favorites (
            user_id TEXT NOT NULL,
            property_id TEXT NOT NULL REFERENCES properties(id) ON DELETE CASCADE,
            created_at TEXT,
            PRIMARY KEY (user_id, property_id)
        )
    """,
    "messages": """
        CREATE TABLE IF NOT EXISTS messages (
            id TEXT PRIMARY KEY,
            property_id TEXT NOT NULL REFERENCES properties(id) ON DELETE CASCADE,
            to_user_id TEXT,
            from_name TEXT NOT NULL,
            from_email TEXT NOT NULL,
            from_phone TEXT,
            content TEXT NOT NULL,
            is_read INTEGER DEFAULT 0,
            created_at TEXT NOT NULL
        )
    """,
    "contact_submissions": """
        CREATE TABLE IF NOT EXISTS contact_submissions (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            email TEXT NOT NULL,
            phone TEXT,
            inquiry_type TEXT DEFAULT 'general',
            message TEXT NOT NULL,
            created_at TEXT NOT NULL
        )
    """,
    "estimate_requests": """
        CREATE TABLE IF NOT EXISTS estimate_requests (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            email TEXT NOT NULL,
            phone TEXT,
            property_type TEXT NOT NULL,
            address TEXT NOT NULL,
            city TEXT NOT NULL,
            postal_code TEXT,
            living_area REAL,
            land_area REAL,
            bedrooms INTEGER,
            bathrooms INTEGER,
            year_built INTEGER,
            floor INTEGER,
            condition TEXT,
            parking TEXT,
            outdoor TEXT,
            timeline TEXT,
            features TEXT DEFAULT '[]',
            description TEXT,
            images TEXT DEFAULT '[]',
            created_at TEXT NOT NULL
        )
    """,
}

INDEXES: List[str] = [
    "CREATE INDEX IF NOT EXISTS idx_properties_status ON properties(status, created_at)",
    "CREATE INDEX IF NOT EXISTS idx_properties_owner ON properties(owner_id)",
    "CREATE INDEX IF NOT EXISTS idx_images_property ON property_images(property_id, sort_order)",
    "CREATE INDEX IF NOT EXISTS idx_messages_recipient ON messages(to_user_id, created_at)",
    "CREATE INDEX IF NOT EXISTS idx_contact_email ON contact_submissions(email, created_at)",
    "CREATE INDEX IF NOT EXISTS idx_estimate_email ON estimate_requests(email, created_at)",
]


def dict_factory(cursor: sqlite3.Cursor, row: tuple) -> Dict[str, Any]:
    """Convert SQLite row to dictionary."""
    return {col[0]: row[idx] for idx, col in enumerate(cursor.description)}


@contextmanager
def get_connection(
    db_path: Optional[str] = None,
    as_dict: bool = True,
) -> Generator[sqlite3.Connection, None, None]:
    """Context manager for database connections.

    Args:
        db_path: Path to database file. Uses config default if not specified.
        as_dict: If True, rows are returned as dictionaries.

    Yields:
        SQLite connection object.

    Raises:
        DatabaseConnectionError: If unable to connect to the database.
    """
    if db_path is None:
        db_path = get_config().database.path

    Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    try:
        conn = sqlite3.connect(db_path)
    except sqlite3.Error as e:
        logger.error("Database connection error: %s", e)
        raise DatabaseConnectionError(f"Failed to connect to database: {e}") from e

    try:
        if as_dict:
            conn.row_factory = dict_factory
        else:
            conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        logger.debug("Connected to database: %s", db_path)
        yield conn
    finally:
        conn.close()
        logger.debug("Closed database connection")


def _run(conn: sqlite3.Connection, query: str, params: Params) -> sqlite3.Cursor:
    cursor = conn.cursor()
    if params:
        cursor.execute(query, params)
    else:
        cursor.execute(query)
    return cursor


def fetch_all(
    conn: sqlite3.Connection,
    query: str,
    params: Params = None,
) -> List[Row]:
    """Execute a query and fetch all results.

    Raises:
        DatabaseError: If query execution fails.
    """
    try:
        return _run(conn, query, params).fetchall()
    except sqlite3.Error as e:
        logger.error("Query failed: %s - Error: %s", query[:100], e)
        raise DatabaseError(f"Query failed: {e}") from e


def fetch_one(
    conn: sqlite3.Connection,
    query: str,
    params: Params = None,
) -> Optional[Row]:
    """Execute a query and fetch one result, or None if no results.

    Raises:
        DatabaseError: If query execution fails.
    """
    try:
        return _run(conn, query, params).fetchone()
    except sqlite3.Error as e:
        logger.error("Query failed: %s - Error: %s", query[:100], e)
        raise DatabaseError(f"Query failed: {e}") from e


def fetch_value(
    conn: sqlite3.Connection,
    query: str,
    params: Params = None,
    default: Any = None,
) -> Any:
    """Fetch the first column of the first row (COUNT, SUM, ...)."""
    row = fetch_one(conn, query, params)
    if not row:
        return default
    value = next(iter(row.values())) if isinstance(row, dict) else row[0]
    return default if value is None else value


def execute(
    conn: sqlite3.Connection,
    query: str,
    params: Params = None,
    commit: bool = True,
) -> int:
    """Execute a query (INSERT, UPDATE, DELETE).

    Args:
        conn: Database connection.
        query: SQL query string.
        params: Query parameters (tuple or dict).
        commit: If True, commit the transaction.

    Returns:
        Number of rows affected.

    Raises:
        DatabaseError: If query execution fails.
    """
    try:
        cursor = _run(conn, query, params)
        if commit:
            conn.commit()
        return cursor.rowcount
    except sqlite3.Error as e:
        logger.error("Execute failed: %s - Error: %s", query[:100], e)
        raise DatabaseError(f"Execute failed: {e}") from e


def execute_many(
    conn: sqlite3.Connection,
    query: str,
    params_list: List[Params],
    commit: bool = True,
) -> int:
    """Execute a query multiple times with different parameters.

    Returns:
        Total number of rows affected.

    Raises:
        DatabaseError: If query execution fails.
    """
    try:
        cursor = conn.cursor()
        cursor.executemany(query, params_list)
        if commit:
            conn.commit()
        return cursor.rowcount
    except sqlite3.Error as e:
        logger.error("Execute many failed: %s - Error: %s", query[:100], e)
        raise DatabaseError(f"Execute many failed: {e}") from e


def table_exists(conn: sqlite3.Connection, table_name: str) -> bool:
    """Check if a table exists in the database."""
    result = fetch_one(
        conn,
        "SELECT name FROM sqlite_master WHERE type='table' AND name=?",
        (table_name,),
    )
    return result is not None


def init_schema(conn: sqlite3.Connection) -> List[str]:
    """Create any missing tables and indexes.

    Returns:
        Names of the tables that were created.
    """
    created = []
    for table_name, ddl in SCHEMA.items():
        if not table_exists(conn, table_name):
            execute(conn, ddl, commit=False)
            created.append(table_name)
            logger.info("Created %s table", table_name)
    for ddl in INDEXES:
        execute(conn, ddl, commit=False)
    conn.commit()
    return created


def new_id() -> str:
    """Generate a primary key for a new record."""
    return uuid.uuid4().hex


def now_iso() -> str:
    """Current UTC time as an ISO-8601 string (sortable as text)."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def iso_before(seconds: int) -> str:
    """UTC timestamp ``seconds`` ago, in the same format as ``now_iso``."""
    moment = datetime.now(timezone.utc) - timedelta(seconds=seconds)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.%fZ")
