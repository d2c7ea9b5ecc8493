"""MongoDB adapter owning the client connection and collection handles.
"""

from typing import Optional
import logging

from pymongo import MongoClient, TEXT
from pymongo.database import Database
from pymongo.collection import Collection

logger = logging.getLogger("nutriadmin.mongo")

_client: Optional[MongoClient] = None
_db: Optional[Database] = None

MEALS_COLLECTION = "meals"
USERS_COLLECTION = "users"


# ------------------ Connection ------------------
def connect(uri: str, db_name: str = "nutriadmin", timeout_ms: int = 5000) -> Database:
    """Open the client and verify the server answers a ping.

    Raises the pymongo error when the server is unreachable so the caller can retry.
    """
    global _client, _db
    client = MongoClient(uri, serverSelectionTimeoutMS=timeout_ms)
    try:
        client.admin.command("ping")
    except Exception:
        client.close()
        raise
    _client = client
    _db = client[db_name]
    logger.info("Connected to MongoDB %s (database: %s)", uri, db_name)
    return _db


def close():
    """Close MongoDB connection."""
    global _client, _db
    try:
        if _client is not None:
            _client.close()
            logger.info("MongoDB client closed")
    finally:
        _client = None
        _db = None


def get_db() -> Database:
    """Return the connected database. Raises RuntimeError before connect()."""
    if _db is None:
        raise RuntimeError("MongoDB is not connected")
    return _db


def meals_collection() -> Collection:
    return get_db()[MEALS_COLLECTION]


def users_collection() -> Collection:
    return get_db()[USERS_COLLECTION]


def ensure_indexes(db: Database) -> None:
    """Create the text index backing meal search."""
    db[MEALS_COLLECTION].create_index(
        [("name", TEXT), ("description", TEXT)], name="meal_text_search"
    )
    logger.info("Ensured text index on %s", MEALS_COLLECTION)
