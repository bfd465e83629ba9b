"""
MongoDB access helpers

One module-level database handle shared by every router. `connect()` is called
once at startup; tests swap in another database with `use_database()`.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from bson import ObjectId
from pydantic import BaseModel
from pymongo import MongoClient
from pymongo.database import Database

from config import config
from exceptions import ConfigurationError, DatabaseConnectionError
from logger import get_logger

logger = get_logger("database")

_client: Optional[MongoClient] = None
db: Optional[Database] = None


def connect(url: Optional[str] = None, name: Optional[str] = None) -> Database:
    """Open the Mongo client. A missing connection string is fatal."""
    global _client, db

    url = config.DATABASE_URL if url is None else url
    if not url:
        raise ConfigurationError("DATABASE_URL is not set in environment variables.")

    _client = MongoClient(url)
    db = _client[name or config.DATABASE_NAME]
    logger.info(f"MongoDB client initialised for database '{db.name}'")
    return db


def init_db() -> Database:
    if db is not None:
        return db
    return connect()


def use_database(database: Optional[Database]) -> None:
    global db
    db = database


def close() -> None:
    global _client, db
    if _client is not None:
        _client.close()
        logger.info("MongoDB client closed")
    _client = None
    db = None


# Dependency for FastAPI
def get_db() -> Database:
    if db is None:
        raise DatabaseConnectionError("Database not available")
    return db


def now() -> datetime:
    return datetime.now(timezone.utc)


def create_document(
    collection_name: str,
    data: Union[BaseModel, Dict[str, Any]],
    database: Optional[Database] = None,
) -> str:
    """Insert a document stamped with createdAt/updatedAt and return its id"""
    if isinstance(data, BaseModel):
        data = data.model_dump(by_alias=True)
    else:
        data = dict(data)
    stamp = now()
    data["createdAt"] = stamp
    data["updatedAt"] = stamp
    target = database if database is not None else get_db()
    result = target[collection_name].insert_one(data)
    return str(result.inserted_id)


def get_documents(
    collection_name: str,
    filter_dict: Optional[Dict[str, Any]] = None,
    limit: Optional[int] = None,
    sort: Optional[List[tuple]] = None,
    database: Optional[Database] = None,
) -> List[Dict[str, Any]]:
    target = database if database is not None else get_db()
    cursor = target[collection_name].find(filter_dict or {})
    if sort:
        cursor = cursor.sort(sort)
    if limit:
        cursor = cursor.limit(limit)
    return list(cursor)


def parse_object_id(value: Any) -> Optional[ObjectId]:
    """Return an ObjectId for a valid id string, else None"""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


def to_public(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if not doc:
        return doc
    d = doc.copy()
    if "_id" in d:
        d["_id"] = str(d["_id"])
    # Convert datetimes to isoformat strings for JSON
    for k, v in list(d.items()):
        if isinstance(v, datetime):
            d[k] = v.isoformat()
    return d
