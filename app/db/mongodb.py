"""
MongoDB Connection Utility

MongoDB stores every collection of the platform:
- users, companies, booths, jobs: canonical records
- fairs: fair documents
- fairs.booths / fairs.jobs / fairs.enrollments: per-fair copies,
  one Mongo collection per sub-collection name (see app.db.document_store)
"""
import logging

from pymongo import MongoClient, ASCENDING
from pymongo.database import Database
from app.core.config import get_settings

logger = logging.getLogger(__name__)

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None
_db: Database = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(get_settings().mongodb_uri)
    return _client


def get_mongo_db() -> Database:
    """Get the configured database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[get_settings().mongodb_db]
    return _db


def test_mongo_connection(client: MongoClient = None) -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        client = client or get_mongo_client()
        # ping command checks connection
        client.admin.command('ping')
        return True
    except Exception as e:
        logger.error("MongoDB connection failed: %s", e)
        return False


# Mongo collection names backing the fair keyspace (avoid typos)
COLLECTIONS = {
    "users": "users",
    "companies": "companies",
    "booths": "booths",
    "jobs": "jobs",
    "fairs": "fairs",
    "fair_booths": "fairs.booths",
    "fair_jobs": "fairs.jobs",
    "fair_enrollments": "fairs.enrollments",
}


def init_mongo_indexes(db: Database = None):
    """
    Create indexes for the lookups the fair routes perform.
    Call this once during app startup.
    """
    db = db if db is not None else get_mongo_db()

    # Invite code lookups on self-enrollment
    db[COLLECTIONS["fairs"]].create_index("inviteCode")
    db[COLLECTIONS["fairs"]].create_index([("createdAt", -1)])

    # Company jobs copied into a fair on enrollment
    db[COLLECTIONS["jobs"]].create_index("companyId")

    # Per-fair listing and per-company cleanup
    for name in ("fair_booths", "fair_jobs", "fair_enrollments"):
        db[COLLECTIONS[name]].create_index([("_parent", ASCENDING), ("companyId", ASCENDING)])

    # Company -> fairs lookup across every fair
    db[COLLECTIONS["fair_enrollments"]].create_index("companyId")

    logger.info("MongoDB indexes created successfully")
