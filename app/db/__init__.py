"""
Database module - MongoDB connection and the document store on top of it.
"""
from app.db.mongodb import get_mongo_db, test_mongo_connection
from app.db.document_store import DocumentStore, MongoDocumentStore, get_document_store

__all__ = [
    "get_mongo_db",
    "test_mongo_connection",
    "DocumentStore",
    "MongoDocumentStore",
    "get_document_store",
]
