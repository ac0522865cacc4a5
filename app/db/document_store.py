"""
Document Store - keyed documents, collections and batched writes on MongoDB.

The fair routes think in hierarchical paths ("fairs/F1/booths/B7"), so this
module maps that keyspace onto plain Mongo collections:

- the Mongo collection is named after the collection segments of the path
  ("fairs/F1/booths" -> "fairs.booths")
- every stored document carries its full path as _id, its parent document
  path as _parent and its own id as _key
- a collection-group query scans every Mongo collection ending in the
  requested sub-collection name

WHY batches?
- enroll/unenroll must create or remove an enrollment and its booth copy
  together; with transactions enabled a batch commits inside one Mongo
  multi-document transaction
- across separate batches there is no atomicity, which the enrollment
  service accounts for
"""

import functools
import logging
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.client_session import ClientSession
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from app.core.config import get_settings
from app.core.errors import DependencyError, NotFoundError, ValidationError
from app.db.mongodb import get_mongo_client, get_mongo_db

logger = logging.getLogger(__name__)

INTERNAL_FIELDS = ("_id", "_parent", "_key")

# (field, op, value)
Filter = Tuple[str, str, Any]
# "field" or ("field", "asc"|"desc")
OrderBy = Union[str, Tuple[str, str]]

_FILTER_OPS = {
    "==": None,
    "!=": "$ne",
    "<": "$lt",
    "<=": "$lte",
    ">": "$gt",
    ">=": "$gte",
    "in": "$in",
}


def new_document_id() -> str:
    """Generate a fresh document id (store-independent)."""
    return uuid.uuid4().hex[:20]


def split_collection_path(collection_path: str) -> Tuple[str, Optional[str]]:
    """
    Split "fairs/F1/booths" into ("fairs.booths", "fairs/F1").

    Top-level collections have no parent.
    """
    segments = [s for s in collection_path.split("/") if s]
    if not segments or len(segments) % 2 == 0:
        raise ValueError(f"Not a collection path: {collection_path!r}")
    name = ".".join(segments[0::2])
    parent = "/".join(segments[:-1]) or None
    return name, parent


@dataclass
class DocumentSnapshot:
    """A point-in-time read of one document."""

    id: str
    path: str
    data: Optional[Dict[str, Any]] = None

    @property
    def exists(self) -> bool:
        return self.data is not None

    @property
    def parent_id(self) -> Optional[str]:
        """Id of the owning document, e.g. the fair id for fairs/F1/enrollments/C1."""
        segments = self.path.split("/")
        if len(segments) < 4:
            return None
        return segments[-3]

    def get(self, field: str, default: Any = None) -> Any:
        if self.data is None:
            return default
        return self.data.get(field, default)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, **(self.data or {})}


class DocumentStore(ABC):
    """Keyed document store with collections, queries and atomic batches."""

    @abstractmethod
    def get_document(self, collection_path: str, doc_id: str) -> DocumentSnapshot: ...

    @abstractmethod
    def set_document(self, collection_path: str, doc_id: str, data: Dict[str, Any]) -> None: ...

    @abstractmethod
    def update_document(self, collection_path: str, doc_id: str, updates: Dict[str, Any]) -> None: ...

    @abstractmethod
    def delete_document(self, collection_path: str, doc_id: str) -> None: ...

    @abstractmethod
    def add_document(self, collection_path: str, data: Dict[str, Any]) -> DocumentSnapshot: ...

    @abstractmethod
    def query(
        self,
        collection_path: str,
        filters: Sequence[Filter] = (),
        order_by: Sequence[OrderBy] = (),
        limit: int = None,
    ) -> List[DocumentSnapshot]: ...

    @abstractmethod
    def collection_group_query(
        self, collection_name: str, filters: Sequence[Filter] = ()
    ) -> List[DocumentSnapshot]: ...

    @abstractmethod
    def batch(self) -> "WriteBatch": ...

    @abstractmethod
    def commit_batch(self, operations: List["BatchOperation"]) -> None: ...

    @abstractmethod
    def ping(self) -> bool: ...


@dataclass
class BatchOperation:
    kind: str  # set | delete
    collection_path: str
    doc_id: str
    data: Optional[Dict[str, Any]] = None


class WriteBatch:
    """
    Collects writes and applies them together on commit().

    Usage:
        batch = store.batch()
        batch.set("fairs/F1/booths", booth_id, booth)
        batch.delete("fairs/F1/enrollments", company_id)
        batch.commit()
    """

    def __init__(self, store: DocumentStore):
        self._store = store
        self._operations: List[BatchOperation] = []
        self._committed = False

    def set(self, collection_path: str, doc_id: str, data: Dict[str, Any]) -> "WriteBatch":
        self._operations.append(BatchOperation("set", collection_path, doc_id, dict(data)))
        return self

    def delete(self, collection_path: str, doc_id: str) -> "WriteBatch":
        self._operations.append(BatchOperation("delete", collection_path, doc_id))
        return self

    def __len__(self) -> int:
        return len(self._operations)

    def commit(self) -> None:
        if self._committed:
            raise RuntimeError("Batch already committed")
        self._committed = True
        if self._operations:
            self._store.commit_batch(self._operations)


def _wrap_store_errors(func):
    """Surface pymongo failures as DependencyError (500)."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except PyMongoError as e:
            logger.error("Document store call %s failed: %s", func.__name__, e)
            raise DependencyError(f"Document store error: {e}") from e

    return wrapper


class MongoDocumentStore(DocumentStore):
    """
    DocumentStore backed by a pymongo Database.

    Args:
        db: database handle
        client: client used to open sessions for transactional batches
        transactions: commit batches inside a multi-document transaction
    """

    def __init__(self, db: Database, client: MongoClient = None, transactions: bool = False):
        self.db = db
        self.client = client
        self.transactions = transactions and client is not None

    # ------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------

    def _collection(self, collection_path: str) -> Tuple[Collection, Optional[str]]:
        name, parent = split_collection_path(collection_path)
        return self.db[name], parent

    @staticmethod
    def _doc_path(collection_path: str, doc_id: str) -> str:
        # ids are single path segments; parent_id depends on it
        if not doc_id or "/" in doc_id:
            raise ValidationError(f"Invalid document id: {doc_id!r}")
        return f"{collection_path.strip('/')}/{doc_id}"

    @staticmethod
    def _to_snapshot(doc: dict) -> DocumentSnapshot:
        data = {k: v for k, v in doc.items() if k not in INTERNAL_FIELDS}
        return DocumentSnapshot(id=doc["_key"], path=doc["_id"], data=data)

    @staticmethod
    def _mongo_filter(filters: Iterable[Filter]) -> dict:
        mongo_filter = {}
        for field, op, value in filters:
            if op not in _FILTER_OPS:
                raise ValueError(f"Unsupported filter operator: {op}")
            mongo_op = _FILTER_OPS[op]
            if mongo_op is None:
                mongo_filter[field] = value
            else:
                mongo_filter.setdefault(field, {})[mongo_op] = value
        return mongo_filter

    @staticmethod
    def _mongo_sort(order_by: Iterable[OrderBy]) -> List[Tuple[str, int]]:
        sort = []
        for item in order_by:
            if isinstance(item, str):
                sort.append((item, ASCENDING))
            else:
                field, direction = item
                sort.append((field, DESCENDING if direction == "desc" else ASCENDING))
        return sort

    def _stored(self, collection_path: str, doc_id: str, data: Dict[str, Any]) -> dict:
        _, parent = split_collection_path(collection_path)
        return {
            **data,
            "_id": self._doc_path(collection_path, doc_id),
            "_parent": parent,
            "_key": doc_id,
        }

    # ------------------------------------------------------------
    # reads
    # ------------------------------------------------------------

    @_wrap_store_errors
    def get_document(self, collection_path: str, doc_id: str) -> DocumentSnapshot:
        collection, _ = self._collection(collection_path)
        path = self._doc_path(collection_path, doc_id)
        doc = collection.find_one({"_id": path})
        if doc is None:
            return DocumentSnapshot(id=doc_id, path=path, data=None)
        return self._to_snapshot(doc)

    @_wrap_store_errors
    def query(self, collection_path, filters=(), order_by=(), limit=None) -> List[DocumentSnapshot]:
        collection, parent = self._collection(collection_path)
        mongo_filter = self._mongo_filter(filters)
        mongo_filter["_parent"] = parent
        cursor = collection.find(mongo_filter)
        sort = self._mongo_sort(order_by)
        if sort:
            cursor = cursor.sort(sort)
        if limit:
            cursor = cursor.limit(limit)
        return [self._to_snapshot(doc) for doc in cursor]

    @_wrap_store_errors
    def collection_group_query(self, collection_name, filters=()) -> List[DocumentSnapshot]:
        mongo_filter = self._mongo_filter(filters)
        results = []
        for name in sorted(self.db.list_collection_names()):
            if name.split(".")[-1] != collection_name or "." not in name:
                continue
            results.extend(self._to_snapshot(doc) for doc in self.db[name].find(mongo_filter))
        return results

    # ------------------------------------------------------------
    # single-document writes
    # ------------------------------------------------------------

    @_wrap_store_errors
    def set_document(self, collection_path, doc_id, data) -> None:
        self._apply(BatchOperation("set", collection_path, doc_id, data))

    @_wrap_store_errors
    def update_document(self, collection_path, doc_id, updates) -> None:
        collection, _ = self._collection(collection_path)
        path = self._doc_path(collection_path, doc_id)
        result = collection.update_one({"_id": path}, {"$set": updates})
        if result.matched_count == 0:
            raise NotFoundError(f"Document not found: {path}")

    @_wrap_store_errors
    def delete_document(self, collection_path, doc_id) -> None:
        self._apply(BatchOperation("delete", collection_path, doc_id))

    @_wrap_store_errors
    def add_document(self, collection_path, data) -> DocumentSnapshot:
        doc_id = new_document_id()
        self._apply(BatchOperation("set", collection_path, doc_id, data))
        return DocumentSnapshot(id=doc_id, path=self._doc_path(collection_path, doc_id), data=dict(data))

    # ------------------------------------------------------------
    # batches
    # ------------------------------------------------------------

    def batch(self) -> WriteBatch:
        return WriteBatch(self)

    @_wrap_store_errors
    def commit_batch(self, operations: List[BatchOperation]) -> None:
        if not self.transactions:
            for op in operations:
                self._apply(op)
            return

        def run(session: ClientSession):
            for op in operations:
                self._apply(op, session=session)

        with self.client.start_session() as session:
            session.with_transaction(run)

    def _apply(self, op: BatchOperation, session: ClientSession = None) -> None:
        collection, _ = self._collection(op.collection_path)
        path = self._doc_path(op.collection_path, op.doc_id)
        if op.kind == "set":
            collection.replace_one(
                {"_id": path}, self._stored(op.collection_path, op.doc_id, op.data),
                upsert=True, session=session,
            )
        elif op.kind == "delete":
            collection.delete_one({"_id": path}, session=session)
        else:
            raise ValueError(f"Unknown batch operation: {op.kind}")

    def ping(self) -> bool:
        try:
            self.db.command("ping")
            return True
        except PyMongoError as e:
            logger.error("MongoDB ping failed: %s", e)
            return False


@lru_cache()
def get_document_store() -> DocumentStore:
    """
    FastAPI dependency - the process-wide document store.

    Tests override this with a store over mongomock.
    """
    settings = get_settings()
    return MongoDocumentStore(
        get_mongo_db(),
        client=get_mongo_client(),
        transactions=settings.mongodb_transactions,
    )
