import mongomock
import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.core.auth import create_access_token
from app.core.errors import DependencyError
from app.db import keyspace
from app.db.document_store import MongoDocumentStore, get_document_store
from app.utils.timeutils import get_clock

# 2023-11-14T22:13:20Z
NOW = 1_700_000_000_000
HOUR = 3_600_000


class FixedClock:
    """Clock pinned to a settable instant."""

    def __init__(self, now: int = NOW):
        self.now = now

    def __call__(self) -> int:
        return self.now


class JobsOutageStore(MongoDocumentStore):
    """Store whose batches fail when they touch a fair's jobs with `kind` ops."""

    def __init__(self, db, kind):
        super().__init__(db)
        self.kind = kind

    def commit_batch(self, operations):
        if any(op.kind == self.kind and op.collection_path.endswith("/jobs") for op in operations):
            raise DependencyError("Document store error: jobs unavailable")
        super().commit_batch(operations)


class Seeder:
    """Writes canonical records straight into the store."""

    def __init__(self, store: MongoDocumentStore):
        self.store = store

    def user(self, uid, role="student", company_id=None):
        data = {"role": role, "email": f"{uid}@example.com"}
        if company_id:
            data["companyId"] = company_id
        self.store.set_document(keyspace.USERS, uid, data)
        return uid

    def admin(self, uid="admin-1"):
        return self.user(uid, role="administrator")

    def company(self, company_id, owner_id, name="Acme Robotics", reps=(), booth_id=None, **fields):
        data = {
            "companyName": name,
            "ownerId": owner_id,
            "representativeIDs": list(reps),
            **fields,
        }
        if booth_id:
            data["boothId"] = booth_id
        self.store.set_document(keyspace.COMPANIES, company_id, data)
        return company_id

    def booth(self, booth_id, company_id, **fields):
        self.store.set_document(keyspace.BOOTHS, booth_id, {"companyId": company_id, **fields})
        return booth_id

    def job(self, job_id, company_id, name="Software Intern", **fields):
        self.store.set_document(keyspace.JOBS, job_id, {"companyId": company_id, "name": name, **fields})
        return job_id

    def fair(self, fair_id="fair-1", name="Spring Fair", invite_code="SPRING01", **fields):
        data = {
            "name": name,
            "description": None,
            "isLive": False,
            "startTime": None,
            "endTime": None,
            "inviteCode": invite_code,
            "createdAt": NOW - HOUR,
            "createdBy": "admin-1",
            "updatedAt": NOW - HOUR,
            "updatedBy": "admin-1",
        }
        data.update(fields)
        self.store.set_document(keyspace.FAIRS, fair_id, data)
        return fair_id


@pytest.fixture
def mongo_db():
    return mongomock.MongoClient()["career_fair_test"]


@pytest.fixture
def store(mongo_db):
    return MongoDocumentStore(mongo_db)


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def seed(store):
    return Seeder(store)


@pytest.fixture
def client(store, clock):
    app.dependency_overrides[get_document_store] = lambda: store
    app.dependency_overrides[get_clock] = lambda: clock
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth():
    """auth("uid") -> Authorization header for that user."""

    def _headers(uid):
        return {"Authorization": f"Bearer {create_access_token(uid, f'{uid}@example.com')}"}

    return _headers
