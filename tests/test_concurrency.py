import asyncio
import time

import httpx
import pytest

from app.db.document_store import MongoDocumentStore, get_document_store
from app.main import app
from app.utils.timeutils import get_clock

# seconds each document read takes
READ_DELAY = 0.3


class SlowStore(MongoDocumentStore):
    def get_document(self, collection_path, doc_id):
        time.sleep(READ_DELAY)
        return super().get_document(collection_path, doc_id)


@pytest.fixture
def slow_app(seed, mongo_db, clock):
    store = SlowStore(mongo_db)
    app.dependency_overrides[get_document_store] = lambda: store
    app.dependency_overrides[get_clock] = lambda: clock
    yield app
    app.dependency_overrides.clear()


async def fetch_all(asgi_app, path, count):
    transport = httpx.ASGITransport(app=asgi_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http:
        return await asyncio.gather(*(http.get(path) for _ in range(count)))


def test_blocking_store_reads_do_not_serialize_requests(slow_app, seed):
    seed.fair("fair-1")

    started = time.perf_counter()
    responses = asyncio.run(fetch_all(slow_app, "/api/fairs/fair-1/status", 4))
    elapsed = time.perf_counter() - started

    assert [r.status_code for r in responses] == [200] * 4
    # one at a time would take 4 * READ_DELAY
    assert elapsed < 3 * READ_DELAY
