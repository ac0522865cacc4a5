"""
Fair Status Evaluator

Decides whether a fair is live, in strict precedence order:
1. isLive == True (manual override) -> live, source "manual"
2. now within [startTime, endTime] (both set, inclusive) -> live, source "schedule"
3. otherwise -> not live, source "manual" (no active schedule)

Read-only: evaluating twice without writes gives the same answer for the
same clock value.
"""

from typing import Optional

from app.core.errors import AuthorizationError, NotFoundError
from app.db import keyspace
from app.db.document_store import DocumentStore
from app.models import FairStatus, StatusSource
from app.services.access_control import AccessControlGate
from app.utils.timeutils import Clock, now_millis


def evaluate_fair_status(fair: dict, now: int) -> FairStatus:
    """Pure evaluation of a fair document at instant `now` (epoch millis)."""
    name = fair.get("name")
    description = fair.get("description")

    if fair.get("isLive") is True:
        return FairStatus(True, StatusSource.manual, name, description)

    start, end = fair.get("startTime"), fair.get("endTime")
    if start is not None and end is not None and start <= now <= end:
        return FairStatus(True, StatusSource.schedule, name, description)

    return FairStatus(False, StatusSource.manual, name, description)


class FairStatusEvaluator:
    def __init__(self, store: DocumentStore, clock: Clock = now_millis):
        self.store = store
        self.clock = clock

    def evaluate(self, fair_id: str) -> FairStatus:
        fair = self.store.get_document(keyspace.FAIRS, fair_id)
        if not fair.exists:
            raise NotFoundError("Fair not found")
        return evaluate_fair_status(fair.data, self.clock())

    def ensure_visible(self, fair_id: str, uid: Optional[str], gate: AccessControlGate) -> FairStatus:
        """
        Gate for public reads of fair-scoped resources.

        Administrators see everything; everyone else only while the fair is live.
        """
        status = self.evaluate(fair_id)
        if not status.is_live and not gate.is_admin(uid):
            raise AuthorizationError("Fair is not currently live")
        return status
