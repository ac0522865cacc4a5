"""
Fair Lifecycle Manager

Fair CRUD, the manual live toggle and invite code rotation. Deleting a fair
cascades over its booths, jobs and enrollments sub-collections, one batch per
sub-collection, before the fair document itself goes.
"""

import logging
from typing import Any, Dict, List, Optional

from app.core.config import get_settings
from app.core.errors import ConflictError, DependencyError, NotFoundError, ValidationError
from app.db import keyspace
from app.db.document_store import DocumentSnapshot, DocumentStore
from app.services.access_control import AccessControlGate
from app.utils.invite_codes import generate_invite_code, normalize_invite_code
from app.utils.timeutils import Clock, now_millis, parse_utc_to_millis

logger = logging.getLogger(__name__)

# Sentinel for "field not sent" on partial updates
UNSET = object()


def fair_summary(doc: DocumentSnapshot) -> Dict[str, Any]:
    """Public list view of a fair (no invite code)."""
    return {
        "id": doc.id,
        "name": doc.get("name"),
        "description": doc.get("description"),
        "isLive": doc.get("isLive") or False,
        "startTime": doc.get("startTime"),
        "endTime": doc.get("endTime"),
        "createdAt": doc.get("createdAt"),
    }


def fair_detail(doc: DocumentSnapshot) -> Dict[str, Any]:
    return {
        **fair_summary(doc),
        "inviteCode": doc.get("inviteCode"),
        "updatedAt": doc.get("updatedAt"),
    }


def _clean_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None


def _parse_time(value: Optional[str]) -> Optional[int]:
    return parse_utc_to_millis(value) if value else None


def _check_window(start: Optional[int], end: Optional[int]) -> None:
    if start is not None and end is not None and start >= end:
        raise ValidationError("startTime must be before endTime")


class FairService:
    def __init__(self, store: DocumentStore, gate: AccessControlGate, clock: Clock = now_millis):
        self.store = store
        self.gate = gate
        self.clock = clock

    # ------------------------------------------------------------
    # reads
    # ------------------------------------------------------------

    def list_fairs(self) -> List[Dict[str, Any]]:
        docs = self.store.query(keyspace.FAIRS, order_by=[("createdAt", "desc")])
        return [fair_summary(doc) for doc in docs]

    def get_fair_doc(self, fair_id: str) -> DocumentSnapshot:
        doc = self.store.get_document(keyspace.FAIRS, fair_id)
        if not doc.exists:
            raise NotFoundError("Fair not found")
        return doc

    def get_fair(self, fair_id: str) -> Dict[str, Any]:
        return fair_detail(self.get_fair_doc(fair_id))

    def find_by_invite_code(self, invite_code: str) -> Optional[DocumentSnapshot]:
        """First fair carrying this invite code, or None."""
        matches = self.store.query(
            keyspace.FAIRS, filters=[("inviteCode", "==", normalize_invite_code(invite_code))], limit=1
        )
        return matches[0] if matches else None

    # ------------------------------------------------------------
    # writes (administrator only)
    # ------------------------------------------------------------

    def create_fair(
        self,
        admin_uid: str,
        name: Optional[str],
        description: Optional[str] = None,
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
    ) -> Dict[str, Any]:
        self.gate.ensure_admin(admin_uid)

        if not name or not name.strip():
            raise ValidationError("Fair name is required")

        start, end = _parse_time(start_time), _parse_time(end_time)
        _check_window(start, end)

        now = self.clock()
        fair = {
            "name": name.strip(),
            "description": _clean_text(description),
            "isLive": False,
            "startTime": start,
            "endTime": end,
            "inviteCode": self._unique_invite_code(),
            "createdAt": now,
            "createdBy": admin_uid,
            "updatedAt": now,
            "updatedBy": admin_uid,
        }
        doc = self.store.add_document(keyspace.FAIRS, fair)
        logger.info("Fair %s created by %s", doc.id, admin_uid)
        return {"id": doc.id, **fair}

    def update_fair(
        self,
        admin_uid: str,
        fair_id: str,
        name: Any = UNSET,
        description: Any = UNSET,
        start_time: Any = UNSET,
        end_time: Any = UNSET,
    ) -> None:
        """Partial update; UNSET leaves a field alone, None clears it."""
        self.gate.ensure_admin(admin_uid)
        fair = self.get_fair_doc(fair_id)

        updates: Dict[str, Any] = {}
        if name is not UNSET:
            if not name or not name.strip():
                raise ValidationError("Fair name cannot be empty")
            updates["name"] = name.strip()
        if description is not UNSET:
            updates["description"] = _clean_text(description)
        if start_time is not UNSET:
            updates["startTime"] = _parse_time(start_time)
        if end_time is not UNSET:
            updates["endTime"] = _parse_time(end_time)

        _check_window(
            updates.get("startTime", fair.get("startTime")),
            updates.get("endTime", fair.get("endTime")),
        )

        updates["updatedAt"] = self.clock()
        updates["updatedBy"] = admin_uid
        self.store.update_document(keyspace.FAIRS, fair_id, updates)

    def toggle_status(self, admin_uid: str, fair_id: str) -> bool:
        """Flip the manual isLive flag; schedule fields are untouched."""
        self.gate.ensure_admin(admin_uid)
        fair = self.get_fair_doc(fair_id)

        is_live = not (fair.get("isLive") or False)
        self.store.update_document(keyspace.FAIRS, fair_id, {
            "isLive": is_live,
            "updatedAt": self.clock(),
            "updatedBy": admin_uid,
        })
        logger.info("Fair %s toggled %s by %s", fair_id, "live" if is_live else "offline", admin_uid)
        return is_live

    def refresh_invite_code(self, admin_uid: str, fair_id: str) -> str:
        self.gate.ensure_admin(admin_uid)
        self.get_fair_doc(fair_id)

        code = self._unique_invite_code()
        self.store.update_document(keyspace.FAIRS, fair_id, {
            "inviteCode": code,
            "updatedAt": self.clock(),
            "updatedBy": admin_uid,
        })
        logger.info("Invite code rotated for fair %s", fair_id)
        return code

    def delete_fair(self, admin_uid: str, fair_id: str) -> None:
        """
        Delete a fair and everything scoped under it.

        Each sub-collection is cleared in its own batch; a failure part-way
        leaves the fair with partially cleaned children and is reported as a
        DependencyError. Re-running the delete finishes the job.
        """
        self.gate.ensure_admin(admin_uid)
        self.get_fair_doc(fair_id)

        for name in keyspace.FAIR_SUBCOLLECTIONS:
            path = keyspace.fair_collection(fair_id, name)
            try:
                docs = self.store.query(path)
                if docs:
                    batch = self.store.batch()
                    for doc in docs:
                        batch.delete(path, doc.id)
                    batch.commit()
            except DependencyError:
                logger.exception("Cascade delete of %s failed for fair %s", name, fair_id)
                raise

        self.store.delete_document(keyspace.FAIRS, fair_id)
        logger.info("Fair %s deleted by %s", fair_id, admin_uid)

    # ------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------

    def _unique_invite_code(self) -> str:
        """Generate a code no existing fair carries."""
        settings = get_settings()
        for _ in range(settings.invite_code_max_attempts):
            code = generate_invite_code(settings.invite_code_length)
            if self.find_by_invite_code(code) is None:
                return code
        raise ConflictError("Could not generate a unique invite code")
