"""
Fair-scoped booths and jobs.

Public reads go through the liveness gate (admins bypass it). Writes need
admin OR owner/representative access to the company that owns the booth or
job. Edits touch only the fair copy; the global booth/job and other fairs'
copies are never updated from here.
"""

from typing import Any, Dict, List, Optional

from app.core.errors import NotFoundError, ValidationError
from app.db import keyspace
from app.db.document_store import DocumentStore
from app.models import BOOTH_PROFILE_FIELDS
from app.services.access_control import AccessControlGate
from app.services.fair_service import FairService
from app.services.fair_status import FairStatusEvaluator
from app.utils.timeutils import Clock, now_millis

BOOTH_EDITABLE_FIELDS = ("companyName",) + BOOTH_PROFILE_FIELDS
JOB_EDITABLE_FIELDS = ("name", "description", "majorsAssociated", "applicationLink")


class FairResourceService:
    def __init__(
        self,
        store: DocumentStore,
        gate: AccessControlGate,
        status: FairStatusEvaluator,
        fairs: FairService,
        clock: Clock = now_millis,
    ):
        self.store = store
        self.gate = gate
        self.status = status
        self.fairs = fairs
        self.clock = clock

    # ------------------------------------------------------------
    # BOOTHS
    # ------------------------------------------------------------

    def list_booths(self, fair_id: str, uid: Optional[str]) -> List[Dict[str, Any]]:
        self.status.ensure_visible(fair_id, uid, self.gate)
        docs = self.store.query(keyspace.fair_booths(fair_id), order_by=["companyName"])
        return [doc.to_dict() for doc in docs]

    def get_booth(self, fair_id: str, booth_id: str, uid: Optional[str]) -> Dict[str, Any]:
        self.status.ensure_visible(fair_id, uid, self.gate)
        booth = self.store.get_document(keyspace.fair_booths(fair_id), booth_id)
        if not booth.exists:
            raise NotFoundError("Booth not found")
        return booth.to_dict()

    def update_booth(self, fair_id: str, booth_id: str, uid: str, changes: Dict[str, Any]) -> None:
        path = keyspace.fair_booths(fair_id)
        booth = self.store.get_document(path, booth_id)
        if not booth.exists:
            raise NotFoundError("Booth not found")

        self.gate.ensure_admin_or_company_access(uid, booth.get("companyId"))

        updates = {k: v for k, v in changes.items() if k in BOOTH_EDITABLE_FIELDS}
        updates["updatedAt"] = self.clock()
        self.store.update_document(path, booth_id, updates)

    # ------------------------------------------------------------
    # JOBS
    # ------------------------------------------------------------

    def list_jobs(self, fair_id: str, uid: Optional[str], company_id: Optional[str] = None) -> List[Dict[str, Any]]:
        self.status.ensure_visible(fair_id, uid, self.gate)
        filters = [("companyId", "==", company_id)] if company_id else []
        docs = self.store.query(keyspace.fair_jobs(fair_id), filters=filters)
        return [doc.to_dict() for doc in docs]

    def add_job(
        self,
        fair_id: str,
        uid: str,
        company_id: Optional[str],
        name: Optional[str],
        description: Optional[str] = None,
        majors_associated: Optional[str] = None,
        application_link: Optional[str] = None,
    ) -> Dict[str, Any]:
        if not company_id:
            raise ValidationError("companyId is required")
        if not name or not name.strip():
            raise ValidationError("Job name is required")

        self.fairs.get_fair_doc(fair_id)
        self.gate.ensure_admin_or_company_access(uid, company_id)

        job = {
            "companyId": company_id,
            "name": name.strip(),
            "description": description.strip() if description else None,
            "majorsAssociated": majors_associated or None,
            "applicationLink": application_link or None,
            "createdAt": self.clock(),
        }
        doc = self.store.add_document(keyspace.fair_jobs(fair_id), job)
        return {"id": doc.id, **job}

    def update_job(self, fair_id: str, job_id: str, uid: str, changes: Dict[str, Any]) -> None:
        path = keyspace.fair_jobs(fair_id)
        job = self.store.get_document(path, job_id)
        if not job.exists:
            raise NotFoundError("Job not found")

        self.gate.ensure_admin_or_company_access(uid, job.get("companyId"))

        updates = {k: v for k, v in changes.items() if k in JOB_EDITABLE_FIELDS}
        updates["updatedAt"] = self.clock()
        self.store.update_document(path, job_id, updates)

    def delete_job(self, fair_id: str, job_id: str, uid: str) -> None:
        path = keyspace.fair_jobs(fair_id)
        job = self.store.get_document(path, job_id)
        if not job.exists:
            raise NotFoundError("Job not found")

        self.gate.ensure_admin_or_company_access(uid, job.get("companyId"))
        self.store.delete_document(path, job_id)
