"""
Enrollment Service - which company takes part in which fair.

A (fair, company) pair is either unenrolled or enrolled; there is no stored
in-between state.

ENROLL:
1. resolve the fair (invite code lookup or path id) and make sure it exists
2. resolve the company (explicit id or the caller's own profile)
3. authorize: admin OR owner/representative of the company
4. refuse a second enrollment for the pair
5. batch #1 (atomic): fair-scoped booth copy + enrollment record
6. batch #2 (best effort): copy the company's jobs into the fair

UNENROLL (admin remove or self-service leave):
1. batch #1 (atomic): delete enrollment + its booth copy
2. batch #2 (best effort): delete the company's jobs in the fair

Batch #2 runs separately from batch #1. If it fails the primary change is
already committed: the company IS enrolled (or removed), the error is logged
and reported as a 500, and retrying is safe.
"""

import logging
from typing import Any, Dict, List, Optional

from app.core.errors import ConflictError, DependencyError, NotFoundError, ValidationError
from app.db import keyspace
from app.db.document_store import DocumentSnapshot, DocumentStore, new_document_id
from app.models import CompanySnapshot, EnrollmentMethod
from app.services.access_control import AccessControlGate
from app.services.company_snapshot import CompanySnapshotBuilder
from app.services.fair_service import FairService
from app.utils.timeutils import Clock, now_millis

logger = logging.getLogger(__name__)


def enrollment_view(doc: DocumentSnapshot) -> Dict[str, Any]:
    return doc.to_dict()


class EnrollmentService:
    def __init__(
        self,
        store: DocumentStore,
        gate: AccessControlGate,
        fairs: FairService,
        snapshots: CompanySnapshotBuilder,
        clock: Clock = now_millis,
    ):
        self.store = store
        self.gate = gate
        self.fairs = fairs
        self.snapshots = snapshots
        self.clock = clock

    # ============================================================
    # ENROLL
    # ============================================================

    def enroll(
        self,
        fair_id: str,
        requesting_uid: str,
        company_id: Optional[str] = None,
        invite_code: Optional[str] = None,
    ) -> Dict[str, str]:
        """
        Enroll a company into a fair.

        Returns:
            {"boothId": <fair-scoped booth id>, "fairId": <resolved fair id>}
        """
        if not company_id and not invite_code:
            raise ValidationError("Either companyId or inviteCode is required")

        resolved_fair_id = self._resolve_fair_id(fair_id, invite_code)
        self.fairs.get_fair_doc(resolved_fair_id)

        resolved_company_id = self._resolve_company_id(requesting_uid, company_id)
        self.gate.ensure_admin_or_company_access(requesting_uid, resolved_company_id)

        existing = self.store.get_document(keyspace.fair_enrollments(resolved_fair_id), resolved_company_id)
        if existing.exists:
            raise ConflictError("Company is already enrolled in this fair")

        snapshot = self.snapshots.build(resolved_company_id)
        method = EnrollmentMethod.invite_code if invite_code else EnrollmentMethod.admin

        booth_id = self._create_enrollment_with_booth(resolved_fair_id, snapshot, requesting_uid, method)
        logger.info(
            "Company %s enrolled in fair %s by %s (%s)",
            resolved_company_id, resolved_fair_id, requesting_uid, method.value,
        )

        try:
            self.snapshot_company_jobs(resolved_fair_id, resolved_company_id)
        except DependencyError as e:
            logger.exception(
                "Company %s enrolled in fair %s but job copy failed", resolved_company_id, resolved_fair_id
            )
            raise DependencyError(f"Company enrolled, but copying its jobs failed: {e.message}") from e

        return {"boothId": booth_id, "fairId": resolved_fair_id}

    def _resolve_fair_id(self, fair_id: str, invite_code: Optional[str]) -> str:
        if not invite_code:
            return fair_id
        fair = self.fairs.find_by_invite_code(invite_code)
        if fair is None:
            raise ValidationError("Invalid invite code")
        return fair.id

    def _resolve_company_id(self, requesting_uid: str, company_id: Optional[str]) -> str:
        if company_id:
            return company_id

        user = self.store.get_document(keyspace.USERS, requesting_uid)
        if not user.exists:
            raise NotFoundError("User not found")

        resolved = user.get("companyId")
        if not resolved:
            raise ValidationError("User is not associated with a company")
        return resolved

    def _create_enrollment_with_booth(
        self,
        fair_id: str,
        snapshot: CompanySnapshot,
        enrolled_by: str,
        method: EnrollmentMethod,
    ) -> str:
        """Batch #1: booth copy and enrollment record, committed together."""
        booth_id = new_document_id()
        now = self.clock()

        batch = self.store.batch()
        batch.set(keyspace.fair_booths(fair_id), booth_id, {
            **snapshot.booth.to_dict(),
            "enrolledAt": now,
            "enrolledBy": enrolled_by,
        })
        batch.set(keyspace.fair_enrollments(fair_id), snapshot.company_id, {
            "companyId": snapshot.company_id,
            "companyName": snapshot.company_name,
            "enrolledAt": now,
            "enrolledBy": enrolled_by,
            "enrollmentMethod": method.value,
            "boothId": booth_id,
        })
        batch.commit()
        return booth_id

    def snapshot_company_jobs(self, fair_id: str, company_id: str) -> int:
        """
        Batch #2: copy the company's global jobs into the fair.

        Jobs already copied (same sourceJobId) are skipped, so re-running
        after a partial failure does not duplicate them. Returns the number
        of jobs copied.
        """
        source_jobs = self.store.query(keyspace.JOBS, filters=[("companyId", "==", company_id)])
        if not source_jobs:
            return 0

        fair_jobs_path = keyspace.fair_jobs(fair_id)
        already_copied = {
            doc.get("sourceJobId")
            for doc in self.store.query(fair_jobs_path, filters=[("companyId", "==", company_id)])
        }

        now = self.clock()
        batch = self.store.batch()
        for job in source_jobs:
            if job.id in already_copied:
                continue
            batch.set(fair_jobs_path, new_document_id(), {
                **job.data,
                "sourceJobId": job.id,
                "companyId": company_id,
                "createdAt": now,
            })

        copied = len(batch)
        batch.commit()
        return copied

    # ============================================================
    # UNENROLL
    # ============================================================

    def remove_enrollment(self, fair_id: str, company_id: str, admin_uid: str) -> None:
        """Administrator removes a company from a fair."""
        self.gate.ensure_admin(admin_uid)

        enrollment = self.store.get_document(keyspace.fair_enrollments(fair_id), company_id)
        if not enrollment.exists:
            raise NotFoundError("Enrollment not found")

        self._unenroll(fair_id, company_id, enrollment)
        logger.info("Company %s removed from fair %s by %s", company_id, fair_id, admin_uid)

    def leave_fair(self, fair_id: str, requesting_uid: str) -> None:
        """A company owner/representative takes their own company out of a fair."""
        user = self.store.get_document(keyspace.USERS, requesting_uid)
        if not user.exists:
            raise NotFoundError("User not found")

        company_id = user.get("companyId")
        if not company_id:
            raise ValidationError("You are not associated with a company")

        self.gate.ensure_company_access(requesting_uid, company_id)

        enrollment = self.store.get_document(keyspace.fair_enrollments(fair_id), company_id)
        if not enrollment.exists:
            raise NotFoundError("Your company is not enrolled in this fair")

        self._unenroll(fair_id, company_id, enrollment)
        logger.info("Company %s left fair %s (uid=%s)", company_id, fair_id, requesting_uid)

    def _unenroll(self, fair_id: str, company_id: str, enrollment: DocumentSnapshot) -> None:
        # Batch #1: enrollment + booth copy
        batch = self.store.batch()
        batch.delete(keyspace.fair_enrollments(fair_id), company_id)
        booth_id = enrollment.get("boothId")
        if booth_id:
            batch.delete(keyspace.fair_booths(fair_id), booth_id)
        batch.commit()

        # Batch #2: the company's jobs in this fair
        try:
            self.purge_company_jobs(fair_id, company_id)
        except DependencyError as e:
            logger.exception("Company %s unenrolled from fair %s but job cleanup failed", company_id, fair_id)
            raise DependencyError(f"Company unenrolled, but removing its jobs failed: {e.message}") from e

    def purge_company_jobs(self, fair_id: str, company_id: str) -> int:
        path = keyspace.fair_jobs(fair_id)
        jobs = self.store.query(path, filters=[("companyId", "==", company_id)])
        if not jobs:
            return 0

        batch = self.store.batch()
        for job in jobs:
            batch.delete(path, job.id)
        batch.commit()
        return len(jobs)

    # ============================================================
    # LOOKUPS
    # ============================================================

    def list_enrollments(self, fair_id: str, admin_uid: str) -> List[Dict[str, Any]]:
        self.gate.ensure_admin(admin_uid)
        docs = self.store.query(keyspace.fair_enrollments(fair_id))
        return [enrollment_view(doc) for doc in docs]

    def my_enrollments(self, requesting_uid: str) -> List[Dict[str, Any]]:
        """Fairs the caller's company is enrolled in; empty without a company."""
        user = self.store.get_document(keyspace.USERS, requesting_uid)
        if not user.exists:
            raise NotFoundError("User not found")

        company_id = user.get("companyId")
        if not company_id:
            return []

        enrollments = []
        for fair in self.store.query(keyspace.FAIRS):
            enrollment = self.store.get_document(keyspace.fair_enrollments(fair.id), company_id)
            if enrollment.exists:
                enrollments.append({
                    "fairId": fair.id,
                    "boothId": enrollment.get("boothId"),
                    "enrolledAt": enrollment.get("enrolledAt"),
                })
        return enrollments

    def company_fairs(self, company_id: str, requesting_uid: str) -> List[Dict[str, Any]]:
        """Every fair a company is enrolled in, via a collection-group query."""
        self.gate.ensure_admin_or_company_access(requesting_uid, company_id)

        fairs = []
        for enrollment in self.store.collection_group_query(
            keyspace.ENROLLMENTS, filters=[("companyId", "==", company_id)]
        ):
            fair_id = enrollment.parent_id
            fair = self.store.get_document(keyspace.FAIRS, fair_id)
            if not fair.exists:
                continue
            fairs.append({
                "id": fair_id,
                "name": fair.get("name"),
                "description": fair.get("description"),
                "isLive": fair.get("isLive") or False,
                "startTime": fair.get("startTime"),
                "endTime": fair.get("endTime"),
                "boothId": enrollment.get("boothId"),
                "enrolledAt": enrollment.get("enrolledAt"),
            })
        return fairs

    def company_booth(self, fair_id: str, company_id: str, requesting_uid: str) -> Dict[str, Any]:
        """The fair-scoped booth of an enrolled company."""
        self.gate.ensure_admin_or_company_access(requesting_uid, company_id)

        enrollment = self.store.get_document(keyspace.fair_enrollments(fair_id), company_id)
        if not enrollment.exists:
            raise NotFoundError("Company is not enrolled in this fair")

        booth_id = enrollment.get("boothId")
        if not booth_id:
            raise NotFoundError("No booth found for this enrollment")

        booth = self.store.get_document(keyspace.fair_booths(fair_id), booth_id)
        if not booth.exists:
            raise NotFoundError("Booth not found")

        return {"boothId": booth_id, **booth.data}
