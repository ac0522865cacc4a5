"""
Service providers for route injection.

Everything is built per request from two injected collaborators, the
document store and the clock, so tests can swap both through
app.dependency_overrides.
"""

from fastapi import Depends

from app.db.document_store import DocumentStore, get_document_store
from app.services.access_control import AccessControlGate
from app.services.company_snapshot import CompanySnapshotBuilder
from app.services.enrollment_service import EnrollmentService
from app.services.fair_resource_service import FairResourceService
from app.services.fair_service import FairService
from app.services.fair_status import FairStatusEvaluator
from app.utils.timeutils import Clock, get_clock


def get_access_gate(store: DocumentStore = Depends(get_document_store)) -> AccessControlGate:
    return AccessControlGate(store)


def get_fair_status_evaluator(
    store: DocumentStore = Depends(get_document_store),
    clock: Clock = Depends(get_clock),
) -> FairStatusEvaluator:
    return FairStatusEvaluator(store, clock)


def get_fair_service(
    store: DocumentStore = Depends(get_document_store),
    gate: AccessControlGate = Depends(get_access_gate),
    clock: Clock = Depends(get_clock),
) -> FairService:
    return FairService(store, gate, clock)


def get_enrollment_service(
    store: DocumentStore = Depends(get_document_store),
    gate: AccessControlGate = Depends(get_access_gate),
    fairs: FairService = Depends(get_fair_service),
    clock: Clock = Depends(get_clock),
) -> EnrollmentService:
    return EnrollmentService(store, gate, fairs, CompanySnapshotBuilder(store), clock)


def get_fair_resource_service(
    store: DocumentStore = Depends(get_document_store),
    gate: AccessControlGate = Depends(get_access_gate),
    status: FairStatusEvaluator = Depends(get_fair_status_evaluator),
    fairs: FairService = Depends(get_fair_service),
    clock: Clock = Depends(get_clock),
) -> FairResourceService:
    return FairResourceService(store, gate, status, fairs, clock)
