"""
Company Snapshot Builder

Projects a company and its global booth into the flat profile that gets
forked into a fair on enrollment. Booth values win when present; the
company record is the fallback. Pure read.
"""

from app.core.errors import NotFoundError
from app.db import keyspace
from app.db.document_store import DocumentStore
from app.models import BoothSnapshot, CompanySnapshot, BOOTH_PROFILE_FIELDS


class CompanySnapshotBuilder:
    def __init__(self, store: DocumentStore):
        self.store = store

    def build(self, company_id: str) -> CompanySnapshot:
        company_doc = self.store.get_document(keyspace.COMPANIES, company_id)
        if not company_doc.exists:
            raise NotFoundError("Company not found")

        company = company_doc.data
        booth = {}
        if company.get("boothId"):
            booth_doc = self.store.get_document(keyspace.BOOTHS, company["boothId"])
            if booth_doc.exists:
                booth = booth_doc.data

        profile = {
            field: booth.get(field) or company.get(field) or None
            for field in BOOTH_PROFILE_FIELDS
        }
        snapshot = BoothSnapshot(
            companyId=company_id,
            companyName=booth.get("companyName") or company.get("companyName") or "",
            **profile,
        )
        return CompanySnapshot(company_id=company_id, company=company, booth=snapshot)
