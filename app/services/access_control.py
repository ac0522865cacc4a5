"""
Access Control Gate

Two independent checks used by every mutating fair operation:
- verify_admin(uid): is the caller a platform administrator?
- verify_company_access(uid, company_id): is the caller the company's owner
  or one of its representatives?

Both return None when the check passes and an AccessDenied describing the
failure otherwise. Endpoints that accept either use
ensure_admin_or_company_access(), which runs both checks and only denies when
both fail.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from app.core.errors import (
    AppError, AuthorizationError, NotFoundError, ValidationError
)
from app.db import keyspace
from app.db.document_store import DocumentStore
from app.models import Role

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccessDenied:
    """Result of a failed check: message + HTTP-equivalent status."""
    error: str
    status: int

    def to_exception(self) -> AppError:
        if self.status == 400:
            return ValidationError(self.error)
        if self.status == 404:
            return NotFoundError(self.error)
        if self.status == 403:
            return AuthorizationError(self.error)
        return AppError(self.error, self.status)


def is_admin_role(role: Optional[Role]) -> bool:
    """Only administrators bypass company checks."""
    return role is Role.administrator


class AccessControlGate:
    """Resolves administrator and company-member permissions for a caller."""

    def __init__(self, store: DocumentStore):
        self.store = store

    def get_role(self, uid: Optional[str]) -> Optional[Role]:
        if not uid:
            return None
        user = self.store.get_document(keyspace.USERS, uid)
        if not user.exists:
            return None
        return Role.parse(user.get("role"))

    def is_admin(self, uid: Optional[str]) -> bool:
        return is_admin_role(self.get_role(uid))

    def verify_admin(self, uid: Optional[str]) -> Optional[AccessDenied]:
        if not uid:
            return AccessDenied("Missing userId", 400)

        user = self.store.get_document(keyspace.USERS, uid)
        if not user.exists:
            return AccessDenied("User not found", 404)

        if not is_admin_role(Role.parse(user.get("role"))):
            return AccessDenied("Only administrators can perform this action", 403)

        return None

    def verify_company_access(self, uid: Optional[str], company_id: Optional[str]) -> Optional[AccessDenied]:
        if not company_id:
            return AccessDenied("Company not found", 404)

        company = self.store.get_document(keyspace.COMPANIES, company_id)
        if not company.exists:
            return AccessDenied("Company not found", 404)

        is_owner = uid is not None and company.get("ownerId") == uid
        representatives = company.get("representativeIDs") or []
        is_rep = uid is not None and uid in representatives
        if not is_owner and not is_rep:
            return AccessDenied("Unauthorized: not an owner or representative of this company", 403)

        return None

    # ------------------------------------------------------------
    # raising variants used by the services
    # ------------------------------------------------------------

    def ensure_admin(self, uid: Optional[str]) -> None:
        denied = self.verify_admin(uid)
        if denied:
            raise denied.to_exception()

    def ensure_company_access(self, uid: Optional[str], company_id: Optional[str]) -> None:
        denied = self.verify_company_access(uid, company_id)
        if denied:
            raise denied.to_exception()

    def ensure_admin_or_company_access(self, uid: Optional[str], company_id: Optional[str]) -> None:
        """Allow when either check passes; 403 only when both fail."""
        admin_denied = self.verify_admin(uid)
        if admin_denied is None:
            return

        access_denied = self.verify_company_access(uid, company_id)
        if access_denied is None:
            return

        logger.info(
            "Denied uid=%s for company=%s (admin: %s, company: %s)",
            uid, company_id, admin_denied.error, access_denied.error,
        )
        raise AuthorizationError("Unauthorized: must be admin or company owner/rep")
