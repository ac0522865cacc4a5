"""
Models module - internal domain types.

Difference from schemas:
- Models: Internal data structures passed between services
- Schemas: API contract (what client sends/receives)
"""

from app.models.domain import (
    Role,
    EnrollmentMethod,
    StatusSource,
    CurrentUser,
    FairStatus,
    BoothSnapshot,
    CompanySnapshot,
    BOOTH_PROFILE_FIELDS,
)

__all__ = [
    "Role",
    "EnrollmentMethod",
    "StatusSource",
    "CurrentUser",
    "FairStatus",
    "BoothSnapshot",
    "CompanySnapshot",
    "BOOTH_PROFILE_FIELDS",
]
