"""
Domain types shared by the services.

These are internal data structures; the API contract lives in
app.schemas.schemas.
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Optional, Dict, Any


class Role(str, Enum):
    """Closed set of user roles stored on user documents."""
    administrator = "administrator"
    company_owner = "companyOwner"
    representative = "representative"
    student = "student"

    @classmethod
    def parse(cls, value: Any) -> Optional["Role"]:
        """Map a stored role string to a Role; unknown or missing -> None."""
        try:
            return cls(value)
        except ValueError:
            return None


class EnrollmentMethod(str, Enum):
    admin = "admin"
    invite_code = "inviteCode"
    migration = "migration"


class StatusSource(str, Enum):
    manual = "manual"
    schedule = "schedule"


@dataclass(frozen=True)
class CurrentUser:
    """Identity returned by the auth verifier."""
    uid: str
    email: Optional[str] = None


@dataclass(frozen=True)
class FairStatus:
    is_live: bool
    source: StatusSource
    name: Optional[str] = None
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isLive": self.is_live,
            "source": self.source.value,
            "name": self.name,
            "description": self.description,
        }


# Fields copied from a global booth into a fair-scoped booth, and the
# fields a company may later edit on its fair copy.
BOOTH_PROFILE_FIELDS = (
    "industry",
    "companySize",
    "location",
    "description",
    "logoUrl",
    "website",
    "careersPage",
    "contactName",
    "contactEmail",
    "contactPhone",
    "hiringFor",
)


@dataclass
class BoothSnapshot:
    """
    Flat booth profile used to fork a fair-scoped booth.

    Every optional field is present (None when unknown) so a stored copy
    always carries the full field set.
    """
    companyId: str
    companyName: str = ""
    industry: Optional[str] = None
    companySize: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    logoUrl: Optional[str] = None
    website: Optional[str] = None
    careersPage: Optional[str] = None
    contactName: Optional[str] = None
    contactEmail: Optional[str] = None
    contactPhone: Optional[str] = None
    hiringFor: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class CompanySnapshot:
    company_id: str
    booth: BoothSnapshot
    company: Dict[str, Any] = field(default_factory=dict)

    @property
    def company_name(self) -> str:
        return self.company.get("companyName") or ""
