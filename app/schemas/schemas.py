"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
Python attributes are snake_case; the JSON contract is camelCase.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional, List, Any, Dict


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================
# COMMON
# ============================================================

class SuccessResponse(BaseModel):
    success: bool = True


class ErrorResponse(BaseModel):
    error: str


# ============================================================
# FAIR SCHEMAS
# ============================================================

class FairCreate(CamelModel):
    name: Optional[str] = Field(None, description="Fair display name (required, trimmed)")
    description: Optional[str] = None
    start_time: Optional[str] = Field(None, description="ISO-8601; no offset means UTC")
    end_time: Optional[str] = Field(None, description="ISO-8601; no offset means UTC")


class FairUpdate(CamelModel):
    """Only fields present in the body are changed; null clears a field."""
    name: Optional[str] = None
    description: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None


class FairSummary(CamelModel):
    id: str
    name: Optional[str] = None
    description: Optional[str] = None
    is_live: bool = False
    start_time: Optional[int] = Field(None, description="Epoch millis")
    end_time: Optional[int] = Field(None, description="Epoch millis")
    created_at: Optional[int] = None


class FairDetail(FairSummary):
    invite_code: Optional[str] = None
    updated_at: Optional[int] = None


class FairCreated(FairDetail):
    created_by: Optional[str] = None
    updated_by: Optional[str] = None


class FairListResponse(BaseModel):
    fairs: List[FairSummary]


class FairStatusResponse(CamelModel):
    is_live: bool
    source: str = Field(..., description="manual | schedule")
    name: Optional[str] = None
    description: Optional[str] = None


class ToggleStatusResponse(CamelModel):
    is_live: bool


class InviteCodeResponse(CamelModel):
    invite_code: str


# ============================================================
# ENROLLMENT SCHEMAS
# ============================================================

class EnrollRequest(CamelModel):
    company_id: Optional[str] = None
    invite_code: Optional[str] = None


class EnrollResponse(CamelModel):
    booth_id: str
    fair_id: str


class MyEnrollment(CamelModel):
    fair_id: str
    booth_id: Optional[str] = None
    enrolled_at: Optional[int] = None


class MyEnrollmentsResponse(BaseModel):
    enrollments: List[MyEnrollment]


class EnrollmentListResponse(BaseModel):
    enrollments: List[Dict[str, Any]]


class CompanyFair(CamelModel):
    id: str
    name: Optional[str] = None
    description: Optional[str] = None
    is_live: bool = False
    start_time: Optional[int] = None
    end_time: Optional[int] = None
    booth_id: Optional[str] = None
    enrolled_at: Optional[int] = None


class CompanyFairsResponse(BaseModel):
    fairs: List[CompanyFair]


# ============================================================
# FAIR-SCOPED BOOTH / JOB SCHEMAS
# ============================================================

class BoothUpdate(CamelModel):
    company_name: Optional[str] = None
    industry: Optional[str] = None
    company_size: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    logo_url: Optional[str] = None
    website: Optional[str] = None
    careers_page: Optional[str] = None
    contact_name: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    hiring_for: Optional[str] = None


class BoothListResponse(BaseModel):
    booths: List[Dict[str, Any]]


class FairJobCreate(CamelModel):
    company_id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    majors_associated: Optional[str] = None
    application_link: Optional[str] = None


class FairJobUpdate(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None
    majors_associated: Optional[str] = None
    application_link: Optional[str] = None


class FairJobListResponse(BaseModel):
    jobs: List[Dict[str, Any]]
