"""
Company Routes

GET /companies/{company_id}/fairs - Fairs a company is enrolled in (admin or company)
"""

from fastapi import APIRouter, Depends

from app.api.deps import get_enrollment_service
from app.core.auth import get_current_user
from app.models import CurrentUser
from app.services.enrollment_service import EnrollmentService
from app.schemas.schemas import CompanyFairsResponse

router = APIRouter(prefix="/companies", tags=["Companies"])


@router.get("/{company_id}/fairs", response_model=CompanyFairsResponse)
def get_company_fairs(
    company_id: str,
    user: CurrentUser = Depends(get_current_user),
    enrollments: EnrollmentService = Depends(get_enrollment_service),
):
    """Looks across every fair's enrollments, not just live ones."""
    return {"fairs": enrollments.company_fairs(company_id, user.uid)}
