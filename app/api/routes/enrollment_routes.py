"""
Enrollment Routes

GET /fairs/my-enrollments - Fairs the caller's company is in
POST /fairs/{fair_id}/enroll - Enroll a company (by companyId or inviteCode)
GET /fairs/{fair_id}/enrollments - List enrollments (admin)
DELETE /fairs/{fair_id}/enrollments/{company_id} - Remove a company (admin)
DELETE /fairs/{fair_id}/leave - Leave a fair (company owner/rep)
GET /fairs/{fair_id}/company/{company_id}/booth - Company's booth in a fair
"""

from fastapi import APIRouter, Depends

from app.api.deps import get_enrollment_service
from app.core.auth import get_current_user
from app.models import CurrentUser
from app.services.enrollment_service import EnrollmentService
from app.schemas.schemas import (
    EnrollRequest, EnrollResponse, EnrollmentListResponse, MyEnrollmentsResponse, SuccessResponse
)

router = APIRouter(prefix="/fairs", tags=["Enrollments"])


# Declared before /fairs/{fair_id} (see app.api.routes)
@router.get("/my-enrollments", response_model=MyEnrollmentsResponse)
def my_enrollments(
    user: CurrentUser = Depends(get_current_user),
    enrollments: EnrollmentService = Depends(get_enrollment_service),
):
    return {"enrollments": enrollments.my_enrollments(user.uid)}


@router.post("/{fair_id}/enroll", response_model=EnrollResponse, status_code=201)
def enroll(
    fair_id: str,
    data: EnrollRequest,
    user: CurrentUser = Depends(get_current_user),
    enrollments: EnrollmentService = Depends(get_enrollment_service),
):
    """
    Enroll a company into a fair.

    With an invite code the fair is looked up by code (the path id is
    ignored) and the company defaults to the caller's own.
    """
    return enrollments.enroll(
        fair_id, user.uid, company_id=data.company_id, invite_code=data.invite_code
    )


@router.get("/{fair_id}/enrollments", response_model=EnrollmentListResponse)
def list_enrollments(
    fair_id: str,
    user: CurrentUser = Depends(get_current_user),
    enrollments: EnrollmentService = Depends(get_enrollment_service),
):
    return {"enrollments": enrollments.list_enrollments(fair_id, user.uid)}


@router.delete("/{fair_id}/enrollments/{company_id}", response_model=SuccessResponse)
def remove_enrollment(
    fair_id: str,
    company_id: str,
    user: CurrentUser = Depends(get_current_user),
    enrollments: EnrollmentService = Depends(get_enrollment_service),
):
    """Remove a company from a fair, with its booth copy and jobs."""
    enrollments.remove_enrollment(fair_id, company_id, user.uid)
    return SuccessResponse()


@router.delete("/{fair_id}/leave", response_model=SuccessResponse)
def leave_fair(
    fair_id: str,
    user: CurrentUser = Depends(get_current_user),
    enrollments: EnrollmentService = Depends(get_enrollment_service),
):
    enrollments.leave_fair(fair_id, user.uid)
    return SuccessResponse()


@router.get("/{fair_id}/company/{company_id}/booth")
def get_company_booth(
    fair_id: str,
    company_id: str,
    user: CurrentUser = Depends(get_current_user),
    enrollments: EnrollmentService = Depends(get_enrollment_service),
):
    return enrollments.company_booth(fair_id, company_id, user.uid)
