"""
Fair-scoped Booth & Job Routes

GET /fairs/{fair_id}/booths - List booths (live fairs, or admin)
GET /fairs/{fair_id}/booths/{booth_id} - Booth detail (live fairs, or admin)
PUT /fairs/{fair_id}/booths/{booth_id} - Edit fair booth copy (admin or company)
GET /fairs/{fair_id}/jobs - List jobs, optional ?companyId= (live fairs, or admin)
POST /fairs/{fair_id}/jobs - Add job to fair (admin or company)
PUT /fairs/{fair_id}/jobs/{job_id} - Edit fair job (admin or company)
DELETE /fairs/{fair_id}/jobs/{job_id} - Remove fair job (admin or company)
"""

from fastapi import APIRouter, Depends, Query
from typing import Optional

from app.api.deps import get_fair_resource_service
from app.core.auth import get_current_user, get_optional_user
from app.models import CurrentUser
from app.services.fair_resource_service import FairResourceService
from app.schemas.schemas import (
    BoothUpdate, BoothListResponse, FairJobCreate, FairJobUpdate, FairJobListResponse, SuccessResponse
)

router = APIRouter(prefix="/fairs", tags=["Fair Booths & Jobs"])


def _uid(user: Optional[CurrentUser]) -> Optional[str]:
    return user.uid if user else None


# ============================================================
# BOOTHS
# ============================================================

@router.get("/{fair_id}/booths", response_model=BoothListResponse)
def list_booths(
    fair_id: str,
    user: Optional[CurrentUser] = Depends(get_optional_user),
    resources: FairResourceService = Depends(get_fair_resource_service),
):
    """Booths ordered by company name. Students only see live fairs."""
    return {"booths": resources.list_booths(fair_id, _uid(user))}


@router.get("/{fair_id}/booths/{booth_id}")
def get_booth(
    fair_id: str,
    booth_id: str,
    user: Optional[CurrentUser] = Depends(get_optional_user),
    resources: FairResourceService = Depends(get_fair_resource_service),
):
    return resources.get_booth(fair_id, booth_id, _uid(user))


@router.put("/{fair_id}/booths/{booth_id}", response_model=SuccessResponse)
def update_booth(
    fair_id: str,
    booth_id: str,
    data: BoothUpdate,
    user: CurrentUser = Depends(get_current_user),
    resources: FairResourceService = Depends(get_fair_resource_service),
):
    """Edit this fair's booth copy only; the global booth is untouched."""
    resources.update_booth(fair_id, booth_id, user.uid, data.model_dump(exclude_unset=True, by_alias=True))
    return SuccessResponse()


# ============================================================
# JOBS
# ============================================================

@router.get("/{fair_id}/jobs", response_model=FairJobListResponse)
def list_jobs(
    fair_id: str,
    company_id: Optional[str] = Query(None, alias="companyId"),
    user: Optional[CurrentUser] = Depends(get_optional_user),
    resources: FairResourceService = Depends(get_fair_resource_service),
):
    return {"jobs": resources.list_jobs(fair_id, _uid(user), company_id)}


@router.post("/{fair_id}/jobs", status_code=201)
def add_job(
    fair_id: str,
    data: FairJobCreate,
    user: CurrentUser = Depends(get_current_user),
    resources: FairResourceService = Depends(get_fair_resource_service),
):
    return resources.add_job(
        fair_id, user.uid, data.company_id, data.name,
        description=data.description,
        majors_associated=data.majors_associated,
        application_link=data.application_link,
    )


@router.put("/{fair_id}/jobs/{job_id}", response_model=SuccessResponse)
def update_job(
    fair_id: str,
    job_id: str,
    data: FairJobUpdate,
    user: CurrentUser = Depends(get_current_user),
    resources: FairResourceService = Depends(get_fair_resource_service),
):
    resources.update_job(fair_id, job_id, user.uid, data.model_dump(exclude_unset=True, by_alias=True))
    return SuccessResponse()


@router.delete("/{fair_id}/jobs/{job_id}", response_model=SuccessResponse)
def delete_job(
    fair_id: str,
    job_id: str,
    user: CurrentUser = Depends(get_current_user),
    resources: FairResourceService = Depends(get_fair_resource_service),
):
    resources.delete_job(fair_id, job_id, user.uid)
    return SuccessResponse()
