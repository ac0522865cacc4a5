"""
Fair Routes

GET /fairs - List fairs (public)
GET /fairs/{fair_id} - Fair detail (public)
GET /fairs/{fair_id}/status - Live status (public)
POST /fairs - Create fair (admin)
PUT /fairs/{fair_id} - Update fair (admin)
DELETE /fairs/{fair_id} - Delete fair and its booths/jobs/enrollments (admin)
POST /fairs/{fair_id}/toggle-status - Manual live toggle (admin)
POST /fairs/{fair_id}/refresh-invite-code - Rotate invite code (admin)
"""

from fastapi import APIRouter, Depends

from app.api.deps import get_fair_service, get_fair_status_evaluator
from app.core.auth import get_current_user
from app.models import CurrentUser
from app.services.fair_service import FairService
from app.services.fair_status import FairStatusEvaluator
from app.schemas.schemas import (
    FairCreate, FairUpdate, FairCreated, FairDetail, FairListResponse,
    FairStatusResponse, ToggleStatusResponse, InviteCodeResponse, SuccessResponse
)

router = APIRouter(prefix="/fairs", tags=["Fairs"])


@router.get("", response_model=FairListResponse)
def list_fairs(fairs: FairService = Depends(get_fair_service)):
    """List all fairs, newest first."""
    return {"fairs": fairs.list_fairs()}


@router.post("", response_model=FairCreated, status_code=201)
def create_fair(
    data: FairCreate,
    user: CurrentUser = Depends(get_current_user),
    fairs: FairService = Depends(get_fair_service),
):
    """Create a fair. It starts offline with a fresh invite code."""
    return fairs.create_fair(
        user.uid, data.name, data.description, data.start_time, data.end_time
    )


@router.get("/{fair_id}", response_model=FairDetail)
def get_fair(fair_id: str, fairs: FairService = Depends(get_fair_service)):
    return fairs.get_fair(fair_id)


@router.get("/{fair_id}/status", response_model=FairStatusResponse)
def get_fair_status(
    fair_id: str,
    evaluator: FairStatusEvaluator = Depends(get_fair_status_evaluator),
):
    """Manual override first, then the startTime/endTime window."""
    return evaluator.evaluate(fair_id).to_dict()


@router.put("/{fair_id}", response_model=SuccessResponse)
def update_fair(
    fair_id: str,
    data: FairUpdate,
    user: CurrentUser = Depends(get_current_user),
    fairs: FairService = Depends(get_fair_service),
):
    """Update name/description/schedule. Omitted fields are left unchanged."""
    fairs.update_fair(user.uid, fair_id, **data.model_dump(exclude_unset=True))
    return SuccessResponse()


@router.delete("/{fair_id}", response_model=SuccessResponse)
def delete_fair(
    fair_id: str,
    user: CurrentUser = Depends(get_current_user),
    fairs: FairService = Depends(get_fair_service),
):
    fairs.delete_fair(user.uid, fair_id)
    return SuccessResponse()


@router.post("/{fair_id}/toggle-status", response_model=ToggleStatusResponse)
def toggle_status(
    fair_id: str,
    user: CurrentUser = Depends(get_current_user),
    fairs: FairService = Depends(get_fair_service),
):
    return {"isLive": fairs.toggle_status(user.uid, fair_id)}


@router.post("/{fair_id}/refresh-invite-code", response_model=InviteCodeResponse)
def refresh_invite_code(
    fair_id: str,
    user: CurrentUser = Depends(get_current_user),
    fairs: FairService = Depends(get_fair_service),
):
    return {"inviteCode": fairs.refresh_invite_code(user.uid, fair_id)}
