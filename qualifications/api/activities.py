from fastapi import APIRouter, Depends, HTTPException, status

from qualifications.api.deps import get_current_user, get_qualification_service
from qualifications.models.user import User
from qualifications.schemas.activities import ActivityCreateRequest, ActivityOut, ActivityUpdateRequest
from qualifications.services.grading import QualificationService

router = APIRouter(prefix="/activities", tags=["activities"])


@router.post("", response_model=ActivityOut, status_code=status.HTTP_201_CREATED)
def add_activity(
    payload: ActivityCreateRequest,
    user: User = Depends(get_current_user),
    service: QualificationService = Depends(get_qualification_service),
):
    outcome = service.add_activity(
        owner_id=user.id,
        qualification_id=payload.qualification_id,
        percent=payload.percent,
        score=payload.score,
        name=payload.name,
    )
    if not outcome.accepted:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=outcome.reason)
    return outcome.activity


@router.patch("/{activity_id}", response_model=ActivityOut)
def update_activity(
    activity_id: str,
    payload: ActivityUpdateRequest,
    user: User = Depends(get_current_user),
    service: QualificationService = Depends(get_qualification_service),
):
    outcome = service.update_activity(
        owner_id=user.id,
        activity_id=activity_id,
        percent=payload.percent,
        score=payload.score,
        name=payload.name,
    )
    if not outcome.accepted:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=outcome.reason)
    return outcome.activity


@router.delete("/{activity_id}", response_model=ActivityOut)
def delete_activity(
    activity_id: str,
    user: User = Depends(get_current_user),
    service: QualificationService = Depends(get_qualification_service),
):
    return service.delete_activity(owner_id=user.id, activity_id=activity_id)
