from fastapi import APIRouter, Depends

from qualifications.api.deps import get_current_user, get_qualification_service
from qualifications.models.user import User
from qualifications.schemas.subjects import QualificationOut
from qualifications.services.grading import QualificationService

router = APIRouter(prefix="/qualifications", tags=["qualifications"])


@router.get("/{qualification_id}", response_model=QualificationOut)
def qualification_details(
    qualification_id: str,
    user: User = Depends(get_current_user),
    service: QualificationService = Depends(get_qualification_service),
):
    return service.get_qualification(owner_id=user.id, qualification_id=qualification_id)
