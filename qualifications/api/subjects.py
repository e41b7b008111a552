from fastapi import APIRouter, Depends, status

from qualifications.api.deps import get_current_user, get_qualification_service
from qualifications.models.user import User
from qualifications.schemas.subjects import SubjectCreateRequest, SubjectOut, SubjectUpdateRequest
from qualifications.services.grading import QualificationService

router = APIRouter(prefix="/subjects", tags=["subjects"])


@router.post("", response_model=SubjectOut, status_code=status.HTTP_201_CREATED)
def create_subject(
    payload: SubjectCreateRequest,
    user: User = Depends(get_current_user),
    service: QualificationService = Depends(get_qualification_service),
):
    return service.create_subject(owner_id=user.id, code=payload.code, name=payload.name)


@router.get("", response_model=list[SubjectOut])
def list_subjects(
    user: User = Depends(get_current_user),
    service: QualificationService = Depends(get_qualification_service),
):
    return service.list_subjects(owner_id=user.id)


@router.get("/{code}", response_model=SubjectOut)
def subject_details(
    code: str,
    user: User = Depends(get_current_user),
    service: QualificationService = Depends(get_qualification_service),
):
    return service.get_subject(owner_id=user.id, code=code)


@router.patch("/{code}", response_model=SubjectOut)
def update_subject(
    code: str,
    payload: SubjectUpdateRequest,
    user: User = Depends(get_current_user),
    service: QualificationService = Depends(get_qualification_service),
):
    return service.update_subject(owner_id=user.id, code=code, name=payload.name)


@router.delete("/{code}", response_model=SubjectOut)
def delete_subject(
    code: str,
    user: User = Depends(get_current_user),
    service: QualificationService = Depends(get_qualification_service),
):
    return service.delete_subject(owner_id=user.id, code=code)
