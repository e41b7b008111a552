from pydantic import BaseModel, Field

from qualifications.schemas.activities import ActivityOut


class SubjectCreateRequest(BaseModel):
    code: str = Field(..., min_length=1, max_length=10)
    name: str = Field(..., min_length=1, max_length=255)


class SubjectUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)


class QualificationOut(BaseModel):
    id: str
    cort: int
    total: float
    total_activities_percent: float
    activities: list[ActivityOut]

    model_config = {"from_attributes": True}


class SubjectOut(BaseModel):
    code: str
    name: str
    owner_id: str
    definitive: float
    qualifications: list[QualificationOut]

    model_config = {"from_attributes": True}
