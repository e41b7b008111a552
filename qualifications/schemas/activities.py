from decimal import Decimal

from pydantic import BaseModel, Field


class ActivityCreateRequest(BaseModel):
    qualification_id: str = Field(..., min_length=1, max_length=36)
    name: str | None = Field(default=None, max_length=255)
    percent: Decimal = Field(..., ge=0, le=100, max_digits=5, decimal_places=2)
    score: Decimal = Field(..., ge=0, max_digits=6, decimal_places=2)


class ActivityUpdateRequest(BaseModel):
    name: str | None = Field(default=None, max_length=255)
    percent: Decimal | None = Field(default=None, ge=0, le=100, max_digits=5, decimal_places=2)
    score: Decimal | None = Field(default=None, ge=0, max_digits=6, decimal_places=2)


class ActivityOut(BaseModel):
    id: str
    qualification_id: str
    name: str | None
    percent: float
    score: float

    model_config = {"from_attributes": True}
