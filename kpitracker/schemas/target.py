from pydantic import AliasChoices, BaseModel, Field
from typing import Literal, Optional

TargetSource = Literal["user", "designation", "none"]

class DesignationTarget(BaseModel):
    designation: str = Field(..., validation_alias=AliasChoices("designation", "role"))
    kpi_key: str
    monthly_target: float = 0
    annual_target: float = 0

    model_config = {"from_attributes": True}

class UserTarget(BaseModel):
    member_id: int
    kpi_key: str
    monthly_target: float = 0
    annual_target: float = 0
    is_active: bool = True

    model_config = {"from_attributes": True}

class EffectiveTarget(BaseModel):
    kpi_key: str
    monthly_target: float = 0
    annual_target: float = 0
    source: TargetSource = "none"

    @property
    def is_tracked(self) -> bool:
        return self.source != "none"


# Write payloads: annual_target may be omitted and is then derived.

class DesignationTargetIn(BaseModel):
    designation: str = Field(..., min_length=1, validation_alias=AliasChoices("designation", "role"))
    kpi_key: str = Field(..., min_length=1)
    monthly_target: int = Field(..., ge=0)
    annual_target: Optional[int] = Field(None, ge=0)

class UserTargetIn(BaseModel):
    member_id: int
    kpi_key: str = Field(..., min_length=1)
    monthly_target: int = Field(..., ge=0)
    annual_target: Optional[int] = Field(None, ge=0)
    is_active: bool = True

class TargetResponse(BaseModel):
    id: int
    kpi_key: str
    monthly_target: int
    annual_target: int
    source: TargetSource
