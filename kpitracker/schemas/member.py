from pydantic import AliasChoices, BaseModel, EmailStr, Field
from typing import Optional

class TeamMember(BaseModel):
    id: int
    name: str
    email: Optional[EmailStr] = None
    # older rows call this "role"
    designation: str = Field(..., validation_alias=AliasChoices("designation", "role"))
    status: str = "active"  # "active" or "inactive"

    model_config = {"from_attributes": True}

    @property
    def is_active(self) -> bool:
        return self.status == "active"
