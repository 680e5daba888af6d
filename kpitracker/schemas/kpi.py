from pydantic import BaseModel, Field
from typing import Literal, Optional

ValueKind = Literal["count", "delivered"]

class KPIDefinition(BaseModel):
    id: Optional[int] = None
    key: str = Field(..., min_length=1)
    display_label: str
    value_kind: ValueKind = "count"
    unit: Optional[str] = None
    is_active: bool = True

    model_config = {"from_attributes": True}

    @property
    def is_delivered(self) -> bool:
        return self.value_kind == "delivered"
