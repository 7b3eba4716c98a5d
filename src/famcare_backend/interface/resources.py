from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

from famcare_backend.model.enums import ResourceStatus, ResourceVisibility

class ResourceList(BaseModel):
    id: str = Field(description="Resource unique identifier")
    title: str = Field(description="Resource title")
    created_by: str = Field(description="User who created the resource")
    family_id: Optional[str] = Field(None, description="Family the resource belongs to")
    visibility: ResourceVisibility = Field(description="Sharing tier of the resource")
    status: ResourceStatus = Field(description="Publication status")
    is_system_generated: bool = Field(False, description="Template authored by staff")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)
