from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime

from app.core.config import LAYOUT_MAX_COMPONENTS
from app.constants.locations import LAYOUT_DOCUMENT_VERSION
from app.models.enums.layout_component_type import LayoutComponentType
from app.models.enums.layout_skip_reason import LayoutSkipReason


class LayoutComponent(BaseModel):
    id: str = Field(..., min_length=1)
    type: LayoutComponentType
    name: str = Field(..., min_length=1, max_length=100)
    x: float
    y: float
    width: float = Field(gt=0)
    height: float = Field(gt=0)
    color: Optional[str] = None
    # editor grouping only, not used when generating locations
    parent_id: Optional[str] = Field(None, alias="parentId")

    class Config:
        populate_by_name = True


class WarehouseLayoutDocument(BaseModel):
    version: str = LAYOUT_DOCUMENT_VERSION
    components: List[LayoutComponent] = Field(default_factory=list)


class WarehouseLayoutSave(BaseModel):
    components: List[LayoutComponent] = Field(
        default_factory=list, max_length=LAYOUT_MAX_COMPONENTS
    )

    @field_validator("components")
    @classmethod
    def unique_component_ids(cls, components: List[LayoutComponent]):
        seen = set()
        for component in components:
            if component.id in seen:
                raise ValueError(f"Duplicate component id: {component.id}")
            seen.add(component.id)
        return components


class WarehouseLayoutOut(BaseModel):
    warehouse_id: str
    version: str
    components: List[LayoutComponent]
    updated_at: Optional[datetime] = None


class SkippedComponent(BaseModel):
    id: str
    type: LayoutComponentType
    name: str
    reason: LayoutSkipReason


class LayoutCompileResult(BaseModel):
    zones_created: int = 0
    aisles_created: int = 0
    bins_created: int = 0
    skipped: List[SkippedComponent] = Field(default_factory=list)
