from pydantic import BaseModel, Field
from typing import Optional, List, Any, Dict
from datetime import datetime

from app.core.config import AISLE_MAX_LEVELS
from app.models.enums.location_depth import LocationDepth


# -------------------------
# INTERNAL INSERT CANDIDATE
# -------------------------
class LocationCandidate(BaseModel):
    warehouse_id: str
    depth: LocationDepth
    label: str
    parent_id: Optional[str] = None
    description: Optional[str] = None
    attributes: Dict[str, Any] = Field(default_factory=dict)
    # code computed by the client for confirmation
    expected_code: Optional[str] = None


# -------------------------
# MANUAL CONSTRUCTORS
# -------------------------
class ZoneCreate(BaseModel):
    zone: str = Field(..., min_length=1, max_length=50)
    code: Optional[str] = None
    description: Optional[str] = Field(None, max_length=500)


class AisleCreate(BaseModel):
    parent_id: str
    aisle: str = Field(..., min_length=1, max_length=50)
    levels: int = Field(1, ge=1, le=AISLE_MAX_LEVELS)
    prepopulate_levels: bool = True
    code: Optional[str] = None
    description: Optional[str] = Field(None, max_length=500)


class BinCreate(BaseModel):
    parent_id: str
    bin_code: str = Field(..., min_length=1, max_length=50)
    code: Optional[str] = None
    description: Optional[str] = Field(None, max_length=500)
    attributes: Dict[str, Any] = Field(default_factory=dict)


class CodePreviewRequest(BaseModel):
    depth: LocationDepth
    label: str = Field(..., min_length=1, max_length=50)
    parent_id: Optional[str] = None


class CodePreviewOut(BaseModel):
    code: str
    path: str
    zone: str
    aisle: Optional[str]
    bin_code: Optional[str]


# -------------------------
# MAINTENANCE
# -------------------------
class LocationUpdate(BaseModel):
    description: Optional[str] = Field(None, max_length=500)
    version: int


class LocationFilter(BaseModel):
    depth: Optional[LocationDepth] = None
    parent_id: Optional[str] = None
    zone: Optional[str] = None
    aisle: Optional[str] = None
    active_only: bool = False


# -------------------------
# OUTPUT
# -------------------------
class LocationOut(BaseModel):
    id: str
    warehouse_id: str
    parent_id: Optional[str]
    depth: int
    code: str
    path: str

    zone: str
    aisle: Optional[str]
    bin_code: Optional[str]

    description: Optional[str]
    attributes: Dict[str, Any]
    is_active: bool
    version: int

    created_at: datetime
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True


class AisleCreateOut(BaseModel):
    aisle: LocationOut
    levels: List[LocationOut]


class LocationListData(BaseModel):
    total: int
    items: List[LocationOut]


class LocationTreeNode(BaseModel):
    location: LocationOut
    children: List["LocationTreeNode"] = Field(default_factory=list)


LocationTreeNode.model_rebuild()


# -------------------------
# CASCADING RESOLVER
# -------------------------
class LevelOption(BaseModel):
    id: str
    code: str
    level: str
