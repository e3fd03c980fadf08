from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class WarehouseCreate(BaseModel):
    code: str = Field(..., min_length=2, max_length=50)
    name: str = Field(..., min_length=2, max_length=100)


class WarehouseOut(BaseModel):
    id: str
    code: str
    name: str
    is_active: bool

    created_at: datetime
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True


class WarehouseListData(BaseModel):
    total: int
    items: List[WarehouseOut]
