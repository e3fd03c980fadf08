from sqlalchemy import Column, Integer, String, JSON, ForeignKey
from app.core.db import Base
from app.models.base.mixins import TimestampMixin


class WarehouseLayout(Base, TimestampMixin):
    """Current 2D layout document of a warehouse. One row per warehouse."""

    __tablename__ = "warehouse_layouts"

    id = Column(Integer, primary_key=True)
    warehouse_id = Column(String(36), ForeignKey("warehouses.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)
    layout_data = Column(JSON, nullable=False)

    def __repr__(self):
        return f"<WarehouseLayout warehouse_id={self.warehouse_id}>"
