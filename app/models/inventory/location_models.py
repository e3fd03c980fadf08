import uuid

from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    Boolean,
    JSON,
    ForeignKey,
    CheckConstraint,
    UniqueConstraint,
    Index,
)
from app.core.db import Base
from app.models.base.mixins import TimestampMixin


class Location(Base, TimestampMixin):
    """
    One node of a warehouse location tree: zone (depth 0), aisle (1) or bin (2).

    Self-referencing through ``parent_id``; children are never stored on the
    row, the adjacency is rebuilt when presenting the tree. ``zone`` and
    ``aisle`` are copied down from the ancestors on insert.
    """

    __tablename__ = "locations"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    warehouse_id = Column(String(36), ForeignKey("warehouses.id", ondelete="RESTRICT"), nullable=False, index=True)
    parent_id = Column(String(36), ForeignKey("locations.id", ondelete="RESTRICT"), nullable=True, index=True)

    depth = Column(Integer, nullable=False)
    code = Column(String(160), nullable=False)
    path = Column(String(160), nullable=False)

    zone = Column(String(50), nullable=False)
    aisle = Column(String(50), nullable=True)
    bin_code = Column(String(50), nullable=True)

    description = Column(Text, nullable=True)
    attributes = Column(JSON, nullable=False, default=dict)
    is_active = Column(Boolean, default=True, nullable=False)
    version = Column(Integer, nullable=False, default=1)

    __table_args__ = (
        UniqueConstraint("warehouse_id", "code", name="uq_location_warehouse_code"),
        CheckConstraint("depth >= 0 AND depth <= 2", name="ck_location_depth_range"),
        CheckConstraint(
            "(depth = 0 AND parent_id IS NULL) OR (depth > 0 AND parent_id IS NOT NULL)",
            name="ck_location_root_parent",
        ),
        Index("ix_location_warehouse_path", "warehouse_id", "path"),
        Index("ix_location_cascade", "warehouse_id", "zone", "aisle", "is_active"),
    )

    def __repr__(self):
        return f"<Location id={self.id} code={self.code} depth={self.depth} active={self.is_active}>"
