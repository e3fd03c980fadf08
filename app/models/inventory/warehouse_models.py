import uuid

from sqlalchemy import Column, String, Boolean, Index
from app.core.db import Base
from app.models.base.mixins import TimestampMixin


class Warehouse(Base, TimestampMixin):
    """A warehouse owning one location tree. Provisioned with zero locations."""

    __tablename__ = "warehouses"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    code = Column(String(50), nullable=False, unique=True, index=True)
    name = Column(String(100), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    __table_args__ = (Index("ix_warehouse_active", "is_active"),)

    def __repr__(self):
        return f"<Warehouse id={self.id} code={self.code}>"
