"""
Lunchbox API - MenuItem ORM Model.

Catalog of dishes that can be offered on a day and picked by staff.
"""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import Boolean, Column, DateTime, Index, String

from app.database import Base


CATEGORIES = (
    "hot",
    "cold_main",
    "cold_side",
    "cold_extra",
    "snack_crisps",
    "snack_fruit",
)


class MenuItem(Base):
    """
    MenuItem model for the dish catalog.

    Items are archived (active=False) rather than deleted so existing plan
    lines keep pointing at them. Names are unique case-insensitively among
    active items; the catalog service enforces this.

    Attributes:
        id: Unique identifier (UUID string).
        name: Dish name as shown to staff.
        category: One of CATEGORIES.
        active: False once archived.
    """

    __tablename__ = "menu_items"
    __table_args__ = (
        Index("ix_menu_items_category_name", "category", "name"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    name = Column(String(200), nullable=False)
    category = Column(String(20), nullable=False, default="hot")
    active = Column(Boolean, nullable=False, default=True)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc)
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc)
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "active": bool(self.active),
        }

    def __repr__(self) -> str:
        """String representation of MenuItem."""
        return f"<MenuItem(id={self.id}, name={self.name}, active={self.active})>"
