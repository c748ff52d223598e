"""
Lunchbox API - Plan ORM Models.

A Plan is one user's order header for a (date, location); PlanLine rows are
the items picked for that day.
"""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import Column, Date, DateTime, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import relationship

from app.database import Base


class Plan(Base):
    """
    Plan header, unique per (user_id, date, location_id).

    Attributes:
        id: Unique identifier (UUID string).
        user_id: Principal id of the owner.
        date: Day the order is for.
        location_id: Opaque location id.
        created_at: Header creation timestamp.
    """

    __tablename__ = "plans"
    __table_args__ = (
        UniqueConstraint("user_id", "date", "location_id", name="uq_plans_user_date_location"),
        Index("ix_plans_location_date", "location_id", "date"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(String(36), nullable=False, index=True)
    date = Column(Date, nullable=False)
    location_id = Column(String(36), nullable=False)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc)
    )

    lines = relationship(
        "PlanLine",
        back_populates="plan",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    def __repr__(self) -> str:
        """String representation of Plan."""
        return f"<Plan(id={self.id}, user={self.user_id}, date={self.date})>"


class PlanLine(Base):
    """
    One selected item for a plan's day.

    A hot choice is one line; a cold bundle is three (main, side, extra).
    """

    __tablename__ = "plan_lines"
    __table_args__ = (
        Index("ix_plan_lines_plan_date", "plan_id", "date"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    plan_id = Column(
        String(36),
        ForeignKey("plans.id", ondelete="CASCADE"),
        nullable=False
    )
    date = Column(Date, nullable=False, index=True)
    item_id = Column(
        String(36),
        ForeignKey("menu_items.id", ondelete="RESTRICT"),
        nullable=False,
        index=True
    )

    plan = relationship("Plan", back_populates="lines")
    item = relationship("MenuItem")

    def __repr__(self) -> str:
        return f"<PlanLine(plan={self.plan_id}, date={self.date}, item={self.item_id})>"
