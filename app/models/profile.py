"""
Lunchbox API - Profile ORM Model.

Per-user attributes layered on top of the identity provider's principal.
"""

from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, CheckConstraint

from app.database import Base


ROLES = ("staff", "catering", "admin")
LUNCH_SESSIONS = ("12:30", "13:00")


class Profile(Base):
    """
    Profile model, one row per principal.

    The primary key is the identity provider's user id, so the row is
    created lazily the first time a request touches it.

    Attributes:
        id: Principal id issued by the identity provider.
        name: Display name shown on kitchen rosters.
        role: Access tier (staff/catering/admin), defaults to staff.
        location_id: Opaque id of the user's usual location.
        lunch_session: Preferred sitting ("12:30", "13:00") or None.
        created_at: Row creation timestamp.
        updated_at: Last update timestamp.
    """

    __tablename__ = "profiles"
    __table_args__ = (
        CheckConstraint(
            "role IN ('staff', 'catering', 'admin')",
            name="ck_profiles_role"
        ),
    )

    id = Column(String(36), primary_key=True)
    name = Column(String(255), nullable=True)
    role = Column(String(20), nullable=False, default="staff", server_default="staff")
    location_id = Column(String(36), nullable=True)
    lunch_session = Column(String(5), nullable=True)  # "12:30", "13:00"

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
            "role": self.role or "staff",
            "locationId": self.location_id,
            "lunchSession": self.lunch_session,
        }

    def __repr__(self) -> str:
        """String representation of Profile."""
        return f"<Profile(id={self.id}, role={self.role})>"
