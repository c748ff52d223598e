"""
Lunchbox API - Profile Service.

Per-user profile rows: lazy creation, merge-only self updates and the
admin-only role path.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models import Profile, ROLES
from app.services.identity import Principal
from app.utils.errors import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "staff"

# Fields a user may change about themselves
SELF_FIELDS = ("name", "location_id", "lunch_session")


def get_profile(db: Session, user_id: str) -> Optional[Profile]:
    """Get a profile by principal id, or None if it was never created."""
    return db.get(Profile, user_id)


def get_role(db: Session, user_id: str) -> str:
    """Stored role for a user, ``staff`` when there is no row."""
    role = db.scalar(select(Profile.role).where(Profile.id == user_id))
    return role or DEFAULT_ROLE


def ensure_profile(db: Session, user_id: str) -> Profile:
    """
    Insert an empty profile row if none exists.

    A concurrent request creating the same row is not an error: the
    duplicate insert is rolled back and the existing row returned.
    """
    profile = db.get(Profile, user_id)
    if profile is not None:
        return profile

    profile = Profile(id=user_id, role=DEFAULT_ROLE)
    db.add(profile)
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        profile = db.get(Profile, user_id)
        if profile is None:
            raise
    return profile


def ensure_admin(db: Session, user_id: str) -> Profile:
    """Idempotently give a master admin the admin role."""
    profile = ensure_profile(db, user_id)
    if profile.role != "admin":
        profile.role = "admin"
        logger.info(f"Master admin bypass promoted user {user_id} to admin")
    db.commit()
    return profile


def upsert_self(db: Session, user_id: str, changes: Mapping[str, Any]) -> bool:
    """
    Merge a self-service patch into the caller's profile.

    Only keys present in ``changes`` are written; an explicit None clears
    the field. The role can never be changed through this path.

    Args:
        db: Database session.
        user_id: Caller's principal id.
        changes: Snake-case field names to new values.

    Returns:
        bool: True if any field was written, False for an empty patch.

    Raises:
        ValidationError: If the patch names a field outside SELF_FIELDS.
    """
    unknown = set(changes) - set(SELF_FIELDS)
    if unknown:
        raise ValidationError(f"Cannot update field(s): {', '.join(sorted(unknown))}")

    profile = ensure_profile(db, user_id)
    for field, value in changes.items():
        setattr(profile, field, value)
    db.commit()

    if changes:
        logger.info(f"Profile {user_id} updated: {sorted(changes)}")
    return bool(changes)


def set_role(db: Session, user_id: str, role: str) -> Profile:
    """
    Set a user's role (admin-only path).

    Raises:
        ValidationError: If the role is not a known tier.
    """
    if role not in ROLES:
        raise ValidationError(f"role must be one of: {', '.join(ROLES)}")

    profile = ensure_profile(db, user_id)
    profile.role = role
    db.commit()
    logger.info(f"Role of user {user_id} set to {role}")
    return profile


def merge_users(principals: Iterable[Principal], rows: Iterable[Profile]) -> List[Dict[str, Any]]:
    """
    Combine identity-provider users with their profiles.

    Users without a profile row are reported with the default role.
    Output is sorted by email.
    """
    by_id = {p.id: p for p in rows}
    users = []
    for principal in principals:
        profile = by_id.get(principal.id)
        users.append({
            "id": principal.id,
            "email": principal.email,
            "name": profile.name if profile else None,
            "role": (profile.role if profile else None) or DEFAULT_ROLE,
            "lunchSession": profile.lunch_session if profile else None,
            "locationId": profile.location_id if profile else None,
        })
    users.sort(key=lambda u: u["email"] or "")
    return users


def list_users(db: Session, principals: List[Principal]) -> List[Dict[str, Any]]:
    """Load profiles for the given principals and merge them."""
    ids = [p.id for p in principals]
    rows = db.scalars(select(Profile).where(Profile.id.in_(ids))).all() if ids else []
    return merge_users(principals, rows)
