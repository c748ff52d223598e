"""
Lunchbox API - Profile Routes.

Self-service profile reads and merge-only edits, plus the admin role path.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import AuthorizedUser, get_current_principal, require_admin
from app.schemas.profile import (
    OkResponse,
    PrincipalOut,
    ProfileOut,
    ProfileResponse,
    ProfileUpdate,
    RoleUpdate,
)
from app.services import profiles
from app.services.identity import Principal

router = APIRouter()


@router.get("", response_model=ProfileResponse)
def get_profile(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> ProfileResponse:
    """
    Get the current user and their profile.

    Returns:
        ProfileResponse: ``profile`` is null until the user first saves one.
    """
    profile = profiles.get_profile(db, principal.id)
    return ProfileResponse(
        user=PrincipalOut(**principal.to_dict()),
        profile=ProfileOut(**profile.to_dict()) if profile else None,
    )


@router.post("", response_model=OkResponse, response_model_exclude_none=True)
def update_profile(
    payload: ProfileUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> OkResponse:
    """
    Update name, location or lunch session without touching anything else.

    The row is created on first use; the role is never changed here.
    """
    changed = profiles.upsert_self(db, principal.id, payload.changes())
    return OkResponse(noChange=None if changed else True)


@router.patch("", response_model=OkResponse, response_model_exclude_none=True)
def set_user_role(
    payload: RoleUpdate,
    db: Session = Depends(get_db),
    admin: AuthorizedUser = Depends(require_admin),
) -> OkResponse:
    """Change any user's role (admin only)."""
    profiles.set_role(db, payload.id, payload.role)
    return OkResponse()
