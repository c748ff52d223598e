"""
Lunchbox API - Admin Routes.

User directory and role management for administrators.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import AuthorizedUser, require_admin
from app.schemas.profile import OkResponse, RoleUpdate, UserListResponse
from app.services import profiles
from app.services.identity import IdentityProvider, get_identity_provider

router = APIRouter()


@router.get("/users", response_model=UserListResponse)
async def list_users(
    db: Session = Depends(get_db),
    provider: IdentityProvider = Depends(get_identity_provider),
    admin: AuthorizedUser = Depends(require_admin),
):
    """All identity-provider users with their profile data, sorted by email."""
    principals = await provider.list_users()
    return {"users": profiles.list_users(db, principals)}


@router.patch("/users", response_model=OkResponse, response_model_exclude_none=True)
def update_user_role(
    payload: RoleUpdate,
    db: Session = Depends(get_db),
    admin: AuthorizedUser = Depends(require_admin),
):
    """Change a user's role."""
    profiles.set_role(db, payload.id, payload.role)
    return OkResponse()
