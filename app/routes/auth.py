# app/routes/auth.py
"""
Lunchbox API - Authentication Routes.

Sign-in itself happens at the identity provider; this only reports who the
API thinks the caller is.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from app.middleware.auth import resolve_principal
from app.services.identity import Principal

router = APIRouter()


@router.get("/whoami")
async def whoami(principal: Optional[Principal] = Depends(resolve_principal)):
    """Current principal, or ``{"user": null}`` when anonymous."""
    return {"user": principal.to_dict() if principal else None}
