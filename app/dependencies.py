"""
Lunchbox API - FastAPI Dependencies.

Authentication and role-authorization helpers for routes.
"""

from dataclasses import dataclass
from typing import Iterable, Optional
import logging

from fastapi import Depends
from sqlalchemy.orm import Session

from settings import Settings, get_settings
from app.database import get_db
from app.middleware.auth import resolve_principal
from app.services import profiles
from app.services.identity import Principal
from app.utils.errors import AuthenticationError, ForbiddenError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthorizedUser:
    """Outcome of a successful role check."""
    user_id: str
    email: Optional[str]
    role: str


async def get_current_principal(
    principal: Optional[Principal] = Depends(resolve_principal)
) -> Principal:
    """
    Get the authenticated principal for self-service routes.

    Raises:
        AuthenticationError: 401 if the request is anonymous.
    """
    if principal is None:
        raise AuthenticationError()
    return principal


def is_master_admin(email: Optional[str], config: Settings) -> bool:
    """Check an email against the configured master-admin allow-list."""
    return bool(email) and email.strip().lower() in config.master_admin_emails


class RoleGuard:
    """
    Dependency that admits only principals holding one of ``allowed_roles``.

    Master admins (by email) are always admitted and have their stored role
    healed to ``admin`` as a side effect. The decision is made fresh on every
    request.

    Example:
        @router.post("/menu")
        def create_item(user: AuthorizedUser = Depends(require_role("catering", "admin"))):
            ...
    """

    def __init__(self, allowed_roles: Iterable[str]):
        self.allowed_roles = frozenset(allowed_roles)

    def __call__(
        self,
        principal: Principal = Depends(get_current_principal),
        db: Session = Depends(get_db),
        config: Settings = Depends(get_settings),
    ) -> AuthorizedUser:
        if is_master_admin(principal.email, config):
            profiles.ensure_admin(db, principal.id)
            return AuthorizedUser(user_id=principal.id, email=principal.email, role="admin")

        role = profiles.get_role(db, principal.id)
        if role not in self.allowed_roles:
            logger.info(f"Denied user {principal.id} on route requiring {sorted(self.allowed_roles)}")
            raise ForbiddenError()

        return AuthorizedUser(user_id=principal.id, email=principal.email, role=role)


def require_role(*roles: str) -> RoleGuard:
    """Build a RoleGuard for the given roles."""
    return RoleGuard(roles)


require_catering = require_role("catering", "admin")
require_admin = require_role("admin")
