"""
Lunchbox API - Authentication Middleware.

Resolves the calling principal from a bearer token or the session cookie.
"""

from typing import Optional
import logging

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from settings import Settings, get_settings
from app.services.identity import IdentityProvider, Principal, get_identity_provider

logger = logging.getLogger(__name__)


class PrincipalResolver(HTTPBearer):
    """
    Bearer-or-cookie principal resolution.

    Resolution order:
    1. ``Authorization: Bearer <token>`` validated by the identity provider.
    2. The session cookie, validated the same way.
    3. Anonymous (None).

    Never raises: callers treat None as unauthenticated.
    """

    def __init__(self):
        super().__init__(auto_error=False)

    async def __call__(
        self,
        request: Request,
        provider: IdentityProvider = Depends(get_identity_provider),
        config: Settings = Depends(get_settings),
    ) -> Optional[Principal]:
        """
        Resolve the principal for this request.

        Args:
            request: FastAPI request object.
            provider: Identity provider client.
            config: Application settings (cookie name).

        Returns:
            Optional[Principal]: The caller, or None when anonymous.
        """
        credentials: Optional[HTTPAuthorizationCredentials] = await super().__call__(request)

        if credentials and credentials.scheme.lower() == "bearer":
            principal = await self._safe_get_user(provider, credentials.credentials)
            if principal:
                return principal

        cookie_token = request.cookies.get(config.SESSION_COOKIE_NAME)
        if cookie_token:
            principal = await self._safe_get_user(provider, cookie_token)
            if principal:
                return principal

        return None

    @staticmethod
    async def _safe_get_user(provider: IdentityProvider, token: str) -> Optional[Principal]:
        try:
            return await provider.get_user(token)
        except Exception as e:
            logger.warning(f"Identity resolution failed: {e}")
            return None


# Global resolver instance for dependency injection
resolve_principal = PrincipalResolver()
