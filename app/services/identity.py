"""
Lunchbox API - Identity Provider Client.

Thin client for the external identity provider (a GoTrue-compatible auth
server). Access tokens are verified locally with the shared JWT secret when
one is configured, otherwise via the provider's session-check endpoint.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional
import logging

import httpx
from jose import jwt, JWTError

from settings import Settings, settings
from app.utils.errors import UpstreamError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Principal:
    """An authenticated identity issued by the identity provider."""
    id: str
    email: Optional[str] = None

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {"id": self.id, "email": self.email}


class IdentityProvider:
    """
    Identity provider integration.

    Attributes:
        base_url: Provider root URL (e.g. https://project.example.co).
        api_key: Public API key sent on session checks.
        service_role_key: Privileged key for the admin user listing.
        jwt_secret: Shared secret for local token verification.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        service_role_key: Optional[str] = None,
        jwt_secret: Optional[str] = None,
        jwt_algorithm: str = "HS256",
        jwt_audience: Optional[str] = "authenticated",
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/") if base_url else None
        self.api_key = api_key
        self.service_role_key = service_role_key
        self.jwt_secret = jwt_secret
        self.jwt_algorithm = jwt_algorithm
        self.jwt_audience = jwt_audience
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, config: Settings) -> "IdentityProvider":
        return cls(
            base_url=config.IDENTITY_PROVIDER_URL,
            api_key=config.IDENTITY_PROVIDER_API_KEY,
            service_role_key=config.IDENTITY_SERVICE_ROLE_KEY,
            jwt_secret=config.IDENTITY_JWT_SECRET,
            jwt_algorithm=config.IDENTITY_JWT_ALGORITHM,
            jwt_audience=config.IDENTITY_JWT_AUDIENCE,
            timeout=config.IDENTITY_TIMEOUT_SECONDS,
        )

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url or "",
            timeout=self.timeout,
            transport=self._transport,
        )

    def verify_token(self, token: str) -> Optional[Principal]:
        """
        Verify an access token locally with the shared secret.

        Args:
            token: Encoded JWT access token.

        Returns:
            Optional[Principal]: Principal from the ``sub``/``email`` claims,
            None if the token is invalid, expired or has no subject.
        """
        options = {"verify_aud": self.jwt_audience is not None}
        try:
            payload = jwt.decode(
                token,
                self.jwt_secret,
                algorithms=[self.jwt_algorithm],
                audience=self.jwt_audience,
                options=options,
            )
        except JWTError as e:
            logger.warning(f"Access token rejected: {e}")
            return None

        user_id = payload.get("sub")
        if not user_id:
            return None
        return Principal(id=str(user_id), email=payload.get("email"))

    async def fetch_user(self, token: str) -> Optional[Principal]:
        """
        Ask the provider who owns a token (session-check call).

        Returns:
            Optional[Principal]: The token's owner, None on any failure.
        """
        if not self.base_url:
            logger.warning("Identity provider URL not configured")
            return None

        headers = {"Authorization": f"Bearer {token}"}
        if self.api_key:
            headers["apikey"] = self.api_key

        try:
            async with self._client() as client:
                response = await client.get("/auth/v1/user", headers=headers)
            if response.status_code != 200:
                return None
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Identity provider session check failed: {e}")
            return None

        user_id = data.get("id") if isinstance(data, dict) else None
        if not user_id:
            return None
        return Principal(id=str(user_id), email=data.get("email"))

    async def get_user(self, token: str) -> Optional[Principal]:
        """Resolve a token to its principal, never raising."""
        if not token:
            return None
        if self.jwt_secret:
            return self.verify_token(token)
        return await self.fetch_user(token)

    async def list_users(self, page: int = 1, per_page: int = 200) -> List[Principal]:
        """
        List users through the provider's admin API.

        Raises:
            UpstreamError: If the provider is unreachable or refuses.
        """
        if not self.base_url or not self.service_role_key:
            raise UpstreamError("Identity provider admin access is not configured")

        headers = {
            "apikey": self.service_role_key,
            "Authorization": f"Bearer {self.service_role_key}",
        }
        try:
            async with self._client() as client:
                response = await client.get(
                    "/auth/v1/admin/users",
                    params={"page": page, "per_page": per_page},
                    headers=headers,
                )
            response.raise_for_status()
            data: Any = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Identity provider user listing failed: {e}")
            raise UpstreamError(f"Identity provider error: {e}")

        users = data.get("users", []) if isinstance(data, dict) else data
        return [
            Principal(id=str(u["id"]), email=u.get("email"))
            for u in users or []
            if isinstance(u, dict) and u.get("id")
        ]


# Singleton instance
identity_provider = IdentityProvider.from_settings(settings)


def get_identity_provider() -> IdentityProvider:
    """Dependency returning the configured identity provider."""
    return identity_provider
