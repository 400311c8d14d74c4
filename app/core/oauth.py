import logging
from typing import Optional
from urllib.parse import urlencode

import httpx

from app.core.config import settings
from app.core.errors import TokenExchangeError
from app.schemas.installation import TokenResponse

logger = logging.getLogger(__name__)

TOKEN_PATH = "/oauth/token"


class TokenExchangeClient:
    """Trades an OAuth authorization code for a location access token."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.GHL_API_DOMAIN).rstrip("/")
        self.client_id = client_id if client_id is not None else settings.GHL_APP_CLIENT_ID
        self.client_secret = client_secret if client_secret is not None else settings.GHL_APP_CLIENT_SECRET
        self._transport = transport

    def authorize_url(self) -> str:
        params = {
            "response_type": "code",
            "redirect_uri": settings.GHL_REDIRECT_URI,
            "client_id": self.client_id,
            "scope": settings.GHL_SCOPES,
        }
        return f"{settings.GHL_MARKETPLACE_URL}?{urlencode(params)}"

    async def exchange(self, code: str) -> TokenResponse:
        form = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "grant_type": "authorization_code",
            "code": code,
            "user_type": "Location",
        }
        try:
            async with httpx.AsyncClient(base_url=self.base_url, transport=self._transport) as client:
                resp = await client.post(
                    TOKEN_PATH,
                    data=form,
                    headers={"Accept": "application/json"},
                )
        except httpx.HTTPError as e:
            logger.error(f"Token exchange request failed: {e}")
            raise TokenExchangeError("Failed to exchange authorization code") from e

        if not resp.is_success:
            logger.error(f"Token exchange rejected: {resp.status_code} {resp.text}")
            raise TokenExchangeError(
                f"Failed to exchange authorization code (HTTP {resp.status_code})"
            )

        try:
            payload = resp.json()
        except ValueError as e:
            raise TokenExchangeError("Token endpoint returned a non-JSON body") from e

        access_token = payload.get("access_token") if isinstance(payload, dict) else None
        if not access_token:
            raise TokenExchangeError("Token endpoint response has no access_token")

        return TokenResponse(access_token=access_token, raw=payload)
