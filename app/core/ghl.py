import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from app.core.config import settings
from app.core.errors import GHLAPIError, NotInstalledError
from app.db.installations import InstallationStore
from app.schemas.custom_values import ApiCallResult

logger = logging.getLogger(__name__)


class GHLClient:
    """Authenticated access to a location's custom values."""

    def __init__(
        self,
        store: InstallationStore,
        base_url: Optional[str] = None,
        api_version: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.store = store
        self.base_url = (base_url or settings.GHL_API_DOMAIN).rstrip("/")
        self.api_version = api_version or settings.GHL_API_VERSION
        self._transport = transport

    def _headers(self, location_id: str) -> Dict[str, str]:
        installation = self.store.get(location_id)
        if installation is None:
            raise NotInstalledError(location_id)
        return {
            "Authorization": f"Bearer {installation.access_token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
            "Version": self.api_version,
        }

    async def call(
        self,
        method: str,
        endpoint: str,
        location_id: str,
        payload: Optional[Dict[str, Any]] = None,
    ) -> ApiCallResult:
        headers = self._headers(location_id)
        try:
            async with httpx.AsyncClient(base_url=self.base_url, transport=self._transport) as client:
                resp = await client.request(method, endpoint, json=payload, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"GHL {method} {endpoint} failed: {e}")
            return ApiCallResult(error=str(e) or e.__class__.__name__)

        try:
            data = resp.json()
        except ValueError:
            data = resp.text or None

        if not resp.is_success:
            logger.warning(f"GHL {method} {endpoint} -> {resp.status_code}: {data}")
            return ApiCallResult(
                status_code=resp.status_code,
                data=data,
                error=_error_message(resp.status_code, data),
            )
        return ApiCallResult(status_code=resp.status_code, data=data)

    async def create_custom_value(self, location_id: str, name: str, value: str) -> ApiCallResult:
        return await self.call(
            "POST",
            f"/locations/{quote(location_id, safe='')}/customValues",
            location_id,
            {"name": name, "value": value},
        )

    async def update_custom_value(self, location_id: str, name: str, value: str) -> ApiCallResult:
        return await self.call(
            "PUT",
            f"/locations/{quote(location_id, safe='')}/customValues/{quote(name, safe='')}",
            location_id,
            {"name": name, "value": value},
        )

    async def get_custom_values(self, location_id: str) -> Any:
        result = await self.call(
            "GET",
            f"/locations/{quote(location_id, safe='')}/customValues",
            location_id,
        )
        if not result.ok:
            raise GHLAPIError(result.error or "Request failed", status_code=result.status_code)
        return result.data


def _error_message(status_code: int, data: Any) -> str:
    if isinstance(data, dict):
        message = data.get("message") or data.get("error")
        if isinstance(message, list):
            message = "; ".join(str(m) for m in message)
        if message:
            return f"HTTP {status_code}: {message}"
    return f"Request failed with status code {status_code}"
