import logging
from typing import Any, Callable, List, Optional, TypeVar

import httpx

from image_dashboard.exceptions import GatewayError, NetworkError
from image_dashboard.image_service.models import ImageItem, UploadResponse
from image_dashboard.settings import Settings

log = logging.getLogger(__name__)

# The dashboard consumes the same shapes the gateway emits
DisplayImage = ImageItem
UploadResult = UploadResponse

T = TypeVar("T")

class ImageGatewayClient:
    """Async HTTP client for the storage gateway's /images endpoints."""

    def __init__(self, settings: Settings, client: Optional[httpx.AsyncClient] = None):
        self._client = client or httpx.AsyncClient(
            base_url=settings.gateway_url,
            timeout=settings.request_timeout,
        )

    async def _send(self, method: str, url: str, parse: Callable[[Any], T], **kwargs) -> T:
        try:
            response = await self._client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            try:
                body = e.response.json()
            except ValueError:
                body = None
            # proxies may answer with non-object JSON or plain text
            detail = body.get("error") if isinstance(body, dict) else e.response.text
            log.error("Gateway error (%s) on %s %s: %s", e.response.status_code, method, url, detail)
            raise GatewayError(e.response.status_code, detail) from e
        except httpx.RequestError as e:
            log.error("Network error calling gateway %s %s: %s", method, url, e)
            raise NetworkError(str(e)) from e

        # pydantic's ValidationError is a ValueError too
        try:
            return parse(response.json())
        except (ValueError, AttributeError, TypeError) as e:
            log.error("Malformed gateway response on %s %s: %s", method, url, e)
            raise GatewayError(response.status_code, "Malformed response") from e

    async def list_images(self) -> List[DisplayImage]:
        return await self._send(
            "GET", "/images",
            parse=lambda body: [DisplayImage.model_validate(item) for item in body.get("data") or []],
        )

    async def upload_image(self, filename: str, content: bytes, content_type: str) -> UploadResult:
        files = {"image": (filename, content, content_type)}
        return await self._send("POST", "/images", parse=UploadResult.model_validate, files=files)

    async def delete_image(self, key: str) -> str:
        return await self._send(
            "DELETE", "/images",
            parse=lambda body: body.get("message", ""),
            params={"key": key},
        )

    async def aclose(self):
        await self._client.aclose()
