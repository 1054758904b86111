"""Client for the console's REST persistence service.

Collections:
    /channels, /video-templates, /hook-templates, /thumbnail-templates
        GET (list), GET /{id}, POST, PUT /{id}, DELETE /{id}
    /settings, /settings/{key}
        GET (list), GET, POST (upsert), DELETE
    /upload/logo, /upload/watermark, /upload/video
        multipart upload returning ``{url, duration?}``

Error mapping:
    transport failure or 5xx  -> TransientServiceError
    404                       -> RecordNotFoundError
    other 4xx                 -> ExternalAPIError

Nothing here retries; callers decide whether a transient failure is worth
another attempt.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, BinaryIO

import httpx

from studio.config.base import EntityKind
from studio.config.settings_store import (
    SettingKey,
    StringListSetting,
    StringSetting,
    setting_from_record,
    setting_to_record,
)
from studio.core.exceptions import (
    ExternalAPIError,
    RecordNotFoundError,
    TransientServiceError,
    UploadError,
)
from studio.core.logging import get_logger
from studio.infrastructure.http_client import HTTPClient

logger = get_logger(__name__)

SERVICE_NAME = "console-api"


class AssetSlot(str, Enum):
    """Channel fields that receive an uploaded file."""

    LOGO = "logo"
    WATERMARK = "watermark"
    INTRO = "intro"
    OUTRO = "outro"

    @property
    def url_field(self) -> str:
        return {
            AssetSlot.LOGO: "logo_url",
            AssetSlot.WATERMARK: "watermark_url",
            AssetSlot.INTRO: "video_intro_url",
            AssetSlot.OUTRO: "video_outro_url",
        }[self]

    @property
    def duration_field(self) -> str | None:
        """Field that stores the clip length (video slots only)."""
        return {
            AssetSlot.INTRO: "intro_duration",
            AssetSlot.OUTRO: "outro_duration",
        }.get(self)

    @property
    def is_video(self) -> bool:
        return self.duration_field is not None

    @property
    def endpoint(self) -> str:
        return "/upload/video" if self.is_video else f"/upload/{self.value}"

    @property
    def form_field(self) -> str:
        return "video" if self.is_video else self.value


@dataclass(frozen=True)
class UploadResult:
    """Body of a successful upload.

    Attributes:
        url: Where the stored asset is served from
        duration: Clip length in seconds (video uploads only)
    """

    url: str
    duration: float | None = None


class ConsoleAPIClient:
    """Async client for entity, settings and upload endpoints.

    Example:
        async with HTTPClient.from_config() as http:
            api = ConsoleAPIClient(http)
            channels = await api.list_records(EntityKind.CHANNEL)
    """

    def __init__(self, http_client: HTTPClient) -> None:
        """Initialize the client.

        Args:
            http_client: Shared HTTP client bound to the service base URL
        """
        self.http = http_client

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self.http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("Console API unreachable", method=method, endpoint=path, error=str(e))
            raise TransientServiceError(
                service=SERVICE_NAME,
                message=f"{method} {path} failed: {e}",
                endpoint=path,
            ) from e

        if response.is_success:
            return response

        body = response.text
        status = response.status_code
        if status >= 500:
            logger.error("Console API server error", method=method, endpoint=path, status=status)
            raise TransientServiceError(
                service=SERVICE_NAME,
                message=_error_message(response),
                status_code=status,
                endpoint=path,
                response_body=body,
            )

        logger.warning("Console API rejected request", method=method, endpoint=path, status=status)
        raise ExternalAPIError(
            service=SERVICE_NAME,
            message=_error_message(response),
            status_code=status,
            endpoint=path,
            response_body=body,
        )

    async def _send_record(
        self, method: str, collection: str, record_id: int | str, **kwargs: Any
    ) -> httpx.Response:
        try:
            return await self._send(method, f"/{collection}/{record_id}", **kwargs)
        except ExternalAPIError as e:
            if e.status_code == 404:
                raise RecordNotFoundError(collection, record_id) from e
            raise

    # ------------------------------------------------------------------
    # Entities
    # ------------------------------------------------------------------

    async def list_records(self, kind: EntityKind) -> list[dict[str, Any]]:
        """Fetch every record of an entity kind (wire format)."""
        response = await self._send("GET", f"/{kind.collection}")
        return response.json()

    async def get_record(self, kind: EntityKind, record_id: int) -> dict[str, Any]:
        """Fetch one record.

        Raises:
            RecordNotFoundError: If no record has this id
        """
        response = await self._send_record("GET", kind.collection, record_id)
        return response.json()

    async def create_record(self, kind: EntityKind, payload: dict[str, Any]) -> dict[str, Any]:
        """Create a record and return it as stored (with its new id)."""
        response = await self._send("POST", f"/{kind.collection}", json=payload)
        record = response.json()
        logger.info("Record created", kind=kind.value, record_id=record.get("id"))
        return record

    async def update_record(
        self, kind: EntityKind, record_id: int, payload: dict[str, Any]
    ) -> dict[str, Any]:
        """Replace a record and return it as stored.

        Raises:
            RecordNotFoundError: If no record has this id
        """
        response = await self._send_record("PUT", kind.collection, record_id, json=payload)
        logger.info("Record updated", kind=kind.value, record_id=record_id)
        return response.json()

    async def delete_record(self, kind: EntityKind, record_id: int) -> None:
        """Delete a record.

        Raises:
            RecordNotFoundError: If no record has this id
        """
        await self._send_record("DELETE", kind.collection, record_id)
        logger.info("Record deleted", kind=kind.value, record_id=record_id)

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    async def list_settings(self) -> list[dict[str, Any]]:
        """Fetch all settings records (``{key, value, jsonValue}``)."""
        response = await self._send("GET", "/settings")
        return response.json()

    async def get_setting(self, key: SettingKey) -> StringSetting | StringListSetting | None:
        """Fetch one setting; None when the key is unset or cleared."""
        try:
            response = await self._send_record("GET", "settings", key.value)
        except RecordNotFoundError:
            return None
        return setting_from_record(key, response.json())

    async def save_setting(
        self, key: SettingKey, setting: StringSetting | StringListSetting
    ) -> None:
        record = setting_to_record(key, setting)
        await self._send(
            "POST",
            f"/settings/{key.value}",
            json={"value": record["value"], "jsonValue": record["jsonValue"]},
        )
        logger.info("Setting saved", key=key.value)

    async def delete_setting(self, key: SettingKey) -> None:
        await self._send("DELETE", f"/settings/{key.value}")
        logger.info("Setting deleted", key=key.value)

    # ------------------------------------------------------------------
    # Uploads
    # ------------------------------------------------------------------

    async def upload_asset(
        self,
        slot: AssetSlot,
        filename: str,
        content: bytes | BinaryIO,
        content_type: str = "application/octet-stream",
    ) -> UploadResult:
        """Upload a file for a channel asset slot.

        Args:
            slot: Target slot (logo, watermark, intro, outro)
            filename: Original file name
            content: File bytes or a binary file object
            content_type: MIME type of the file

        Returns:
            Stored asset URL, plus the clip duration for video slots

        Raises:
            UploadError: If the upload fails or the body carries no URL
        """
        files = {slot.form_field: (filename, content, content_type)}
        try:
            response = await self._send("POST", slot.endpoint, files=files)
        except TransientServiceError as e:
            raise UploadError(
                service=SERVICE_NAME,
                message=f"Upload of {filename} failed",
                status_code=e.status_code,
                endpoint=slot.endpoint,
            ) from e

        try:
            body = response.json()
        except ValueError:
            body = None
        url = body.get("url") if isinstance(body, dict) else None
        if not isinstance(url, str) or not url:
            raise UploadError(
                service=SERVICE_NAME,
                message="Upload response has no url",
                endpoint=slot.endpoint,
                response_body=response.text,
            )

        duration = body.get("duration")
        if isinstance(duration, bool) or not isinstance(duration, int | float):
            duration = None

        logger.info("Asset uploaded", slot=slot.value, url=url, duration=duration)
        return UploadResult(url=url, duration=duration)


def _error_message(response: httpx.Response) -> str:
    """Use the service's ``{message}`` body when present."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return f"HTTP {response.status_code}"


__all__ = ["AssetSlot", "ConsoleAPIClient", "UploadResult", "SERVICE_NAME"]
