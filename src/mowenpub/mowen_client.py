"""Mowen OpenAPI client for image uploads and note creation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from mowenpub.exceptions import PublishError
from mowenpub.logger import logger

# fileType value the upload endpoint uses for images
FILE_TYPE_IMAGE = 1


@dataclass(slots=True, kw_only=True)
class ImageUpload:
    """Result of an image upload.

    Attributes:
        file_id: Opaque Mowen file handle, or None if the upload failed
        error: Failure reason if the upload failed, otherwise None

    """

    file_id: str | None
    error: str | None

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.file_id)

    @classmethod
    def failed(cls, error: str) -> ImageUpload:
        return cls(file_id=None, error=error)


class MowenClient:
    """HTTP client for the Mowen OpenAPI.

    Uses a persistent httpx client to reuse connections across requests.
    """

    def __init__(self, *, api_key: str, api_url: str, timeout: float) -> None:
        """Initialize the Mowen client.

        Args:
            api_key: Mowen OpenAPI key, sent as a bearer token.
            api_url: Base URL of the OpenAPI, without a trailing slash.
            timeout: Request timeout in seconds.

        """
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._client = httpx.AsyncClient(
            timeout=self._timeout,
            headers={"Authorization": f"Bearer {api_key}"},
        )

    async def upload_image(self, source_url: str) -> ImageUpload:
        """Ask Mowen to fetch and store an image from a URL.

        Failures are returned, not raised, so a single broken image
        cannot abort a conversion.

        Args:
            source_url: Public URL of the image.

        Returns:
            ImageUpload with the file handle or the failure reason.

        """
        payload = {"fileType": FILE_TYPE_IMAGE, "url": source_url}

        try:
            logger.debug("[UPLOAD STARTED] for image: %s", source_url)
            resp = await self._client.post(f"{self._api_url}/upload/url", json=payload)
            resp.raise_for_status()

        except httpx.HTTPStatusError as e:
            return ImageUpload.failed(f"Upload returned status {e.response.status_code}")

        except httpx.RequestError as e:
            return ImageUpload.failed(f"Upload request failed: {e!s}")

        try:
            data = resp.json()
        except ValueError as e:
            return ImageUpload.failed(f"Invalid JSON response: {e}")

        file_info = data.get("file") if isinstance(data, dict) else None
        file_id = file_info.get("fileId") if isinstance(file_info, dict) else None
        if not isinstance(file_id, str) or not file_id:
            return ImageUpload.failed("Response is missing file.fileId")

        logger.debug("Uploaded image %s as %s", source_url, file_id)
        return ImageUpload(file_id=file_id, error=None)

    async def create_note(self, body: dict[str, Any], *, auto_publish: bool) -> dict[str, Any]:
        """Create a note from a serialized document tree.

        Args:
            body: The ``doc`` atom as a dict.
            auto_publish: Whether Mowen should publish the note immediately.

        Returns:
            Decoded response from the note creation endpoint.

        Raises:
            PublishError: If the request fails or Mowen rejects the note.

        """
        payload = {"body": body, "settings": {"autoPublish": auto_publish}}

        try:
            resp = await self._client.post(f"{self._api_url}/note/create", json=payload)
            resp.raise_for_status()

        except httpx.HTTPStatusError as e:
            raise PublishError(
                f"Mowen rejected the note: {e.response.status_code} {e.response.text}",
                status_code=e.response.status_code,
                response_text=e.response.text,
            ) from e

        except httpx.RequestError as e:
            raise PublishError(f"Mowen did not respond: {e}") from e

        try:
            data = resp.json()
        except ValueError as e:
            raise PublishError(
                f"Invalid JSON response: {e}",
                status_code=resp.status_code,
                response_text=resp.text,
            ) from e

        if not isinstance(data, dict):
            return {"result": data}
        return data

    async def close(self) -> None:
        """Close the HTTP client and release resources."""
        logger.debug("Closing Mowen client")
        await self._client.aclose()
