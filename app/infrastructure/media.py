"""Hosted media client.

This module wraps the Cloudinary REST upload API. Every image, audio and
video file the application stores is forwarded here; the database keeps only
the returned ``{public_id, url}`` reference.
"""

import hashlib
import time
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import aiofiles
import httpx

from app.core.exceptions import MediaUploadError
from app.core.logging import get_logger
from app.core.types import BestEffortResult
from app.infrastructure.http_client import HTTPClient

logger = get_logger(__name__)

# Parameters excluded from the request signature
UNSIGNED_PARAMS = frozenset({"file", "api_key", "resource_type", "cloud_name", "signature"})

# Short keys of the URL transformation syntax
TRANSFORMATION_KEYS = {
    "width": "w",
    "height": "h",
    "crop": "c",
    "quality": "q",
    "gravity": "g",
}


@dataclass(frozen=True)
class MediaAsset:
    """Stored media object.

    Attributes:
        public_id: Host identifier, needed to destroy the object
        url: HTTPS delivery URL
        resource_type: image, audio or video
        width: Pixel width (images and video)
        height: Pixel height (images and video)
    """

    public_id: str
    url: str
    resource_type: str = "image"
    width: int | None = None
    height: int | None = None

    def as_media(self, with_dimensions: bool = False) -> dict[str, Any]:
        """Serialize to the JSON shape persisted on models."""
        media: dict[str, Any] = {
            "public_id": self.public_id,
            "url": self.url,
            "resource_type": self.resource_type,
        }
        if with_dimensions:
            media["width"] = self.width
            media["height"] = self.height
        return media


def build_transformation(options: dict[str, Any] | None) -> str | None:
    """Render transformation options as a Cloudinary transformation string.

    Args:
        options: e.g. ``{"width": 300, "crop": "scale"}``

    Returns:
        e.g. ``"w_300,c_scale"``, or None when there is nothing to apply
    """
    if not options:
        return None
    parts = []
    for key, value in options.items():
        short = TRANSFORMATION_KEYS.get(key)
        if short is None:
            raise ValueError(f"Unsupported transformation option: {key}")
        parts.append(f"{short}_{value}")
    return ",".join(parts)


class MediaClient:
    """Cloudinary upload and destroy client.

    Example:
        >>> media = MediaClient(http_client, "demo", "key", "secret")
        >>> asset = await media.upload(
        ...     Path("/tmp/cover.png"),
        ...     folder="seagulls/news",
        ...     transformation={"width": 800, "crop": "scale"},
        ... )
        >>> await media.destroy_quietly(asset.public_id)
    """

    def __init__(
        self,
        http_client: HTTPClient,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        api_base: str = "https://api.cloudinary.com/v1_1",
        chunk_size: int = 6_000_000,
    ) -> None:
        """Initialize media client.

        Args:
            http_client: Shared HTTP client
            cloud_name: Cloudinary cloud name
            api_key: API key
            api_secret: API secret used to sign requests
            api_base: REST API base URL
            chunk_size: Files larger than this are sent in chunks
        """
        self.http_client = http_client
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.api_base = api_base.rstrip("/")
        self.chunk_size = chunk_size

    def sign(self, params: dict[str, Any]) -> str:
        """Compute the request signature.

        The signature is the SHA-1 of the sorted ``key=value`` pairs joined
        with ``&``, followed directly by the API secret.
        """
        to_sign = "&".join(
            f"{key}={params[key]}"
            for key in sorted(params)
            if key not in UNSIGNED_PARAMS and params[key] not in (None, "")
        )
        return hashlib.sha1(f"{to_sign}{self.api_secret}".encode()).hexdigest()

    def endpoint(self, resource_type: str, action: str) -> str:
        # Audio is stored under the video resource type on the host
        host_type = "video" if resource_type == "audio" else resource_type
        return f"{self.api_base}/{self.cloud_name}/{host_type}/{action}"

    def _signed_params(self, **params: Any) -> dict[str, Any]:
        signed = {key: value for key, value in params.items() if value not in (None, "")}
        signed["timestamp"] = int(time.time())
        signed["signature"] = self.sign(signed)
        signed["api_key"] = self.api_key
        return signed

    async def upload(
        self,
        path: Path,
        folder: str,
        resource_type: str = "image",
        transformation: dict[str, Any] | None = None,
        filename: str | None = None,
    ) -> MediaAsset:
        """Upload a local file.

        Args:
            path: Local file to send
            folder: Destination folder on the host
            resource_type: image, audio or video
            transformation: Incoming transformation options
            filename: Name reported to the host (defaults to the file name)

        Returns:
            The stored MediaAsset

        Raises:
            MediaUploadError: If the host rejects the upload or is unreachable
        """
        params = self._signed_params(
            folder=folder,
            transformation=build_transformation(transformation),
        )
        url = self.endpoint(resource_type, "upload")
        name = filename or path.name
        size = path.stat().st_size

        logger.info(
            "Uploading media",
            folder=folder,
            resource_type=resource_type,
            size=size,
        )

        if size > self.chunk_size:
            payload = await self._upload_chunked(url, path, name, size, params)
        else:
            async with aiofiles.open(path, "rb") as f:
                content = await f.read()
            payload = await self._send(url, data=params, files={"file": (name, content)})

        asset = MediaAsset(
            public_id=payload["public_id"],
            url=payload.get("secure_url") or payload["url"],
            resource_type=resource_type,
            width=payload.get("width"),
            height=payload.get("height"),
        )
        logger.info("Media uploaded", public_id=asset.public_id, resource_type=resource_type)
        return asset

    async def _upload_chunked(
        self,
        url: str,
        path: Path,
        name: str,
        size: int,
        params: dict[str, Any],
    ) -> dict[str, Any]:
        upload_id = uuid.uuid4().hex
        payload: dict[str, Any] = {}
        start = 0
        async with aiofiles.open(path, "rb") as f:
            while start < size:
                chunk = await f.read(self.chunk_size)
                end = start + len(chunk) - 1
                headers = {
                    "X-Unique-Upload-Id": upload_id,
                    "Content-Range": f"bytes {start}-{end}/{size}",
                }
                payload = await self._send(
                    url, data=params, files={"file": (name, chunk)}, headers=headers
                )
                logger.debug("Media chunk sent", upload_id=upload_id, start=start, end=end)
                start = end + 1
        return payload

    async def _send(self, url: str, **kwargs: Any) -> dict[str, Any]:
        try:
            response = await self.http_client.post(url, **kwargs)
        except httpx.HTTPError as e:
            raise MediaUploadError(f"Media host unreachable: {e}", endpoint=url) from e

        if response.status_code >= 400:
            try:
                detail = response.json().get("error", {}).get("message", response.text)
            except ValueError:
                detail = response.text
            raise MediaUploadError(
                detail or f"Media host returned {response.status_code}",
                status_code=response.status_code,
                endpoint=url,
                response_body=response.text,
            )
        return response.json()

    async def destroy(self, public_id: str, resource_type: str = "image") -> None:
        """Delete a stored object.

        Raises:
            MediaUploadError: If the host refuses the deletion
        """
        url = self.endpoint(resource_type, "destroy")
        payload = await self._send(url, data=self._signed_params(public_id=public_id))
        result = payload.get("result")
        if result not in ("ok", "not found"):
            raise MediaUploadError(
                f"Media destroy returned {result!r}",
                endpoint=url,
                context={"public_id": public_id},
            )
        logger.info("Media destroyed", public_id=public_id, result=result)

    async def destroy_quietly(
        self,
        public_id: str,
        resource_type: str = "image",
    ) -> BestEffortResult:
        """Delete a stored object, logging instead of raising on failure."""
        try:
            await self.destroy(public_id, resource_type)
        except MediaUploadError as e:
            logger.warning(
                "Media destroy failed",
                public_id=public_id,
                resource_type=resource_type,
                error=str(e),
            )
            return BestEffortResult.failure(e)
        return BestEffortResult.success()

    async def destroy_all(self, refs: list[tuple[str, str]]) -> list[BestEffortResult]:
        """Best-effort destroy of several ``(public_id, resource_type)`` pairs."""
        return [await self.destroy_quietly(public_id, kind) for public_id, kind in refs]


__all__ = [
    "MediaAsset",
    "MediaClient",
    "build_transformation",
]
