"""Multipart upload staging.

Incoming files are streamed to the configured temp directory, checked
against a MIME allow-list and a size cap, handed to the service as a
``LocalFile``, and removed once the request finishes, on success and failure
alike.
"""

import enum
import uuid
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from pathlib import Path

import aiofiles
import aiofiles.os
from fastapi import Depends, File, UploadFile

from app.api.deps import get_settings
from app.core.config import Config, get_config
from app.core.exceptions import InputValidationError
from app.core.logging import get_logger
from app.core.types import LocalFile

logger = get_logger(__name__)

CHUNK_SIZE = 64 * 1024

IMAGE_TYPES = frozenset(
    {
        "image/jpeg",
        "image/jpg",
        "image/png",
        "image/gif",
        "image/webp",
        "image/svg+xml",
        "image/x-icon",
        "image/vnd.microsoft.icon",
    }
)

AUDIO_TYPES = frozenset(
    {
        "audio/mpeg",
        "audio/mp3",
        "audio/wav",
        "audio/wave",
        "audio/x-wav",
        "audio/aac",
        "audio/ogg",
        "audio/webm",
        "audio/flac",
        "audio/m4a",
    }
)

VIDEO_TYPES = frozenset(
    {
        "video/mp4",
        "video/mpeg",
        "video/quicktime",
        "video/x-msvideo",
        "video/webm",
        "video/ogg",
        "video/x-matroska",
        "video/3gpp",
        "video/x-flv",
    }
)


class FileKind(str, enum.Enum):
    """Upload categories with their own allow-list and size cap."""

    IMAGE = "image"
    MEDIA = "media"  # audio or video

    @property
    def allowed_types(self) -> frozenset[str]:
        if self is FileKind.IMAGE:
            return IMAGE_TYPES
        return AUDIO_TYPES | VIDEO_TYPES

    def max_size(self, config: Config) -> int:
        if self is FileKind.IMAGE:
            return config.max_image_file_size
        return config.max_media_file_size

    def rejection(self, content_type: str) -> str:
        if self is FileKind.IMAGE:
            return f"File type {content_type} is not allowed! Only image files are allowed"
        return (
            f"File type {content_type} is not allowed! Allowed types: mp3, wav, aac, ogg, "
            "mp4, mov, avi, webm, mkv, 3gp, flv"
        )


def _temp_path(directory: Path, field: str, filename: str) -> Path:
    suffix = Path(filename).suffix.lower()
    return directory / f"{field}-{uuid.uuid4().hex}{suffix}"


@asynccontextmanager
async def stage_upload(
    upload: UploadFile | None,
    field: str,
    kind: FileKind,
    config: Config | None = None,
) -> AsyncIterator[LocalFile | None]:
    """Stream an upload to disk for the duration of the block.

    Args:
        upload: Incoming multipart file, or None when the field was omitted
        field: Form field name, used in errors and the temp file name
        kind: Allow-list and size cap to enforce
        config: Settings holding the temp directory and size caps

    Yields:
        The staged LocalFile, or None when no file was sent

    Raises:
        InputValidationError: Disallowed MIME type or file too large
    """
    if upload is None or not upload.filename:
        yield None
        return

    config = config or get_config()
    content_type = (upload.content_type or "").lower()
    if content_type not in kind.allowed_types:
        raise InputValidationError(kind.rejection(content_type), field=field)

    directory = Path(config.upload_temp_dir)
    await aiofiles.os.makedirs(directory, exist_ok=True)
    path = _temp_path(directory, field, upload.filename)
    limit = kind.max_size(config)
    total_size = 0

    try:
        async with aiofiles.open(path, "wb") as f:
            while chunk := await upload.read(CHUNK_SIZE):
                total_size += len(chunk)
                if total_size > limit:
                    raise InputValidationError(
                        f"File too large. Maximum size is {limit // (1024 * 1024)}MB.",
                        field=field,
                    )
                await f.write(chunk)

        logger.debug("Upload staged", field=field, filename=upload.filename, size=total_size)
        yield LocalFile(
            path=path,
            filename=upload.filename,
            content_type=content_type,
            size=total_size,
        )
    finally:
        try:
            await aiofiles.os.remove(path)
        except FileNotFoundError:
            pass


def staged_file(field: str, kind: FileKind) -> Callable[..., AsyncIterator[LocalFile | None]]:
    """Build a dependency that stages the multipart file ``field``.

    The temp file lives until the request's dependencies are torn down.
    """

    async def dependency(
        upload: UploadFile | None = File(default=None, alias=field),
        config: Config = Depends(get_settings),
    ) -> AsyncIterator[LocalFile | None]:
        async with stage_upload(upload, field, kind, config) as local:
            yield local

    return dependency


__all__ = [
    "AUDIO_TYPES",
    "FileKind",
    "IMAGE_TYPES",
    "VIDEO_TYPES",
    "stage_upload",
    "staged_file",
]
