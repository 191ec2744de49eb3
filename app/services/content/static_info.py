"""Per-channel static website settings.

Each channel has at most one StaticInfo record, addressed by channel ID.
Creating one uploads two images: the frequency artwork and the favicon.
The favicon must be square and one of the standard icon sizes.
"""

import uuid
from dataclasses import dataclass
from typing import Any

from PIL import Image, UnidentifiedImageError
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import InputValidationError, RecordAlreadyExistsError, RecordNotFoundError
from app.core.logging import get_logger
from app.core.types import LocalFile
from app.models.static_info import FAVICON_SIZES, StaticInfo
from app.schemas.static_info import StaticInfoCreate, StaticInfoUpdate
from app.services.content.base import ContentService

logger = get_logger(__name__)

FREQUENCY_FOLDER = "seagulls/staticinfo/frequency"
FAVICON_FOLDER = "seagulls/staticinfo/favicon"
FREQUENCY_TRANSFORMATION = {"width": 800, "crop": "scale"}

NOT_FOUND = "Static info not found for this channel"
ALREADY_EXISTS = (
    "Static info already exists for this channel. Only one static info per channel "
    "is allowed. Use PUT /api/staticinfo/:channelId to update instead."
)
RECOMMENDED_SIZES = [f"{size}x{size}" for size in FAVICON_SIZES]


@dataclass(frozen=True)
class FaviconCheck:
    """Measured favicon dimensions."""

    width: int
    height: int

    def as_dict(self) -> dict[str, int]:
        return {"width": self.width, "height": self.height}


def check_favicon(file: LocalFile) -> FaviconCheck:
    """Read and validate favicon dimensions.

    Args:
        file: Staged favicon image

    Returns:
        The measured dimensions

    Raises:
        InputValidationError: If the image is unreadable, not square, or not
            one of the standard favicon sizes
    """
    try:
        with Image.open(file.path) as img:
            width, height = img.size
    except (UnidentifiedImageError, OSError) as e:
        logger.warning("Favicon unreadable", filename=file.filename, error=str(e))
        error = InputValidationError("Error reading favicon dimensions", field="favIcon")
        error.details = {"error": str(e)}
        raise error from e

    measured = FaviconCheck(width=width, height=height)
    details = {"currentDimensions": measured.as_dict(), "recommendedSizes": RECOMMENDED_SIZES}

    if width != height:
        raise InputValidationError(
            f"Favicon must be square. Current dimensions: {width}x{height}. "
            "Recommended sizes: 16x16, 32x32, 48x48, 64x64, or 128x128 pixels.",
            field="favIcon",
            details=details,
        )
    if width not in FAVICON_SIZES:
        raise InputValidationError(
            "Favicon size should be one of: 16x16, 32x32, 48x48, 64x64, 128x128, "
            f"or 256x256 pixels. Current size: {width}x{height}",
            field="favIcon",
            details=details,
        )
    return measured


class StaticInfoService(ContentService[StaticInfo]):
    """Channel website settings, one record per channel."""

    model = StaticInfo
    not_found_message = NOT_FOUND

    async def _by_channel(self, session: AsyncSession, channel_id: uuid.UUID) -> StaticInfo:
        stmt = (
            select(StaticInfo)
            .options(*self.load_options())
            .where(StaticInfo.channel_id == channel_id)
            .execution_options(populate_existing=True)
        )
        info = (await session.execute(stmt)).scalar_one_or_none()
        if info is None:
            raise RecordNotFoundError("StaticInfo", channel_id, message=NOT_FOUND)
        return info

    async def _upload_favicon(self, file: LocalFile, measured: FaviconCheck) -> dict[str, Any]:
        asset = await self._upload(
            file,
            "favicon",
            FAVICON_FOLDER,
            transformation={"width": measured.width, "height": measured.height, "crop": "fill"},
        )
        media = asset.as_media(with_dimensions=True)
        media["width"] = asset.width or measured.width
        media["height"] = asset.height or measured.height
        return media

    async def create(
        self,
        data: StaticInfoCreate,
        frequency_image: LocalFile | None,
        fav_icon: LocalFile | None,
    ) -> tuple[StaticInfo, FaviconCheck]:
        """Create the channel's static info.

        Returns:
            The stored record and the measured favicon dimensions

        Raises:
            InputValidationError: Missing files, unknown channel or bad favicon
            RecordAlreadyExistsError: If the channel already has static info
            MediaUploadError: If either upload fails
        """
        if frequency_image is None:
            raise InputValidationError("Frequency image is required", field="frequencyimg")
        if fav_icon is None:
            raise InputValidationError("Favicon is required", field="favIcon")

        async with self.db_session_factory() as session:
            await self._ensure_channel(session, data.channel_id)
            existing = await session.execute(
                select(StaticInfo.id).where(StaticInfo.channel_id == data.channel_id)
            )
            existing_id = existing.scalar_one_or_none()
            if existing_id is not None:
                raise self._conflict(data.channel_id, existing_id)

            measured = check_favicon(fav_icon)

            frequency = await self._upload(
                frequency_image,
                "frequency image",
                FREQUENCY_FOLDER,
                transformation=FREQUENCY_TRANSFORMATION,
            )
            try:
                favicon = await self._upload_favicon(fav_icon, measured)
            except Exception:
                await self._media_client().destroy_quietly(frequency.public_id, "image")
                raise

            info = StaticInfo(
                channel_id=data.channel_id,
                about_us=data.about_us,
                frequency=data.frequency,
                frequency_image=frequency.as_media(),
                social_media_links=data.social_media_links,
                download_app=data.download_app.model_dump(),
                meta_tags=data.meta_tags,
                meta_description=data.meta_description,
                fav_icon=favicon,
                phone_number=data.phone_number,
                email=data.email,
                address=data.address,
            )
            session.add(info)
            try:
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                await self._media_client().destroy_all(
                    [(frequency.public_id, "image"), (favicon["public_id"], "image")]
                )
                raise self._conflict(data.channel_id) from e

            logger.info("Static info created", channel_id=str(data.channel_id))
            return await self._load(session, info.id), measured

    @staticmethod
    def _conflict(
        channel_id: uuid.UUID, existing_id: uuid.UUID | None = None
    ) -> RecordAlreadyExistsError:
        return RecordAlreadyExistsError(
            "StaticInfo",
            "channelId",
            channel_id,
            message=ALREADY_EXISTS,
            existing_id=existing_id,
            details={"existingStaticInfoId": str(existing_id)} if existing_id else None,
        )

    async def get_by_channel(self, channel_id: uuid.UUID) -> StaticInfo:
        async with self.db_session_factory() as session:
            return await self._by_channel(session, channel_id)

    async def update_by_channel(
        self,
        channel_id: uuid.UUID,
        data: StaticInfoUpdate,
        frequency_image: LocalFile | None = None,
        fav_icon: LocalFile | None = None,
    ) -> StaticInfo:
        """Partially update a channel's static info, replacing images if given.

        The channel a record belongs to cannot be changed.
        """
        async with self.db_session_factory() as session:
            info = await self._by_channel(session, channel_id)
            changes = data.model_dump(
                exclude_unset=True, exclude_none=True, exclude={"channel_id"}
            )

            if fav_icon is not None:
                measured = check_favicon(fav_icon)
                current = info.fav_icon
                if current and current.get("public_id"):
                    await self._media_client().destroy_quietly(current["public_id"], "image")
                changes["fav_icon"] = await self._upload_favicon(fav_icon, measured)
            if frequency_image is not None:
                asset = await self._replace_media(
                    info.frequency_image,
                    frequency_image,
                    "frequency image",
                    FREQUENCY_FOLDER,
                    transformation=FREQUENCY_TRANSFORMATION,
                )
                changes["frequency_image"] = asset.as_media()

            self._apply(info, changes)
            await session.commit()
            logger.info("Static info updated", channel_id=str(channel_id), fields=sorted(changes))
            return await self._load(session, info.id)

    async def delete_by_channel(self, channel_id: uuid.UUID) -> StaticInfo:
        async with self.db_session_factory() as session:
            info = await self._by_channel(session, channel_id)
            await self._destroy_media(info)
            await session.delete(info)
            await session.commit()
            logger.info("Static info deleted", channel_id=str(channel_id))
            return info


__all__ = [
    "FaviconCheck",
    "RECOMMENDED_SIZES",
    "StaticInfoService",
    "check_favicon",
]
