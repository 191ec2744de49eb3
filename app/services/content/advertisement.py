"""Advertisement service."""

from app.core.logging import get_logger
from app.models.advertisement import Advertisement
from app.schemas.advertisement import AdvertisementCreate
from app.services.content.base import ContentService

logger = get_logger(__name__)


class AdvertisementService(ContentService[Advertisement]):
    """Advertising enquiries: public create, staff read and delete."""

    model = Advertisement
    channel_missing_status = 404

    async def create(self, data: AdvertisementCreate) -> Advertisement:
        """Record an enquiry.

        Raises:
            RecordNotFoundError: If the channel is unknown
        """
        async with self.db_session_factory() as session:
            await self._ensure_channel(session, data.channel_id)
            advertisement = Advertisement(
                channel_id=data.channel_id,
                name=data.name,
                email=data.email,
                phone_number=data.phone_number,
                message=data.message,
            )
            advertisement = await self._persist(session, advertisement)
            logger.info("Advertisement enquiry received", advertisement_id=str(advertisement.id))
            return advertisement


__all__ = ["AdvertisementService"]
