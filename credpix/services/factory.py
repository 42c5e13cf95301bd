import logging
from functools import lru_cache

from credpix.models.pix import MerchantProfile
from credpix.services.pix_service import PixService
from credpix.settings import settings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_pix_service() -> PixService:
    """Process-wide PixService. Raises PixConfigurationError on bad settings."""
    profile = MerchantProfile.from_settings(settings)
    service = PixService(
        profile,
        qr_service_url=settings.qr_service_url,
        qr_box_size=settings.qr_box_size,
        qr_border=settings.qr_border,
    )
    logger.info(
        "PIX service configured: merchant=%s, city=%s",
        profile.merchant_name,
        profile.merchant_city,
    )
    return service
