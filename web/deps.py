from __future__ import annotations

import logging

from fastapi import Request

from credpix.services.factory import get_pix_service as _build_pix_service
from credpix.services.pix_service import PixService

logger = logging.getLogger(__name__)


def get_pix_service(request: Request) -> PixService:
    """Service built at startup, falling back to the process-wide one."""
    service = getattr(request.app.state, "pix_service", None)
    if service is None:
        logger.debug("No PIX service on app state, using process-wide instance")
        service = _build_pix_service()
    return service
