from __future__ import annotations

import logging
import time
from decimal import Decimal
from urllib.parse import quote

from credpix.models.pix import MerchantProfile, PixCodeRequest, PixCodeResult
from credpix.pix import build_brcode, render_qrcode_png
from credpix.pix_keys import is_valid_pix_key
from credpix.settings import QRSERVER_URL

logger = logging.getLogger(__name__)

TXID_DIGITS = 10
# Characters encodeURIComponent leaves untouched.
URI_COMPONENT_SAFE = "-_.!~*'()"


def generate_transaction_id() -> str:
    """Last 10 digits of the current epoch time in milliseconds."""
    return str(int(time.time() * 1000))[-TXID_DIGITS:]


class PixService:
    """Static PIX generation for a single merchant profile."""

    def __init__(
        self,
        profile: MerchantProfile,
        qr_service_url: str = QRSERVER_URL,
        qr_box_size: int = 10,
        qr_border: int = 2,
    ) -> None:
        profile.check()
        self.profile = profile
        self.qr_service_url = qr_service_url
        self.qr_box_size = qr_box_size
        self.qr_border = qr_border

    def generate(self, amount: Decimal | int | float | str, description: str = "") -> PixCodeResult:
        """Build a new static PIX code with a fresh transaction id."""
        request = PixCodeRequest.parse(amount, description, generate_transaction_id())
        result = self._build(request)
        logger.info(
            "Static PIX generated: txid=%s, amount=%s", result.transaction_id, result.amount
        )
        return result

    def regenerate(
        self, amount: Decimal | int | float | str, description: str, transaction_id: str
    ) -> PixCodeResult:
        """Rebuild the code of an existing request from its stored fields.

        Never creates a transaction id; ``"***"`` is encoded as given.
        """
        request = PixCodeRequest.parse(amount, description, transaction_id)
        result = self._build(request)
        logger.info(
            "Static PIX regenerated: txid=%s, amount=%s", result.transaction_id, result.amount
        )
        return result

    def classify(self, pix_key: str) -> bool:
        result = is_valid_pix_key(pix_key)
        logger.debug("classify pix_key valid=%s", result)
        return result

    def is_configured(self) -> bool:
        return is_valid_pix_key(self.profile.pix_key)

    def qr_code_url(self, pix_code: str) -> str:
        return f"{self.qr_service_url}{quote(pix_code, safe=URI_COMPONENT_SAFE)}"

    def qr_code_png(self, pix_code: str) -> bytes:
        return render_qrcode_png(pix_code, box_size=self.qr_box_size, border=self.qr_border)

    def _build(self, request: PixCodeRequest) -> PixCodeResult:
        pix_code = build_brcode(
            pix_key=self.profile.pix_key,
            merchant_name=self.profile.merchant_name,
            merchant_city=self.profile.merchant_city,
            amount=request.amount,
            txid=request.transaction_id,
            description=request.description,
        )
        logger.debug("BR Code built for txid=%s (%d chars)", request.transaction_id, len(pix_code))
        return PixCodeResult(
            pix_key=self.profile.pix_key,
            pix_code=pix_code,
            transaction_id=request.transaction_id,
            amount=request.amount,
            description=request.description,
            qr_code_url=self.qr_code_url(pix_code),
        )
