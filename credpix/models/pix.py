from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from credpix.exceptions import PixConfigurationError, PixContractError
from credpix.pix import (
    CENTS,
    MAX_FIELD_LENGTH,
    PIX_GUI,
    SUB_DESCRIPTION,
    SUB_GUI,
    SUB_KEY,
    strip_accents,
    tlv,
)
from credpix.pix_keys import is_valid_pix_key

MAX_MERCHANT_NAME = 25
MAX_MERCHANT_CITY = 15
MAX_DESCRIPTION = 25

HIDDEN_TXID = "***"
TXID_RE = re.compile(r"^(\*\*\*|[A-Za-z0-9]{1,25})$")


class MerchantProfile(BaseModel):
    """Receiving account identity, loaded once at startup."""

    model_config = ConfigDict(frozen=True)

    pix_key: str
    merchant_name: str
    merchant_city: str

    @classmethod
    def from_settings(cls, settings) -> MerchantProfile:
        """Build a profile from settings, ASCII-folding and cutting name/city to size."""
        return cls(
            pix_key=settings.pix_key.strip(),
            merchant_name=strip_accents(settings.pix_merchant_name.strip())[:MAX_MERCHANT_NAME],
            merchant_city=strip_accents(settings.pix_merchant_city.strip())[:MAX_MERCHANT_CITY],
        )

    def check(self) -> None:
        missing = [
            name
            for name in ("pix_key", "merchant_name", "merchant_city")
            if not getattr(self, name)
        ]
        if missing:
            raise PixConfigurationError(f"Missing PIX configuration: {', '.join(missing)}")
        if len(self.merchant_name) > MAX_MERCHANT_NAME:
            raise PixConfigurationError(
                f"Merchant name longer than {MAX_MERCHANT_NAME} characters"
            )
        if len(self.merchant_city) > MAX_MERCHANT_CITY:
            raise PixConfigurationError(
                f"Merchant city longer than {MAX_MERCHANT_CITY} characters"
            )
        if not is_valid_pix_key(self.pix_key):
            raise PixConfigurationError(f"Invalid PIX key: {self.pix_key!r}")
        if len(self.pix_key) > max_pix_key_length():
            raise PixConfigurationError(
                f"PIX key longer than {max_pix_key_length()} characters leaves no room "
                "for a description in the merchant account field"
            )


class PixCodeRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    amount: Decimal
    description: str = ""
    transaction_id: str

    @classmethod
    def parse(
        cls, amount: Decimal | int | float | str, description: str, transaction_id: str
    ) -> PixCodeRequest:
        """Validate raw caller input. Raises PixContractError on bad values."""
        description = description or ""
        if len(description) > MAX_DESCRIPTION:
            raise PixContractError(
                f"Description longer than {MAX_DESCRIPTION} characters: {description!r}"
            )
        if not isinstance(transaction_id, str) or not TXID_RE.match(transaction_id):
            raise PixContractError(f"Invalid transaction id: {transaction_id!r}")
        return cls(
            amount=parse_amount(amount),
            description=description,
            transaction_id=transaction_id,
        )


class PixCodeResult(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    pix_key: str
    pix_code: str
    transaction_id: str
    amount: Decimal
    description: str = ""
    qr_code_url: str = ""


def parse_amount(value: Decimal | int | float | str) -> Decimal:
    """Convert an amount to a positive Decimal with two decimal places."""
    if isinstance(value, bool):
        raise PixContractError(f"Invalid amount: {value!r}")
    try:
        amount = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise PixContractError(f"Invalid amount: {value!r}") from exc
    if not amount.is_finite():
        raise PixContractError(f"Invalid amount: {value!r}")
    try:
        amount = amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise PixContractError(f"Amount out of range: {value!r}") from exc
    if amount <= 0:
        raise PixContractError(f"Amount must be greater than zero: {value!r}")
    return amount


def max_pix_key_length() -> int:
    """Longest key that still fits field 26 alongside a full-size description."""
    fixed = tlv(SUB_GUI, PIX_GUI) + tlv(SUB_KEY, "") + tlv(SUB_DESCRIPTION, "x" * MAX_DESCRIPTION)
    return MAX_FIELD_LENGTH - len(fixed)
