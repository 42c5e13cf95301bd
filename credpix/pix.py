"""PIX BR Code payload generator following BCB EMV QR Code specification.

Builds the payload string for a static PIX QR code, checks it back and renders
it as a PNG image.
"""

from __future__ import annotations

import unicodedata
from decimal import ROUND_HALF_UP, Decimal
from io import BytesIO

import qrcode
from qrcode.exceptions import DataOverflowError
from qrcode.image.pil import PilImage

from credpix.exceptions import PixContractError

PIX_GUI = "br.gov.bcb.pix"

ID_PAYLOAD_FORMAT = "00"
ID_MERCHANT_ACCOUNT = "26"
ID_CATEGORY_CODE = "52"
ID_CURRENCY = "53"
ID_AMOUNT = "54"
ID_COUNTRY = "58"
ID_MERCHANT_NAME = "59"
ID_MERCHANT_CITY = "60"
ID_ADDITIONAL_DATA = "62"
ID_CRC = "63"
CRC_TRAILER = ID_CRC + "04"

# Merchant Account Information sub-fields
SUB_GUI = "00"
SUB_KEY = "01"
SUB_DESCRIPTION = "02"
# Additional Data Field Template sub-fields
SUB_REFERENCE_LABEL = "05"

MAX_FIELD_LENGTH = 99
MAX_AMOUNT_LENGTH = 13
CENTS = Decimal("0.01")


def tlv(tag: str, value: str) -> str:
    """Build a TLV (Tag-Length-Value) field.

    The length is two decimal digits, so ``value`` must not exceed 99
    characters.
    """
    if len(value) > MAX_FIELD_LENGTH:
        raise PixContractError(
            f"Field {tag} is {len(value)} characters long (max {MAX_FIELD_LENGTH})"
        )
    return f"{tag}{len(value):02d}{value}"


def crc16_ccitt(data: str) -> str:
    """Compute CRC-16/CCITT-FALSE (poly 0x1021, init 0xFFFF) as 4 uppercase hex digits."""
    crc = 0xFFFF
    for char in data:
        crc ^= ord(char) << 8
        for _ in range(8):
            if crc & 0x8000:
                crc = (crc << 1) ^ 0x1021
            else:
                crc <<= 1
            crc &= 0xFFFF
    return f"{crc:04X}"


def strip_accents(text: str) -> str:
    """Remove accents for ASCII-safe PIX payload fields."""
    nfkd = unicodedata.normalize("NFKD", text)
    return "".join(c for c in nfkd if not unicodedata.combining(c))


def format_amount(amount: Decimal) -> str:
    """Render an amount with exactly two decimal places (``7`` -> ``"7.00"``)."""
    return str(amount.quantize(CENTS, rounding=ROUND_HALF_UP))


def build_brcode(
    *,
    pix_key: str,
    merchant_name: str,
    merchant_city: str,
    amount: Decimal,
    txid: str,
    description: str = "",
) -> str:
    """Generate a static PIX BR Code payload string.

    Args:
        pix_key: The PIX key, copied verbatim into the payload.
        merchant_name: Recipient name, already cut to 25 chars.
        merchant_city: Recipient city, already cut to 15 chars.
        amount: Transaction amount in reais.
        txid: Reference label stored in the additional data template.
        description: Optional message for the payer, omitted when empty.

    Returns:
        The complete BR Code payload string ending with its CRC16.
    """
    formatted_amount = format_amount(amount)
    if len(formatted_amount) > MAX_AMOUNT_LENGTH:
        raise PixContractError(f"Amount {formatted_amount} does not fit the amount field")

    account_fields = [(SUB_GUI, PIX_GUI), (SUB_KEY, pix_key)]
    if description:
        account_fields.append((SUB_DESCRIPTION, description))

    fields = [
        (ID_PAYLOAD_FORMAT, "01"),
        (ID_MERCHANT_ACCOUNT, _join(account_fields)),
        (ID_CATEGORY_CODE, "0000"),
        (ID_CURRENCY, "986"),  # BRL
        (ID_AMOUNT, formatted_amount),
        (ID_COUNTRY, "BR"),
        (ID_MERCHANT_NAME, merchant_name),
        (ID_MERCHANT_CITY, merchant_city),
        (ID_ADDITIONAL_DATA, tlv(SUB_REFERENCE_LABEL, txid)),
    ]

    # The "6304" trailer is part of the checksummed data.
    payload = _join(fields) + CRC_TRAILER
    return payload + crc16_ccitt(payload)


def _join(fields: list[tuple[str, str]]) -> str:
    return "".join(tlv(tag, value) for tag, value in fields)


def parse_tlv(data: str) -> list[tuple[str, str]]:
    """Split a TLV string into ordered ``(tag, value)`` pairs."""
    fields: list[tuple[str, str]] = []
    index = 0
    while index < len(data):
        if index + 4 > len(data):
            raise PixContractError(f"Truncated field header at position {index}")
        tag = data[index : index + 2]
        length_str = data[index + 2 : index + 4]
        if not length_str.isdigit():
            raise PixContractError(f"Invalid length {length_str!r} for field {tag}")
        end = index + 4 + int(length_str)
        if end > len(data):
            raise PixContractError(f"Field {tag} runs past the end of the payload")
        fields.append((tag, data[index + 4 : end]))
        index = end
    return fields


def verify_checksum(code: str) -> bool:
    """Check that the last 4 characters are the CRC16 of everything before them."""
    if len(code) < 8 or code[-8:-4] != CRC_TRAILER:
        return False
    return crc16_ccitt(code[:-4]) == code[-4:]


def render_qrcode_png(payload: str, *, box_size: int = 10, border: int = 2) -> bytes:
    """Render a BR Code payload as a QR code.

    Returns:
        PNG image bytes.

    Raises:
        PixContractError: the payload does not fit in a QR code.
    """
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=box_size,
        border=border,
    )
    qr.add_data(payload)
    try:
        qr.make(fit=True)
    except (DataOverflowError, ValueError) as exc:
        raise PixContractError(f"Payload of {len(payload)} characters does not fit a QR code") from exc

    img: PilImage = qr.make_image(fill_color="black", back_color="white")

    buf = BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()
