"""PIX key classification.

A PIX key is one of: e-mail, phone (``+55`` + DDD + number), CPF/CNPJ
document number or a random key (UUID). Classification is advisory only:
callers keep the original string untouched in the BR Code.
"""

from __future__ import annotations

import re
from enum import Enum

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^\+55\d{10,11}$")
UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)
NON_DIGIT_RE = re.compile(r"\D")

CPF_LENGTH = 11
CNPJ_LENGTH = 14


class PixKeyType(str, Enum):
    EMAIL = "email"
    PHONE = "phone"
    DOCUMENT = "document"
    RANDOM = "random"


def classify_pix_key(key: object) -> PixKeyType | None:
    """Return the key type, or None when the key matches no known format.

    Rules are checked in order and the first match wins.
    """
    if not key or not isinstance(key, str):
        return None

    if EMAIL_RE.match(key):
        return PixKeyType.EMAIL
    if PHONE_RE.match(key):
        return PixKeyType.PHONE
    if len(NON_DIGIT_RE.sub("", key)) in (CPF_LENGTH, CNPJ_LENGTH):
        return PixKeyType.DOCUMENT
    if UUID_RE.match(key):
        return PixKeyType.RANDOM
    return None


def is_valid_pix_key(key: object) -> bool:
    return classify_pix_key(key) is not None
