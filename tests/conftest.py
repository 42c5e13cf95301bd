"""Root conftest: merchant profile and PixService fixtures."""

from __future__ import annotations

import pytest

from credpix.models.pix import MerchantProfile
from credpix.services.pix_service import PixService


def _sample_profile(**overrides) -> MerchantProfile:
    defaults = dict(
        pix_key="pix@example.com",
        merchant_name="ACME STORE",
        merchant_city="SAO PAULO",
    )
    defaults.update(overrides)
    return MerchantProfile(**defaults)


@pytest.fixture()
def sample_profile():
    return _sample_profile


@pytest.fixture()
def merchant_profile() -> MerchantProfile:
    return _sample_profile()


@pytest.fixture()
def pix_service(merchant_profile) -> PixService:
    return PixService(merchant_profile, qr_service_url="https://qr.test/?data=")
