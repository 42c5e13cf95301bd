"""Web test fixtures: TestClient wired to a synthetic merchant profile."""

from __future__ import annotations

import pytest


@pytest.fixture()
def client(monkeypatch, pix_service):
    from starlette.testclient import TestClient

    import web.app as app_module

    monkeypatch.setattr(app_module, "get_pix_service", lambda: pix_service)

    with TestClient(app_module.app) as test_client:
        yield test_client
