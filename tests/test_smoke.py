"""
tests.test_smoke

Boot the service and hit the probes.
"""

from __future__ import annotations

import httpx
import pytest


@pytest.mark.asyncio
async def test_health_endpoints(client: httpx.AsyncClient) -> None:
    r = await client.get("/healthz")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"

    r = await client.get("/readyz")
    assert r.status_code == 200
    assert r.json()["status"] == "ready"


@pytest.mark.asyncio
async def test_request_id_header_is_set(client: httpx.AsyncClient) -> None:
    r = await client.get("/healthz", headers={"x-request-id": "abc-123"})
    assert r.headers["x-request-id"] == "abc-123"
