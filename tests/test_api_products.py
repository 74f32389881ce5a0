"""
tests.test_api_products

Product catalogue endpoints end to end.
"""

from __future__ import annotations

import httpx
import pytest
from sqlalchemy.exc import OperationalError

from fruitbar.auth.roles import Role
from fruitbar.db.repositories.products import ProductRepo
from fruitbar.errors import INTERNAL_SERVER_ERROR_MSG

APPLE = {"name": "Apple", "symbol": "A", "price": 1.5, "numInStock": 10}


async def _create(client: httpx.AsyncClient, auth, body: dict) -> dict:
    r = await client.post("/v1/products", json=body, headers=auth(1, Role.admin))
    assert r.status_code == 201, r.text
    return r.json()["data"]


@pytest.mark.asyncio
async def test_admin_creates_and_anyone_reads(client: httpx.AsyncClient, auth) -> None:
    created = await _create(client, auth, APPLE)
    assert created == {"id": 1, "name": "Apple", "symbol": "A", "price": 1.5, "numInStock": 10}

    r = await client.get("/v1/products/1", headers=auth(5, Role.customer))
    assert r.status_code == 200
    assert r.json()["data"]["name"] == "Apple"


@pytest.mark.asyncio
async def test_invalid_product_is_rejected_with_prefix(client: httpx.AsyncClient, auth) -> None:
    r = await client.post(
        "/v1/products", json={**APPLE, "symbol": "AP"}, headers=auth(1, Role.admin)
    )
    assert r.status_code == 400
    assert r.json()["error"] == {
        "code": 400,
        "message": "Product validation failed: symbol must be exactly 1 printable character",
    }


@pytest.mark.asyncio
async def test_malformed_body_is_bad_request(client: httpx.AsyncClient, auth) -> None:
    r = await client.post(
        "/v1/products", json={**APPLE, "price": "cheap"}, headers=auth(1, Role.admin)
    )
    assert r.status_code == 400
    assert r.json()["error"]["message"].startswith("invalid request: price")


@pytest.mark.asyncio
async def test_partial_update_checks_only_selected_fields(client: httpx.AsyncClient, auth) -> None:
    await _create(client, auth, APPLE)
    admin = auth(1, Role.admin)

    r = await client.put("/v1/products/1?fields=price", json={"price": -1}, headers=admin)
    assert r.status_code == 400
    assert r.json()["error"]["message"] == (
        "Product validation failed: price must be greater than zero, got -1.00"
    )

    r = await client.put(
        "/v1/products/1?fields=name", json={"name": "Green Apple", "price": -1}, headers=admin
    )
    assert r.status_code == 200
    assert r.json()["data"]["name"] == "Green Apple"
    assert r.json()["data"]["price"] == 1.5


@pytest.mark.asyncio
async def test_full_update_requires_every_field(client: httpx.AsyncClient, auth) -> None:
    await _create(client, auth, APPLE)
    admin = auth(1, Role.admin)

    r = await client.put("/v1/products/1", json={"name": "Pear"}, headers=admin)
    assert r.status_code == 400

    r = await client.put(
        "/v1/products/1",
        json={"name": "Pear", "symbol": "P", "price": 2.25, "numInStock": 0},
        headers=admin,
    )
    assert r.status_code == 200
    assert r.json()["data"] == {"id": 1, "name": "Pear", "symbol": "P", "price": 2.25, "numInStock": 0}


@pytest.mark.asyncio
async def test_listing_sets_content_range(client: httpx.AsyncClient, auth) -> None:
    for i, symbol in enumerate("ABCDE", start=1):
        await _create(client, auth, {**APPLE, "name": f"fruit-{i}", "symbol": symbol})
    customer = auth(5, Role.customer)

    r = await client.get("/v1/products", headers=customer)
    assert r.status_code == 200
    assert [p["id"] for p in r.json()["data"]] == [1, 2, 3, 4, 5]
    assert r.headers["content-range"] == "products=1-5/5"

    r = await client.get("/v1/products?after_id=2&limit=2", headers=customer)
    assert [p["id"] for p in r.json()["data"]] == [3, 4]
    assert r.headers["content-range"] == "products=3-4/3"

    r = await client.get("/v1/products?before_id=5&limit=2", headers=customer)
    assert [p["id"] for p in r.json()["data"]] == [3, 4]
    assert r.headers["content-range"] == "products=3-4/4"

    r = await client.get("/v1/products?after_id=9", headers=customer)
    assert r.json()["data"] == []
    assert r.headers["content-range"] == "products=0-0/0"


@pytest.mark.asyncio
async def test_listing_rejects_bad_windows(client: httpx.AsyncClient, auth) -> None:
    customer = auth(5, Role.customer)

    r = await client.get("/v1/products?after_id=1&before_id=3", headers=customer)
    assert r.status_code == 400
    assert r.json()["error"]["message"] == (
        "Only one of after_id and before_id query parameters can be set."
    )

    r = await client.get("/v1/products?limit=0", headers=customer)
    assert r.status_code == 400

    r = await client.get("/v1/products?limit=51", headers=customer)
    assert r.status_code == 400
    assert r.json()["error"]["message"] == "limit must be less than or equal to 50"

    r = await client.get("/v1/products?after_id=99999999999999999999", headers=customer)
    assert r.status_code == 400
    assert r.json()["error"]["code"] == 400
    assert "must be less than or equal to" in r.json()["error"]["message"]


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/v1/products", "/v1/orders", "/v1/users"])
async def test_oversized_path_id_is_bad_request(client: httpx.AsyncClient, auth, path: str) -> None:
    r = await client.get(f"{path}/99999999999999999999", headers=auth(1, Role.admin))
    assert r.status_code == 400
    assert r.json()["error"]["message"].startswith("invalid request: ")

    r = await client.get(f"{path}/0", headers=auth(1, Role.admin))
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_page_limit_endpoint(client: httpx.AsyncClient, auth) -> None:
    r = await client.get("/v1/products/limit", headers=auth(5, Role.customer))
    assert r.status_code == 200
    assert r.json() == {"data": 50}


@pytest.mark.asyncio
async def test_delete_then_not_found(client: httpx.AsyncClient, auth) -> None:
    await _create(client, auth, APPLE)
    admin = auth(1, Role.admin)

    r = await client.delete("/v1/products/1", headers=admin)
    assert r.status_code == 200
    assert r.json() == {"data": None}

    r = await client.get("/v1/products/1", headers=admin)
    assert r.status_code == 404
    assert r.json()["error"]["message"] == "The specified product could not be found."


@pytest.mark.asyncio
async def test_storage_failure_is_a_generic_500(
    client: httpx.AsyncClient, auth, monkeypatch: pytest.MonkeyPatch
) -> None:
    async def _broken_fetch(self, seek):
        raise OperationalError("SELECT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(ProductRepo, "fetch", _broken_fetch)
    r = await client.get("/v1/products", headers=auth(5, Role.customer))
    assert r.status_code == 500
    assert r.json() == {"error": {"code": 500, "message": INTERNAL_SERVER_ERROR_MSG}}
