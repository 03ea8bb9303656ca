"""API tests for /api/v1/members against in-memory repositories."""

from httpx import AsyncClient

BASE = "/api/v1/members"


async def _create(client: AsyncClient, headers: dict, name: str, phone: str = "0171") -> dict:
    resp = await client.post(BASE, json={"name": name, "phone_number": phone}, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


async def test_create_requires_admin(client, api) -> None:
    resp = await client.post(BASE, json={"name": "Karim", "phone_number": "0171"})
    assert resp.status_code == 401
    body = resp.json()
    assert body["code"] == 8002
    assert body["data"] is None
    assert api.store.members == {}


async def test_bad_token_rejected(client, api) -> None:
    resp = await client.post(
        BASE,
        json={"name": "Karim", "phone_number": "0171"},
        headers={"Authorization": "Bearer not-a-jwt"},
    )
    assert resp.status_code == 401


async def test_create_and_get(client, api, admin_headers) -> None:
    created = await _create(client, admin_headers, "Karim")
    assert created["is_active"] is True
    assert created["join_date"]

    resp = await client.get(f"{BASE}/{created['id']}")
    assert resp.status_code == 200
    body = resp.json()
    assert body["code"] == 0
    assert body["data"]["name"] == "Karim"
    assert body["request_id"] == resp.headers["X-Request-ID"]


async def test_blank_name_is_validation_error(client, api, admin_headers) -> None:
    resp = await client.post(BASE, json={"name": "   ", "phone_number": "0171"}, headers=admin_headers)
    assert resp.status_code == 422
    body = resp.json()
    assert body["code"] == 1001
    assert body["data"][0]["field"] == "name"


async def test_missing_phone_is_validation_error(client, api, admin_headers) -> None:
    resp = await client.post(BASE, json={"name": "Karim"}, headers=admin_headers)
    assert resp.status_code == 422
    assert {e["field"] for e in resp.json()["data"]} == {"phone_number"}


async def test_list_sorted_by_name(client, api, admin_headers) -> None:
    await _create(client, admin_headers, "Zaman")
    await _create(client, admin_headers, "Alam")
    resp = await client.get(BASE)
    assert [m["name"] for m in resp.json()["data"]] == ["Alam", "Zaman"]


async def test_list_empty(client, api) -> None:
    resp = await client.get(BASE)
    assert resp.status_code == 200
    assert resp.json()["data"] == []


async def test_get_missing_is_404(client, api) -> None:
    resp = await client.get(f"{BASE}/123")
    assert resp.status_code == 404
    assert resp.json()["code"] == 2001


async def test_partial_update(client, api, admin_headers) -> None:
    created = await _create(client, admin_headers, "Karim", "0171")
    resp = await client.put(
        f"{BASE}/{created['id']}", json={"is_active": False}, headers=admin_headers
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["is_active"] is False
    assert data["name"] == "Karim"
    assert data["phone_number"] == "0171"


async def test_delete_blocked_by_deposit(client, api, admin_headers) -> None:
    member = await _create(client, admin_headers, "Karim")
    dep = await client.post(
        "/api/v1/deposits",
        json={"member_id": member["id"], "amount": 500},
        headers=admin_headers,
    )
    assert dep.status_code == 201

    resp = await client.delete(f"{BASE}/{member['id']}", headers=admin_headers)

    assert resp.status_code == 409
    assert resp.json()["message"] == "Cannot delete member with existing deposits. Deactivate instead."
    assert member["id"] in api.store.members


async def test_delete_removes_member_from_purchases(client, api, admin_headers) -> None:
    a = await _create(client, admin_headers, "A")
    b = await _create(client, admin_headers, "B")
    purchase = await client.post(
        "/api/v1/cow-purchases",
        data={"amount": "9000", "participating_members": [a["id"], b["id"]]},
        headers=admin_headers,
    )
    assert purchase.status_code == 201

    resp = await client.delete(f"{BASE}/{a['id']}", headers=admin_headers)

    assert resp.status_code == 200
    got = await client.get(f"/api/v1/cow-purchases/{purchase.json()['data']['id']}")
    assert got.json()["data"]["participating_member_ids"] == [b["id"]]


async def test_with_deposits_counts_every_status(client, api, admin_headers) -> None:
    member = await _create(client, admin_headers, "Karim")
    for amount, status in ((500, "approved"), (300, "pending")):
        await client.post(
            "/api/v1/deposits",
            json={"member_id": member["id"], "amount": amount, "status": status},
            headers=admin_headers,
        )
    await _create(client, admin_headers, "Zaman")

    resp = await client.get(f"{BASE}/with-deposits")

    rows = {r["name"]: r["total_deposit"] for r in resp.json()["data"]}
    assert rows == {"Karim": 800, "Zaman": 0}
