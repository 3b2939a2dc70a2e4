"""Tests for the HTTP API."""

from typing import Callable

import pytest
from httpx import AsyncClient

from hotel_orders.models.actor import Actor

ORDER_PAYLOAD = {
    "hotel_id": "H1",
    "items": [{"id": "I1", "quantity": 2, "notes": "well done"}],
    "customer_phone": "+15550100",
    "fulfillment_type": "delivery",
    "delivery_address": {
        "street": "1 Main St",
        "city": "Springfield",
        "coordinates": [-73.98, 40.75],
    },
}


async def _place_order(
    client: AsyncClient,
    headers: dict[str, str],
    payload: dict | None = None,
) -> dict:
    response = await client.post("/api/v1/orders", json=payload or ORDER_PAYLOAD, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_health_check(test_client: AsyncClient) -> None:
    """Test health check endpoint."""
    response = await test_client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["live_channels"] == 0


@pytest.mark.asyncio
async def test_root(test_client: AsyncClient) -> None:
    """Test root endpoint."""
    response = await test_client.get("/")

    assert response.status_code == 200
    assert response.json()["docs"] == "/docs"


@pytest.mark.asyncio
async def test_create_order(
    test_client: AsyncClient,
    customer: Actor,
    auth_headers: Callable[[Actor], dict[str, str]],
) -> None:
    """Test placing an order."""
    data = await _place_order(test_client, auth_headers(customer))

    assert data["id"]
    assert data["status"] == "pending"
    assert data["payment_status"] == "pending"
    assert data["customer_id"] == customer.id
    assert data["customer_name"] == customer.name
    assert data["subtotal"] == "20.00"
    assert data["total_amount"] == "20.00"
    assert data["items"][0]["line_total"] == "20.00"
    assert data["items"][0]["notes"] == "well done"
    assert data["delivery_address"]["location"] == {
        "type": "Point",
        "coordinates": [-73.98, 40.75],
    }
    assert [entry["status"] for entry in data["status_timeline"]] == ["pending"]
    assert data["version"] == 1


@pytest.mark.asyncio
async def test_create_order_requires_actor(test_client: AsyncClient) -> None:
    """Test that anonymous and malformed callers are rejected."""
    response = await test_client.post("/api/v1/orders", json=ORDER_PAYLOAD)
    assert response.status_code == 401

    response = await test_client.post(
        "/api/v1/orders",
        json=ORDER_PAYLOAD,
        headers={"X-Actor-Id": "u1", "X-Actor-Role": "superuser"},
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_create_order_error_body(
    test_client: AsyncClient,
    owner: Actor,
    auth_headers: Callable[[Actor], dict[str, str]],
) -> None:
    """Test the error body of a refused request."""
    headers = {**auth_headers(owner), "X-Request-ID": "req-123"}

    response = await test_client.post("/api/v1/orders", json=ORDER_PAYLOAD, headers=headers)

    assert response.status_code == 403
    assert response.headers["X-Request-ID"] == "req-123"
    body = response.json()
    assert body["status_code"] == 403
    assert body["error_code"] == "FORBIDDEN"
    assert body["message"] == "Only customers can place orders"
    assert body["path"] == "/api/v1/orders"
    assert body["request_id"] == "req-123"
    assert body["timestamp"]


@pytest.mark.asyncio
async def test_create_order_unavailable_item(
    test_client: AsyncClient,
    customer: Actor,
    auth_headers: Callable[[Actor], dict[str, str]],
) -> None:
    """Test ordering an unavailable item."""
    payload = {**ORDER_PAYLOAD, "items": [{"id": "I2", "quantity": 1}]}

    response = await test_client.post(
        "/api/v1/orders", json=payload, headers=auth_headers(customer)
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Menu item I2 is unavailable"


@pytest.mark.asyncio
async def test_create_order_without_active_menu(
    test_client: AsyncClient,
    customer: Actor,
    auth_headers: Callable[[Actor], dict[str, str]],
) -> None:
    """Test ordering from a hotel that has no active menu."""
    payload = {**ORDER_PAYLOAD, "hotel_id": "H2"}

    response = await test_client.post(
        "/api/v1/orders", json=payload, headers=auth_headers(customer)
    )

    assert response.status_code == 404
    assert response.json()["error_code"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_create_order_validation(
    test_client: AsyncClient,
    customer: Actor,
    auth_headers: Callable[[Actor], dict[str, str]],
) -> None:
    """Test malformed payloads."""
    for payload in (
        {**ORDER_PAYLOAD, "items": []},
        {**ORDER_PAYLOAD, "items": [{"id": "I1", "quantity": 0}]},
        {key: value for key, value in ORDER_PAYLOAD.items() if key != "customer_phone"},
    ):
        response = await test_client.post(
            "/api/v1/orders", json=payload, headers=auth_headers(customer)
        )
        assert response.status_code == 422


@pytest.mark.asyncio
async def test_list_my_orders(
    test_client: AsyncClient,
    customer: Actor,
    other_customer: Actor,
    auth_headers: Callable[[Actor], dict[str, str]],
) -> None:
    """Test the caller's order history."""
    created = await _place_order(test_client, auth_headers(customer))
    await _place_order(test_client, auth_headers(other_customer))

    response = await test_client.get("/api/v1/orders/mine", headers=auth_headers(customer))

    assert response.status_code == 200
    assert [order["id"] for order in response.json()] == [created["id"]]


@pytest.mark.asyncio
async def test_get_order(
    test_client: AsyncClient,
    customer: Actor,
    other_customer: Actor,
    owner: Actor,
    auth_headers: Callable[[Actor], dict[str, str]],
) -> None:
    """Test reading an order as customer, hotel owner and stranger."""
    created = await _place_order(test_client, auth_headers(customer))
    url = f"/api/v1/orders/{created['id']}"

    for actor in (customer, owner):
        response = await test_client.get(url, headers=auth_headers(actor))
        assert response.status_code == 200
        assert response.json()["id"] == created["id"]

    response = await test_client.get(url, headers=auth_headers(other_customer))
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_get_missing_order(
    test_client: AsyncClient,
    admin: Actor,
    auth_headers: Callable[[Actor], dict[str, str]],
) -> None:
    """Test reading an order that does not exist."""
    response = await test_client.get("/api/v1/orders/" + "0" * 32, headers=auth_headers(admin))

    assert response.status_code == 404
    assert response.json()["message"] == "Order not found"


@pytest.mark.asyncio
async def test_update_order_status(
    test_client: AsyncClient,
    customer: Actor,
    owner: Actor,
    auth_headers: Callable[[Actor], dict[str, str]],
) -> None:
    """Test a hotel owner moving an order forward."""
    created = await _place_order(test_client, auth_headers(customer))

    response = await test_client.patch(
        f"/api/v1/orders/{created['id']}/status",
        json={
            "status": "confirmed",
            "notes": "Kitchen accepted",
            "estimated_ready_time": "2026-01-01T12:30:00Z",
        },
        headers=auth_headers(owner),
    )

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "confirmed"
    assert data["version"] == 2
    assert data["estimated_ready_time"].startswith("2026-01-01T12:30:00")
    latest = data["status_timeline"][-1]
    assert latest["status"] == "confirmed"
    assert latest["notes"] == "Kitchen accepted"
    assert latest["updated_by"] == owner.id


@pytest.mark.asyncio
async def test_update_order_status_refused(
    test_client: AsyncClient,
    customer: Actor,
    other_owner: Actor,
    owner: Actor,
    auth_headers: Callable[[Actor], dict[str, str]],
) -> None:
    """Test refused and malformed status updates."""
    created = await _place_order(test_client, auth_headers(customer))
    url = f"/api/v1/orders/{created['id']}/status"

    for actor in (customer, other_owner):
        response = await test_client.patch(
            url, json={"status": "cancelled"}, headers=auth_headers(actor)
        )
        assert response.status_code == 403

    response = await test_client.patch(url, json={"status": "teleported"}, headers=auth_headers(owner))
    assert response.status_code == 422

    response = await test_client.get(f"/api/v1/orders/{created['id']}", headers=auth_headers(owner))
    assert response.json()["status"] == "pending"


@pytest.mark.asyncio
async def test_event_stream_refused(
    test_client: AsyncClient,
    customer: Actor,
    other_customer: Actor,
    admin: Actor,
    auth_headers: Callable[[Actor], dict[str, str]],
) -> None:
    """Test that streams are refused before any event is sent."""
    created = await _place_order(test_client, auth_headers(customer))

    response = await test_client.get(
        f"/api/v1/orders/{created['id']}/events", headers=auth_headers(other_customer)
    )
    assert response.status_code == 403

    response = await test_client.get(
        "/api/v1/orders/" + "0" * 32 + "/events", headers=auth_headers(admin)
    )
    assert response.status_code == 404

    health = await test_client.get("/health")
    assert health.json()["live_channels"] == 0
