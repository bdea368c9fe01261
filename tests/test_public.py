"""Tests for the public restaurant pages"""

from datetime import datetime, timedelta

from httpx import AsyncClient

from app.models.restaurant import RestaurantStatus
from tests.conftest import create_restaurant


def _booking(hours_ahead: int = 24, table: str = "T1") -> dict:
    start = datetime.utcnow() + timedelta(hours=hours_ahead)
    return {
        "table_number": table,
        "start_time": start.isoformat(),
        "end_time": (start + timedelta(hours=2)).isoformat(),
        "number_of_guests": 2,
        "customer_name": "Guest",
        "customer_email": "guest@example.com",
    }


async def test_active_restaurant_is_public(client: AsyncClient, restaurant_a):
    response = await client.get(f"/public/restaurants/{restaurant_a.id}")

    assert response.status_code == 200
    assert response.json()["name"] == "Trattoria A"
    assert "contact_email" not in response.json()


async def test_pending_restaurant_is_not_found(client: AsyncClient, test_db, platform_kam):
    pending = await create_restaurant(test_db, "Soon", "soon@soon.example.com", status=RestaurantStatus.PENDING)

    page = await client.get(f"/public/restaurants/{pending.id}")
    menu = await client.get(f"/public/restaurants/{pending.id}/menu-items")

    assert page.status_code == 404
    assert menu.status_code == 404


async def test_platform_organization_is_not_public(client: AsyncClient, platform_kam):
    response = await client.get("/public/restaurants/1")

    assert response.status_code == 404


async def test_public_menu_shows_available_items_only(client: AsyncClient, restaurant_a, menu_a, menu_b):
    response = await client.get(f"/public/restaurants/{restaurant_a.id}/menu-items")

    assert response.status_code == 200
    assert {item["name"] for item in response.json()} == {"Margherita", "Lasagna"}


async def test_unavailable_item_is_hidden(client: AsyncClient, restaurant_a, menu_a):
    tiramisu = menu_a[2]

    response = await client.get(f"/public/restaurants/{restaurant_a.id}/menu-items/{tiramisu.id}")

    assert response.status_code == 404


async def test_item_of_another_restaurant_is_hidden(client: AsyncClient, restaurant_a, menu_a, menu_b):
    response = await client.get(f"/public/restaurants/{restaurant_a.id}/menu-items/{menu_b[0].id}")

    assert response.status_code == 404


async def test_public_categories(client: AsyncClient, restaurant_a, menu_a, menu_b):
    response = await client.get(f"/public/restaurants/{restaurant_a.id}/categories")

    assert response.status_code == 200
    assert [c["restaurant_id"] for c in response.json()] == [restaurant_a.id]


async def test_guest_booking_lands_in_path_restaurant(client: AsyncClient, restaurant_a, restaurant_b):
    response = await client.post(f"/public/restaurants/{restaurant_a.id}/reservations", json=_booking())

    assert response.status_code == 201
    body = response.json()
    assert body["restaurant_id"] == restaurant_a.id
    assert body["user_id"] is None
    assert body["status"] == "pending"


async def test_guest_booking_respects_overlap(client: AsyncClient, restaurant_a, restaurant_b):
    first = await client.post(f"/public/restaurants/{restaurant_a.id}/reservations", json=_booking())
    clash = await client.post(f"/public/restaurants/{restaurant_a.id}/reservations", json=_booking())
    other_restaurant = await client.post(f"/public/restaurants/{restaurant_b.id}/reservations", json=_booking())

    assert first.status_code == 201
    assert clash.status_code == 409
    assert other_restaurant.status_code == 201


async def test_guest_order(client: AsyncClient, restaurant_a, menu_a):
    margherita, lasagna, _ = menu_a

    response = await client.post(
        f"/public/restaurants/{restaurant_a.id}/orders",
        json={
            "customer_name": "Guest",
            "customer_phone": "555-0100",
            "items": [
                {"menu_item_id": margherita.id, "quantity": 2},
                {"menu_item_id": lasagna.id, "quantity": 1},
            ],
        },
    )

    assert response.status_code == 201
    body = response.json()
    assert body["restaurant_id"] == restaurant_a.id
    assert body["total_amount"] == 40.00
    assert len(body["items"]) == 2


async def test_guest_order_with_foreign_item(client: AsyncClient, restaurant_a, menu_a, menu_b):
    response = await client.post(
        f"/public/restaurants/{restaurant_a.id}/orders",
        json={
            "customer_name": "Guest",
            "customer_phone": "555-0100",
            "items": [{"menu_item_id": menu_b[0].id, "quantity": 1}],
        },
    )

    assert response.status_code == 404
