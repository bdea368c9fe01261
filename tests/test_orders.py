"""Tests for order placement"""

from httpx import AsyncClient

from tests.conftest import auth_headers


async def _place(client: AsyncClient, user, lines):
    response = await client.post(
        "/orders",
        json={"items": [{"menu_item_id": item.id, "quantity": qty} for item, qty in lines]},
        headers=auth_headers(user),
    )
    return response


async def test_total_is_computed_from_menu_prices(client: AsyncClient, staff_a, menu_a):
    margherita, lasagna, _ = menu_a

    response = await _place(client, staff_a, [(margherita, 3), (lasagna, 1)])

    assert response.status_code == 201
    body = response.json()
    assert body["total_amount"] == 52.50
    assert body["status"] == "pending"
    assert body["user_id"] == staff_a.id
    assert sorted(line["price"] for line in body["items"]) == [12.50, 15.00]


async def test_client_supplied_prices_are_ignored(client: AsyncClient, staff_a, menu_a):
    response = await client.post(
        "/orders",
        json={"items": [{"menu_item_id": menu_a[0].id, "quantity": 1, "price": 0.01}]},
        headers=auth_headers(staff_a),
    )

    assert response.json()["total_amount"] == 12.50


async def test_unavailable_item_rejected(client: AsyncClient, staff_a, menu_a):
    tiramisu = menu_a[2]

    response = await _place(client, staff_a, [(tiramisu, 1)])

    assert response.status_code == 400
    assert "Tiramisu" in response.json()["detail"]


async def test_foreign_item_not_found(client: AsyncClient, staff_a, menu_a, menu_b):
    response = await _place(client, staff_a, [(menu_a[0], 1), (menu_b[0], 1)])

    assert response.status_code == 404


async def test_empty_order_rejected(client: AsyncClient, staff_a, menu_a):
    response = await client.post("/orders", json={"items": []}, headers=auth_headers(staff_a))

    assert response.status_code == 422


async def test_zero_quantity_rejected(client: AsyncClient, staff_a, menu_a):
    response = await _place(client, staff_a, [(menu_a[0], 0)])

    assert response.status_code == 422


async def test_status_update(client: AsyncClient, staff_a, menu_a):
    headers = auth_headers(staff_a)
    order = (await _place(client, staff_a, [(menu_a[0], 1)])).json()

    response = await client.put(f"/orders/{order['id']}/status", json={"status": "preparing"}, headers=headers)
    listed = await client.get("/orders", params={"status": "preparing"}, headers=headers)

    assert response.status_code == 200
    assert response.json()["status"] == "preparing"
    assert [o["id"] for o in listed.json()] == [order["id"]]


async def test_status_update_of_foreign_order(client: AsyncClient, staff_a, admin_b, menu_b):
    order = (await _place(client, admin_b, [(menu_b[0], 1)])).json()

    response = await client.put(
        f"/orders/{order['id']}/status",
        json={"status": "cancelled"},
        headers=auth_headers(staff_a),
    )

    assert response.status_code == 404


async def test_only_admin_deletes(client: AsyncClient, staff_a, admin_a, menu_a):
    order = (await _place(client, staff_a, [(menu_a[0], 1)])).json()

    as_staff = await client.delete(f"/orders/{order['id']}", headers=auth_headers(staff_a))
    as_admin = await client.delete(f"/orders/{order['id']}", headers=auth_headers(admin_a))
    after = await client.get(f"/orders/{order['id']}", headers=auth_headers(admin_a))

    assert as_staff.status_code == 403
    assert as_admin.status_code == 204
    assert after.status_code == 404
