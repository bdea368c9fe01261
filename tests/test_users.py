"""Tests for tenant user management"""

from httpx import AsyncClient

from tests.conftest import auth_headers


NEW_USER = {
    "email": "chef@trattoria-a.example.com",
    "password": "chef-password",
    "first_name": "Paolo",
    "last_name": "Verdi",
    "role": "Staff",
}


async def test_admin_creates_user(client: AsyncClient, admin_a, restaurant_a):
    response = await client.post("/users", json=NEW_USER, headers=auth_headers(admin_a))

    assert response.status_code == 201
    assert response.json()["restaurant_id"] == restaurant_a.id
    assert response.json()["is_active"] is True


async def test_duplicate_email_conflicts(client: AsyncClient, admin_a):
    headers = auth_headers(admin_a)
    await client.post("/users", json=NEW_USER, headers=headers)

    response = await client.post("/users", json=NEW_USER, headers=headers)

    assert response.status_code == 409


async def test_kam_role_rejected(client: AsyncClient, admin_a):
    response = await client.post("/users", json={**NEW_USER, "role": "KAM"}, headers=auth_headers(admin_a))

    assert response.status_code == 400


async def test_staff_cannot_manage_users(client: AsyncClient, staff_a):
    headers = auth_headers(staff_a)

    listing = await client.get("/users", headers=headers)
    create = await client.post("/users", json=NEW_USER, headers=headers)

    assert listing.status_code == 403
    assert create.status_code == 403


async def test_list_only_own_users(client: AsyncClient, admin_a, staff_a, admin_b):
    response = await client.get("/users", headers=auth_headers(admin_a))

    assert {u["id"] for u in response.json()} == {admin_a.id, staff_a.id}


async def test_role_filter(client: AsyncClient, admin_a, staff_a):
    response = await client.get("/users", params={"role": "Staff"}, headers=auth_headers(admin_a))

    assert [u["id"] for u in response.json()] == [staff_a.id]


async def test_cannot_deactivate_self(client: AsyncClient, admin_a):
    response = await client.patch(
        f"/users/{admin_a.id}/status",
        json={"is_active": False},
        headers=auth_headers(admin_a),
    )

    assert response.status_code == 400


async def test_deactivated_user_cannot_log_in(client: AsyncClient, admin_a, staff_a):
    from tests.conftest import ADMIN_PASSWORD

    response = await client.patch(
        f"/users/{staff_a.id}/status",
        json={"is_active": False},
        headers=auth_headers(admin_a),
    )
    login = await client.post("/auth/login", json={"email": staff_a.email, "password": ADMIN_PASSWORD})

    assert response.status_code == 200
    assert response.json()["is_active"] is False
    assert login.status_code == 401


async def test_cannot_delete_self(client: AsyncClient, admin_a):
    response = await client.delete(f"/users/{admin_a.id}", headers=auth_headers(admin_a))

    assert response.status_code == 400


async def test_foreign_user_not_found(client: AsyncClient, admin_a, admin_b):
    headers = auth_headers(admin_a)

    read = await client.get(f"/users/{admin_b.id}", headers=headers)
    delete = await client.delete(f"/users/{admin_b.id}", headers=headers)

    assert read.status_code == 404
    assert delete.status_code == 404


async def test_update_user_password(client: AsyncClient, admin_a, staff_a):
    response = await client.put(
        f"/users/{staff_a.id}",
        json={"password": "brand-new-password"},
        headers=auth_headers(admin_a),
    )
    login = await client.post("/auth/login", json={"email": staff_a.email, "password": "brand-new-password"})

    assert response.status_code == 200
    assert login.status_code == 200
