"""Tests for the own-account profile endpoints"""

from httpx import AsyncClient

from tests.conftest import ADMIN_PASSWORD, auth_headers


async def test_get_profile(client: AsyncClient, staff_a):
    response = await client.get("/profile", headers=auth_headers(staff_a))

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == staff_a.id
    assert body["timezone"] == "UTC"
    assert body["language"] == "en"
    assert "hashed_password" not in body


async def test_profile_requires_token(client: AsyncClient):
    response = await client.get("/profile")

    assert response.status_code == 401


async def test_update_profile(client: AsyncClient, staff_a):
    response = await client.put(
        "/profile",
        json={"first_name": "Giulia", "phone": "+39 02 000", "timezone": "Europe/Rome", "language": "it"},
        headers=auth_headers(staff_a),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["first_name"] == "Giulia"
    assert body["last_name"] == "Staff"
    assert body["timezone"] == "Europe/Rome"
    assert body["language"] == "it"


async def test_profile_update_cannot_change_role_or_tenant(client: AsyncClient, staff_a, restaurant_b):
    response = await client.put(
        "/profile",
        json={"role": "Admin", "restaurant_id": restaurant_b.id, "email": "boss@example.com"},
        headers=auth_headers(staff_a),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["role"] == "Staff"
    assert body["restaurant_id"] == staff_a.restaurant_id
    assert body["email"] == staff_a.email


async def test_change_password(client: AsyncClient, staff_a):
    response = await client.put(
        "/profile/password",
        json={"current_password": ADMIN_PASSWORD, "new_password": "fresh-password-1"},
        headers=auth_headers(staff_a),
    )
    old_login = await client.post("/auth/login", json={"email": staff_a.email, "password": ADMIN_PASSWORD})
    new_login = await client.post("/auth/login", json={"email": staff_a.email, "password": "fresh-password-1"})

    assert response.status_code == 200
    assert old_login.status_code == 401
    assert new_login.status_code == 200


async def test_change_password_requires_current_password(client: AsyncClient, staff_a):
    response = await client.put(
        "/profile/password",
        json={"current_password": "wrong-password", "new_password": "fresh-password-1"},
        headers=auth_headers(staff_a),
    )
    login = await client.post("/auth/login", json={"email": staff_a.email, "password": ADMIN_PASSWORD})

    assert response.status_code == 400
    assert response.json() == {"detail": "Current password is incorrect"}
    assert login.status_code == 200


async def test_short_new_password_rejected(client: AsyncClient, staff_a):
    response = await client.put(
        "/profile/password",
        json={"current_password": ADMIN_PASSWORD, "new_password": "short"},
        headers=auth_headers(staff_a),
    )

    assert response.status_code == 422


async def test_update_preferences(client: AsyncClient, staff_a):
    headers = auth_headers(staff_a)

    response = await client.put(
        "/profile/preferences",
        json={"preferences": {"theme": "dark", "notifications": {"orders": True}}},
        headers=headers,
    )
    profile = await client.get("/profile", headers=headers)

    assert response.status_code == 200
    assert profile.json()["preferences"] == {"theme": "dark", "notifications": {"orders": True}}


async def test_deactivated_user_loses_profile_access(client: AsyncClient, test_db, staff_a):
    staff_a.is_active = False
    await test_db.commit()

    response = await client.get("/profile", headers=auth_headers(staff_a))

    assert response.status_code == 401
