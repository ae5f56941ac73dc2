from datetime import timedelta

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import create_access_token
from app.models.user import User

from conftest import DEFAULT_PASSWORD, auth_headers


REGISTER_PAYLOAD = {
    "name": "Awa",
    "surname": "Diop",
    "email": "Awa.Diop@SalesPerf.io",
    "password": "secret-pass",
    "jobTitle": "Account Executive",
    "department": "Sales",
}


@pytest.mark.asyncio
async def test_register_returns_token_and_public_view(client: AsyncClient):
    res = await client.post("/auth/register", json=REGISTER_PAYLOAD)

    assert res.status_code == 201
    body = res.json()
    assert body["success"] is True
    assert body["data"]["token"]
    user = body["data"]["user"]
    assert user["email"] == "awa.diop@salesperf.io"
    assert user["fullName"] == "Awa Diop"
    assert user["initials"] == "AD"
    assert user["jobTitle"] == "Account Executive"
    assert user["role"] == "user"
    assert "password" not in user
    assert "hashedPassword" not in user


@pytest.mark.asyncio
async def test_register_duplicate_email_is_rejected(client: AsyncClient):
    await client.post("/auth/register", json=REGISTER_PAYLOAD)

    res = await client.post("/auth/register", json={**REGISTER_PAYLOAD, "email": "awa.diop@salesperf.io"})

    assert res.status_code == 400
    assert res.json() == {"success": False, "message": "A user with this email already exists"}


@pytest.mark.asyncio
async def test_register_validation_errors_are_field_level(client: AsyncClient):
    res = await client.post("/auth/register", json={**REGISTER_PAYLOAD, "email": "nope", "password": "123"})

    assert res.status_code == 400
    body = res.json()
    assert body["success"] is False
    fields = {err["field"] for err in body["errors"]}
    assert {"email", "password"} <= fields


@pytest.mark.asyncio
async def test_login_success(client: AsyncClient, regular_user: User):
    res = await client.post("/auth/login", json={"email": "AWA.DIOP@salesperf.io", "password": DEFAULT_PASSWORD})

    assert res.status_code == 200
    data = res.json()["data"]
    assert data["user"]["id"] == regular_user.id
    assert data["user"]["lastLoginAt"] is not None

    me = await client.get("/auth/me", headers={"Authorization": f"Bearer {data['token']}"})
    assert me.status_code == 200
    assert me.json()["data"]["email"] == regular_user.email


@pytest.mark.asyncio
async def test_login_failures_do_not_reveal_which_part_was_wrong(client: AsyncClient, regular_user: User):
    unknown = await client.post("/auth/login", json={"email": "ghost@salesperf.io", "password": DEFAULT_PASSWORD})
    wrong = await client.post("/auth/login", json={"email": regular_user.email, "password": "wrong-password"})

    assert unknown.status_code == wrong.status_code == 401
    assert unknown.json()["message"] == wrong.json()["message"] == "Invalid credentials"


@pytest.mark.asyncio
async def test_sixth_login_after_five_failures_is_blocked(client: AsyncClient, regular_user: User):
    for _ in range(5):
        res = await client.post("/auth/login", json={"email": regular_user.email, "password": "wrong-password"})
        assert res.status_code == 401

    res = await client.post("/auth/login", json={"email": regular_user.email, "password": DEFAULT_PASSWORD})

    assert res.status_code == 423
    assert res.json()["success"] is False


@pytest.mark.asyncio
async def test_inactive_account_cannot_log_in(client: AsyncClient, db_session: AsyncSession, regular_user: User):
    regular_user.status = "inactive"
    await db_session.commit()

    res = await client.post("/auth/login", json={"email": regular_user.email, "password": DEFAULT_PASSWORD})

    assert res.status_code == 403


@pytest.mark.asyncio
async def test_missing_token_is_rejected(client: AsyncClient):
    res = await client.get("/auth/me")

    assert res.status_code == 401
    assert res.json()["message"] == "Not authorized - token missing"


@pytest.mark.asyncio
async def test_expired_and_forged_tokens_are_told_apart(client: AsyncClient, regular_user: User):
    expired = create_access_token(regular_user.id, expires_delta=timedelta(seconds=-30))

    res = await client.get("/auth/me", headers={"Authorization": f"Bearer {expired}"})
    assert res.status_code == 401
    assert res.json()["message"] == "Token expired"

    res = await client.get("/auth/me", headers={"Authorization": "Bearer not.a.token"})
    assert res.status_code == 401
    assert res.json()["message"] == "Invalid token"


@pytest.mark.asyncio
async def test_token_for_missing_user_is_rejected(client: AsyncClient):
    res = await client.get("/auth/me", headers=auth_headers(9999))

    assert res.status_code == 401
    assert res.json()["message"] == "Invalid token - user not found"


@pytest.mark.asyncio
async def test_valid_token_stops_working_once_account_is_inactive(
    client: AsyncClient, db_session: AsyncSession, regular_user: User
):
    headers = auth_headers(regular_user.id)
    assert (await client.get("/auth/me", headers=headers)).status_code == 200

    regular_user.status = "inactive"
    await db_session.commit()

    res = await client.get("/auth/me", headers=headers)
    assert res.status_code == 403
    assert res.json()["message"] == "Account inactive"


@pytest.mark.asyncio
async def test_valid_token_stops_working_once_account_is_blocked(
    client: AsyncClient, db_session: AsyncSession, regular_user: User
):
    headers = auth_headers(regular_user.id)
    regular_user.is_blocked = True
    await db_session.commit()

    res = await client.get("/auth/me", headers=headers)
    assert res.status_code == 423


@pytest.mark.asyncio
async def test_inactive_is_reported_before_blocked(client: AsyncClient, db_session: AsyncSession, regular_user: User):
    headers = auth_headers(regular_user.id)
    regular_user.status = "inactive"
    regular_user.is_blocked = True
    await db_session.commit()

    res = await client.get("/auth/me", headers=headers)
    assert res.status_code == 403


@pytest.mark.asyncio
async def test_update_profile(client: AsyncClient, regular_user: User):
    res = await client.put(
        "/auth/profile",
        json={"surname": "Ndiaye", "phone": "+221 77 123 45 67", "department": ""},
        headers=auth_headers(regular_user.id),
    )

    assert res.status_code == 200
    user = res.json()["data"]
    assert user["surname"] == "Ndiaye"
    assert user["phone"] == "+221 77 123 45 67"
    assert user["fullName"] == "Awa Ndiaye"


@pytest.mark.asyncio
async def test_change_password(client: AsyncClient, regular_user: User):
    headers = auth_headers(regular_user.id)

    res = await client.put(
        "/auth/change-password",
        json={"currentPassword": "wrong-password", "newPassword": "brand-new-pass"},
        headers=headers,
    )
    assert res.status_code == 400
    assert res.json()["message"] == "Current password is incorrect"

    res = await client.put(
        "/auth/change-password",
        json={"currentPassword": DEFAULT_PASSWORD, "newPassword": "brand-new-pass"},
        headers=headers,
    )
    assert res.status_code == 200

    login = await client.post("/auth/login", json={"email": regular_user.email, "password": "brand-new-pass"})
    assert login.status_code == 200


@pytest.mark.asyncio
async def test_logout_is_an_acknowledgement(client: AsyncClient, regular_user: User):
    res = await client.post("/auth/logout", headers=auth_headers(regular_user.id))

    assert res.status_code == 200
    assert res.json()["success"] is True


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    res = await client.get("/health")

    assert res.status_code == 200
    assert res.json()["success"] is True
