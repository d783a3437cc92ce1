from datetime import timedelta

import pytest
from jose import jwt

from conftest import TEST_PASSWORD, auth_headers
from promptshare.core.config import settings
from promptshare.services.auth_services import create_refresh_token

pytestmark = pytest.mark.anyio


def _cookie_header(response, *names):
    return {"Cookie": "; ".join(f"{name}={response.cookies[name]}" for name in names)}


async def test_register_creates_user(client):
    response = await client.post(
        "/api/auth/register",
        json={"username": "Alice_01", "email": "alice@example.com", "password": TEST_PASSWORD},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert isinstance(body["user_id"], int)


async def test_register_lowercases_username(client):
    await client.post(
        "/api/auth/register",
        json={"username": "MixedCase", "email": "mixed@example.com", "password": TEST_PASSWORD},
    )
    response = await client.post("/api/auth/login", json={"username": "mixedcase", "password": TEST_PASSWORD})
    assert response.status_code == 200


async def test_register_reports_every_weak_password_rule(client):
    response = await client.post(
        "/api/auth/register",
        json={"username": "weakling", "email": "weak@example.com", "password": "short"},
    )
    assert response.status_code == 422
    messages = {error["msg"] for error in response.json()["detail"]}
    assert messages == {"8_characters_long", "one_digit", "one_uppercase", "one_special"}


@pytest.mark.parametrize("username", ["ab", "has space", "x" * 33, "dot.ted"])
async def test_register_rejects_bad_usernames(client, username):
    response = await client.post(
        "/api/auth/register",
        json={"username": username, "email": "someone@example.com", "password": TEST_PASSWORD},
    )
    assert response.status_code == 422


async def test_register_rejects_invalid_email(client):
    response = await client.post(
        "/api/auth/register",
        json={"username": "bademail", "email": "not-an-email", "password": TEST_PASSWORD},
    )
    assert response.status_code == 400


async def test_register_duplicate_username_and_email(client, make_user):
    await make_user("taken", email="taken@example.com")

    response = await client.post(
        "/api/auth/register",
        json={"username": "TAKEN", "email": "other@example.com", "password": TEST_PASSWORD},
    )
    assert response.status_code == 409
    assert response.json()["detail"] == "Username already taken"

    response = await client.post(
        "/api/auth/register",
        json={"username": "fresh", "email": "taken@example.com", "password": TEST_PASSWORD},
    )
    assert response.status_code == 409
    assert response.json()["detail"] == "Email already registered"


async def test_login_sets_tokens_usable_for_check_auth(client, make_user):
    user = await make_user("carol")

    response = await client.post("/api/auth/login", json={"username": "carol", "password": TEST_PASSWORD})
    assert response.status_code == 200
    assert "access_token" in response.cookies
    assert "refresh_token" in response.cookies

    payload = jwt.decode(response.cookies["access_token"], settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    assert payload["sub"] == "carol"
    assert payload["type"] == "access"

    headers = _cookie_header(response, "access_token")
    client.cookies.clear()
    response = await client.get("/api/auth/check-auth", headers=headers)
    assert response.status_code == 200
    assert response.json()["id"] == user.id
    assert response.json()["username"] == "carol"


async def test_login_accepts_email(client, make_user):
    await make_user("dave", email="dave@example.org")
    response = await client.post("/api/auth/login", json={"username": "dave@example.org", "password": TEST_PASSWORD})
    assert response.status_code == 200


async def test_login_with_wrong_password(client, make_user):
    await make_user("erin")
    response = await client.post("/api/auth/login", json={"username": "erin", "password": "Wrong123!"})
    assert response.status_code == 401


async def test_check_auth_requires_cookie(client):
    response = await client.get("/api/auth/check-auth")
    assert response.status_code == 401


async def test_refresh_token_cannot_be_used_as_access_token(client, make_user):
    user = await make_user("frank")
    token = create_refresh_token(data={"sub": user.username})
    response = await client.get("/api/auth/check-auth", headers={"Cookie": f"access_token={token}"})
    assert response.status_code == 401


async def test_expired_access_token_falls_back_to_refresh_token(client, make_user):
    user = await make_user("grace")
    expired = auth_headers(user, expires_delta=timedelta(seconds=-10))["Cookie"]
    refresh = create_refresh_token(data={"sub": user.username})

    response = await client.get(
        "/api/auth/check-auth", headers={"Cookie": f"{expired}; refresh_token={refresh}"}
    )
    assert response.status_code == 200
    assert response.json()["username"] == "grace"
    assert "access_token" in response.cookies


async def test_refresh_issues_new_access_token(client, make_user):
    user = await make_user("heidi")
    refresh = create_refresh_token(data={"sub": user.username})

    response = await client.post("/api/auth/refresh", headers={"Cookie": f"refresh_token={refresh}"})
    assert response.status_code == 200
    assert "access_token" in response.cookies

    response = await client.post("/api/auth/refresh")
    assert response.status_code == 401


async def test_logout_clears_cookies(client):
    response = await client.post("/api/auth/logout")
    assert response.status_code == 200
    set_cookies = response.headers.get_list("set-cookie")
    assert any(header.startswith("access_token=") for header in set_cookies)
    assert any(header.startswith("refresh_token=") for header in set_cookies)
