"""
Jotter Backend: Users & Health API Tests
=========================================

What we test:
    ✅ Registration returns the user and a working token; duplicates are rejected
    ✅ Password rules are enforced
    ✅ Login issues a fresh token; bad credentials share one message
    ✅ logout revokes only the current token, logoutAll revokes every token
    ✅ /users/me never exposes the password hash
    ✅ /health reports database connectivity
"""

import pytest


async def _register(client, email="mike@example.com", password="asdfASDF1234!@#$"):
    return await client.post("/users", json={"email": email, "password": password})


def _auth(token):
    return {"Authorization": f"Bearer {token}"}


class TestRegister:

    @pytest.mark.asyncio
    async def test_register(self, test_client):
        response = await _register(test_client, email="  Mike@Example.com ")

        assert response.status_code == 201
        body = response.json()
        assert body["user"]["email"] == "mike@example.com"
        assert set(body["user"]) == {"id", "email", "createdAt"}

        notes = await test_client.get("/notes", headers=_auth(body["token"]))
        assert notes.status_code == 200

    @pytest.mark.asyncio
    async def test_duplicate_email(self, test_client):
        await _register(test_client)
        response = await _register(test_client, email="MIKE@example.com")

        assert response.status_code == 400
        assert response.json() == {"error": "Email is already in use"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [
        {"email": "mike@example.com", "password": "short"},
        {"email": "mike@example.com", "password": "MyPassword123"},
        {"email": "not-an-email", "password": "asdfASDF1234!@#$"},
        {"password": "asdfASDF1234!@#$"},
        {},
    ])
    async def test_invalid_registration(self, test_client, payload):
        response = await test_client.post("/users", json=payload)

        assert response.status_code == 400
        assert set(response.json()) == {"error"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("email", [
        "user@.com",
        "user@example",
        "@example.com",
        "user example@example.com",
        "user@@example.com",
    ])
    async def test_malformed_email(self, test_client, email):
        response = await _register(test_client, email=email)

        assert response.status_code == 400
        assert "email" in response.json()["error"].lower()

        login = await test_client.post(
            "/users/login", json={"email": email, "password": "asdfASDF1234!@#$"}
        )
        assert login.status_code == 400


class TestLogin:

    @pytest.mark.asyncio
    async def test_login_issues_new_token(self, test_client):
        registered = (await _register(test_client)).json()

        response = await test_client.post(
            "/users/login", json={"email": "mike@example.com", "password": "asdfASDF1234!@#$"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["user"]["id"] == registered["user"]["id"]
        assert body["token"] != registered["token"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("email, password", [
        ("mike@example.com", "wrong-password-1"),
        ("nobody@example.com", "asdfASDF1234!@#$"),
    ])
    async def test_bad_credentials(self, test_client, email, password):
        await _register(test_client)

        response = await test_client.post(
            "/users/login", json={"email": email, "password": password}
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Unable to login"}

    @pytest.mark.asyncio
    async def test_missing_fields(self, test_client):
        response = await test_client.post("/users/login", json={"email": "mike@example.com"})
        assert response.status_code == 400
        assert set(response.json()) == {"error"}


class TestLogout:

    @pytest.mark.asyncio
    async def test_logout_revokes_only_current_token(self, test_client):
        first = (await _register(test_client)).json()["token"]
        second = (await test_client.post(
            "/users/login", json={"email": "mike@example.com", "password": "asdfASDF1234!@#$"}
        )).json()["token"]

        response = await test_client.post("/users/logout", headers=_auth(first))
        assert response.status_code == 200

        assert (await test_client.get("/notes", headers=_auth(first))).status_code == 401
        assert (await test_client.get("/notes", headers=_auth(second))).status_code == 200

    @pytest.mark.asyncio
    async def test_logout_all(self, test_client):
        first = (await _register(test_client)).json()["token"]
        second = (await test_client.post(
            "/users/login", json={"email": "mike@example.com", "password": "asdfASDF1234!@#$"}
        )).json()["token"]

        response = await test_client.post("/users/logoutAll", headers=_auth(second))
        assert response.status_code == 200

        for token in (first, second):
            revoked = await test_client.get("/notes", headers=_auth(token))
            assert revoked.status_code == 401
            assert revoked.json() == {"error": "Please authenticate"}

    @pytest.mark.asyncio
    async def test_logout_requires_token(self, test_client):
        response = await test_client.post("/users/logout")
        assert response.status_code == 401


class TestMe:

    @pytest.mark.asyncio
    async def test_me(self, test_client, user):
        response = await test_client.get("/users/me", headers=user.headers)

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == user.id
        assert body["email"] == "user@test.com"
        assert "passwordHash" not in body
        assert "password_hash" not in body


class TestHealth:

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["uptime_seconds"] >= 0
