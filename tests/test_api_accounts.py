import pytest
import pytest_asyncio

HEADERS = {"X-User-Email": "ana@example.com"}


@pytest_asyncio.fixture
async def registered(client):
    response = await client.post(
        "/api/auth/register",
        json={"name": "Ana Souza", "email": "ana@example.com", "password": "s3cret-pass"},
    )
    assert response.status_code == 201


@pytest.mark.asyncio
async def test_profile_requires_a_known_caller(client, registered):
    missing = await client.get("/api/accounts/me")
    unknown = await client.get("/api/accounts/me", headers={"X-User-Email": "bruno@example.com"})

    assert missing.status_code == unknown.status_code == 401
    assert missing.json() == {"detail": "not authenticated"}


@pytest.mark.asyncio
async def test_read_profile(client, registered):
    response = await client.get("/api/accounts/me", headers={"X-User-Email": " ANA@example.com "})

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Ana Souza"
    assert body["email"] == "ana@example.com"
    assert body["avatarUrl"] == ""
    assert body["tutorial_seen"] is False


@pytest.mark.asyncio
async def test_update_name_and_avatar(client, registered):
    response = await client.put(
        "/api/accounts/me",
        headers=HEADERS,
        json={"name": "  Ana S. ", "avatarUrl": "https://img/ana.png"},
    )
    assert response.status_code == 200
    assert response.json() == {"ok": True}

    body = (await client.get("/api/accounts/me", headers=HEADERS)).json()
    assert body["name"] == "Ana S."
    assert body["avatarUrl"] == "https://img/ana.png"


@pytest.mark.asyncio
async def test_omitted_avatar_is_kept(client, registered):
    await client.put("/api/accounts/me", headers=HEADERS, json={"name": "Ana", "avatar_url": "https://img/a.png"})
    await client.put("/api/accounts/me", headers=HEADERS, json={"name": "Ana Souza"})

    body = (await client.get("/api/accounts/me", headers=HEADERS)).json()
    assert body["avatarUrl"] == "https://img/a.png"


@pytest.mark.asyncio
async def test_password_change(client, registered):
    response = await client.put(
        "/api/accounts/me",
        headers=HEADERS,
        json={"name": "Ana Souza", "password": "n3w-passw0rd"},
    )
    assert response.status_code == 200

    old = await client.post("/api/auth/login", json={"email": "ana@example.com", "password": "s3cret-pass"})
    new = await client.post("/api/auth/login", json={"email": "ana@example.com", "password": "n3w-passw0rd"})
    assert old.status_code == 401
    assert new.status_code == 200


@pytest.mark.asyncio
async def test_blank_password_leaves_password_alone(client, registered):
    response = await client.put("/api/accounts/me", headers=HEADERS, json={"name": "Ana Souza", "password": "  "})
    assert response.status_code == 200

    login = await client.post("/api/auth/login", json={"email": "ana@example.com", "password": "s3cret-pass"})
    assert login.status_code == 200


@pytest.mark.asyncio
async def test_weak_new_password_is_rejected(client, registered):
    response = await client.put("/api/accounts/me", headers=HEADERS, json={"name": "Ana Souza", "password": "short"})
    assert response.status_code == 400
    assert response.json()["field"] == "password"


@pytest.mark.asyncio
async def test_tutorial_flag(client, registered):
    response = await client.put("/api/accounts/me/tutorial", headers=HEADERS)
    assert response.status_code == 204
    assert (await client.get("/api/accounts/me", headers=HEADERS)).json()["tutorial_seen"] is True

    response = await client.put("/api/accounts/me/tutorial", headers=HEADERS, json={"tutorial_seen": False})
    assert response.status_code == 204
    assert (await client.get("/api/accounts/me", headers=HEADERS)).json()["tutorial_seen"] is False


@pytest.mark.asyncio
async def test_healthz_and_security_headers(client):
    response = await client.get("/healthz")

    assert response.status_code == 200
    assert response.text == "ok"
    assert response.headers["content-type"].startswith("text/plain")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["X-XSS-Protection"] == "0"
