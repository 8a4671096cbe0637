"""Auth & Users Routes — registration, login, caller lookup over HTTP.

Invariants:
    - POST /api/users → 200 {"token"}; duplicate email → 400 errors[]
    - POST /api/auth/login → 200 {"token"}; bad credentials → 400 "Invalid credentials."
    - GET /api/auth needs x-auth-token: missing → 401 errors[], bad → 401 {"msg"}
    - Health checks answer without a token
"""

from datetime import datetime, timedelta, timezone

from devconnect.core.token_service import TokenService

REGISTRATION = {
    "first_name": "Ann",
    "last_name": "Lee",
    "email": "a@b.com",
    "password": "secret1",
    "confirm_password": "secret1",
}


async def test_register_returns_token(client, tokens):
    res = await client.post("/api/users", json=REGISTRATION)
    assert res.status_code == 200
    assert tokens.verify(res.json()["token"]).ok


async def test_register_duplicate_email(client):
    await client.post("/api/users", json=REGISTRATION)
    res = await client.post("/api/users", json={**REGISTRATION, "email": "A@B.com"})
    assert res.status_code == 400
    assert res.json() == {
        "errors": [{"msg": "User already exists.", "param": "email", "location": "body"}],
    }


async def test_register_reports_field_failures(client):
    res = await client.post(
        "/api/users", json={**REGISTRATION, "email": "nope", "password": "123"},
    )
    assert res.status_code == 400
    assert [e["param"] for e in res.json()["errors"]] == [
        "email", "password", "confirm_password",
    ]


async def test_malformed_json_body_is_400(client):
    res = await client.post(
        "/api/users", content="{not json", headers={"content-type": "application/json"},
    )
    assert res.status_code == 400
    assert "errors" in res.json()


async def test_login_then_fetch_identity(client):
    await client.post("/api/users", json=REGISTRATION)
    login = await client.post(
        "/api/auth/login", json={"email": "a@b.com", "password": "secret1"},
    )
    assert login.status_code == 200

    res = await client.get(
        "/api/auth", headers={"x-auth-token": login.json()["token"]},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["email"] == "a@b.com"
    assert body["first_name"] == "Ann"
    assert "password" not in body
    assert "password_hash" not in body


async def test_login_wrong_password(client, alice):
    res = await client.post(
        "/api/auth/login", json={"email": "alice@example.com", "password": "wrong!"},
    )
    assert res.status_code == 400
    assert res.json()["errors"][0]["msg"] == "Invalid credentials."


async def test_login_unknown_email(client):
    res = await client.post(
        "/api/auth/login", json={"email": "ghost@example.com", "password": "secret1"},
    )
    assert res.status_code == 400
    assert res.json()["errors"][0]["msg"] == "Invalid credentials."


async def test_missing_token(client):
    res = await client.get("/api/auth")
    assert res.status_code == 401
    assert res.json() == {"errors": [{"msg": "No token, authorization denied."}]}


async def test_garbage_token(client):
    res = await client.get("/api/auth", headers={"x-auth-token": "garbage"})
    assert res.status_code == 401
    assert res.json() == {"msg": "Authorization not valid."}


async def test_expired_token(client, alice, tokens):
    expired = tokens.issue(
        alice.id, now=datetime.now(timezone.utc) - timedelta(days=30),
    )
    res = await client.get("/api/auth", headers={"x-auth-token": expired})
    assert res.status_code == 401
    assert res.json() == {"msg": "Authorization not valid."}


async def test_token_signed_with_other_key(client, alice):
    forged = TokenService(
        "some-other-secret-with-plenty-of-bytes", timedelta(hours=1),
    ).issue(alice.id)
    res = await client.get("/api/auth", headers={"x-auth-token": forged})
    assert res.status_code == 401


async def test_token_outlives_deleted_identity(client, alice, auth_headers, identities):
    headers = auth_headers(alice)
    await identities.delete(alice.id)
    res = await client.get("/api/auth", headers=headers)
    assert res.status_code == 400
    assert res.json() == {"msg": "User not found"}


async def test_health_checks(client):
    live = await client.get("/api/health/")
    assert live.status_code == 200
    assert live.json()["status"] == "healthy"

    ready = await client.get("/api/health/ready")
    assert ready.status_code == 200
    assert ready.json()["checks"]["database"] == "healthy"
