"""HTTP surface, exercised end to end against SQLite."""

import pytest


async def _register(client, email="ada@skillmatch.dev", **extra):
    payload = {"email": email, "password": "secret123", "firstName": "Ada", "lastName": "Lovelace"}
    payload.update(extra)
    return await client.post("/register", json=payload)


def _token(mailer, index=-1):
    return mailer.sent[index]["data"]["verificationUrl"].split("token=", 1)[1]


async def test_root_and_health(client):
    root = await client.get("/")
    health = await client.get("/health")

    assert root.status_code == 200
    assert root.json()["success"] is True
    assert health.status_code == 200
    body = health.json()
    assert body["status"] == "healthy"
    assert body["database"] == "connected"
    assert body["uptime"] >= 0


async def test_register_verify_then_profile(client, mailer):
    response = await _register(client)
    assert response.status_code == 201
    user = response.json()["user"]
    assert user["email"] == "ada@skillmatch.dev"
    assert user["isVerified"] is False
    assert "passwordHash" not in user

    verify = await client.get(f"/verify-email/{_token(mailer)}")
    assert verify.status_code == 200
    assert verify.json() == {"success": True, "message": "Email verified successfully"}

    profile = await client.get(f"/users/{user['id']}/profile")
    assert profile.status_code == 200
    data = profile.json()["profile"]
    assert data["isVerified"] is True
    assert data["firstName"] == "Ada"
    assert data["bio"] is None


async def test_register_requires_email_and_password(client):
    response = await client.post("/register", json={"email": "ada@skillmatch.dev"})

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Email and password are required"}


async def test_register_rejects_malformed_email(client):
    response = await client.post("/register", json={"email": "not-an-email", "password": "x"})

    assert response.status_code == 400
    assert response.json()["success"] is False


async def test_register_duplicate_is_conflict(client):
    await _register(client)
    response = await _register(client)

    assert response.status_code == 409
    assert response.json()["message"] == "User with this email already exists"


async def test_register_mail_failure(client, mailer):
    mailer.fail = True
    response = await _register(client)

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "message": "Failed to register user",
        "error": "SMTP connection refused",
    }

    # The compensating delete frees the address
    mailer.fail = False
    assert (await _register(client)).status_code == 201


async def test_verify_with_unknown_token(client):
    response = await client.get("/verify-email/does-not-exist")

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid or expired verification token"


async def test_resend_verification(client, mailer):
    await _register(client)

    response = await client.post("/resend-verification", json={"email": "ada@skillmatch.dev"})
    assert response.status_code == 200
    assert len(mailer.sent) == 2

    missing = await client.post("/resend-verification", json={"email": "nobody@skillmatch.dev"})
    assert missing.status_code == 404
    assert (await client.post("/resend-verification", json={})).status_code == 400


@pytest.mark.parametrize("raw_id", ["abc", "0", "-1", "1.5", "²", "①", "١"])
async def test_profile_rejects_non_numeric_id(client, raw_id):
    response = await client.get(f"/users/{raw_id}/profile")

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Invalid user ID"}


async def test_profile_unknown_user(client):
    assert (await client.get("/users/999/profile")).status_code == 404
    assert (await client.put("/users/999/profile", json={"bio": "x"})).status_code == 404


async def test_update_profile_replaces_state(client):
    user_id = (await _register(client)).json()["user"]["id"]

    first = await client.put(
        f"/users/{user_id}/profile",
        json={"bio": "Hello", "skills": ["Python", "React"], "githubUrl": "https://github.com/ada"},
    )
    assert first.status_code == 200
    assert first.json()["profile"]["githubUrl"] == "https://github.com/ada"

    second = await client.put(f"/users/{user_id}/profile", json={"bio": "Updated"})
    profile = second.json()["profile"]
    assert profile["id"] == first.json()["profile"]["id"]
    assert profile["bio"] == "Updated"
    assert profile["skills"] is None
    assert profile["githubUrl"] is None


async def test_send_mail(client, mailer):
    response = await client.post(
        "/api/send-mail",
        json={"email": "ada@skillmatch.dev", "subject": "Hi", "template": "verify-account", "data": {"name": "Ada"}},
    )

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Email sent successfully"}
    assert mailer.sent[-1]["subject"] == "Hi"


async def test_send_mail_requires_fields(client):
    response = await client.post("/api/send-mail", json={"email": "ada@skillmatch.dev"})

    assert response.status_code == 400
    assert response.json()["message"] == "Email, subject, and template are required fields"


async def test_send_mail_delivery_failure(client, mailer):
    mailer.fail = True
    response = await client.post(
        "/api/send-mail",
        json={"email": "ada@skillmatch.dev", "subject": "Hi", "template": "verify-account"},
    )

    assert response.status_code == 500
    assert response.json()["message"] == "Failed to send email"


async def test_minimal_registration_payload(client, mailer):
    response = await client.post("/register", json={"email": "a@b.com", "password": "x"})
    assert response.status_code == 201
    user = response.json()["user"]
    assert user["isVerified"] is False
    assert user["firstName"] is None

    assert (await client.get(f"/verify-email/{_token(mailer)}")).status_code == 200
    profile = (await client.get(f"/users/{user['id']}/profile")).json()["profile"]
    assert profile["isVerified"] is True
    # Name falls back to the local part of the address
    assert mailer.sent[0]["data"]["name"] == "a"


async def test_update_profile_without_body_clears_fields(client):
    user_id = (await _register(client)).json()["user"]["id"]
    await client.put(f"/users/{user_id}/profile", json={"bio": "Hello", "location": "Oslo"})

    response = await client.put(f"/users/{user_id}/profile")

    assert response.status_code == 200
    profile = response.json()["profile"]
    assert profile["userId"] == user_id
    assert profile["bio"] is None
    assert profile["location"] is None
