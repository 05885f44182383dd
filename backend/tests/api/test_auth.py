"""
Tests for the auth endpoints and the bearer token dependency.
"""

import pytest
from fastapi.testclient import TestClient

from api import app

PASSWORD = "Passw0rd!"


@pytest.fixture
def client(container):
    with TestClient(app) as test_client:
        yield test_client


def _register(client, email: str = "alice@example.com", **extra) -> dict:
    payload = {"email": email, "password": PASSWORD, "firstName": "Alice", "lastName": "Liddell"}
    payload.update(extra)
    response = client.post("/api/v1/auth/register", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class TestRegisterEndpoint:
    def test_register(self, client):
        response = client.post(
            "/api/v1/auth/register",
            json={"email": "alice@example.com", "password": PASSWORD, "name": "Alice Liddell"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "User registered successfully"
        data = body["data"]
        assert data["user"]["email"] == "alice@example.com"
        assert data["user"]["fullName"] == "Alice Liddell"
        assert data["user"]["emailVerified"] is False
        assert data["tokenType"] == "Bearer"
        assert data["expiresIn"] == 3600
        assert data["accessToken"] and data["refreshToken"]
        assert data["message"].startswith("Registration successful")

    def test_register_response_is_sanitized(self, client):
        text = client.post(
            "/api/v1/auth/register",
            json={"email": "alice@example.com", "password": PASSWORD, "firstName": "Alice"},
        ).text
        assert "passwordHash" not in text
        assert "refreshTokenHash" not in text
        assert "$2b$" not in text

    def test_register_duplicate(self, client):
        _register(client)
        response = client.post(
            "/api/v1/auth/register",
            json={"email": "alice@example.com", "password": "Other0ne!", "firstName": "Eve"},
        )
        assert response.status_code == 409
        assert response.json() == {"success": False, "message": "User with this email already exists"}

    def test_register_validation_errors(self, client):
        response = client.post(
            "/api/v1/auth/register",
            json={"email": "not-an-email", "password": "weak"},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Validation failed"
        fields = {error["field"] for error in body["errors"]}
        assert {"email", "password", "firstName"} <= fields
        messages = [error["message"] for error in body["errors"]]
        assert "Password must be at least 8 characters long" in messages
        assert not any(message.startswith("Value error") for message in messages)

    def test_register_password_mismatch(self, client):
        response = client.post(
            "/api/v1/auth/register",
            json={
                "email": "alice@example.com",
                "password": PASSWORD,
                "confirmPassword": "Passw0rd?",
                "firstName": "Alice",
            },
        )
        assert response.status_code == 400
        assert {"field": "confirmPassword", "message": "Passwords do not match"} in response.json()["errors"]

    def test_register_accepts_snake_case_device_id(self, client):
        data = _register(client, device_id="android-1")
        assert data["user"]["deviceId"] == "android-1"


class TestLoginEndpoint:
    def test_login(self, client):
        _register(client)
        response = client.post("/api/v1/auth/login", json={"email": "alice@example.com", "password": PASSWORD})

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Login successful"
        assert body["data"]["user"]["email"] == "alice@example.com"
        assert "message" not in body["data"]

    def test_login_failures_are_indistinguishable(self, client):
        _register(client)
        wrong_password = client.post(
            "/api/v1/auth/login", json={"email": "alice@example.com", "password": "Wr0ng!pass"}
        )
        unknown_email = client.post(
            "/api/v1/auth/login", json={"email": "bob@example.com", "password": PASSWORD}
        )

        assert wrong_password.status_code == unknown_email.status_code == 401
        assert wrong_password.json() == unknown_email.json() == {
            "success": False,
            "message": "Invalid email or password",
        }

    def test_login_requires_password(self, client):
        response = client.post("/api/v1/auth/login", json={"email": "alice@example.com"})
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "password"


class TestRefreshEndpoint:
    def test_refresh_returns_both_spellings(self, client):
        registered = _register(client)
        response = client.post("/api/v1/auth/refresh", json={"refreshToken": registered["refreshToken"]})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["accessToken"] == data["access_token"]
        assert data["refreshToken"] == data["refresh_token"]
        assert data["expiresIn"] == data["expires_in"] == 3600
        assert data["tokenType"] == data["token_type"] == "Bearer"

    def test_refresh_accepts_snake_case(self, client):
        registered = _register(client)
        response = client.post("/api/v1/auth/refresh", json={"refresh_token": registered["refreshToken"]})
        assert response.status_code == 200

    def test_refresh_requires_token(self, client):
        response = client.post("/api/v1/auth/refresh", json={})
        assert response.status_code == 400

    def test_invalid_refresh_token(self, client):
        response = client.post("/api/v1/auth/refresh", json={"refreshToken": "garbage"})
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid refresh token"


class TestProtectedEndpoints:
    def test_me(self, client):
        registered = _register(client)
        response = client.get("/api/v1/auth/me", headers=_bearer(registered["accessToken"]))

        assert response.status_code == 200
        assert response.json()["data"]["id"] == registered["user"]["id"]

    def test_missing_auth_header(self, client):
        """Request without auth header should return 401."""
        response = client.get("/api/v1/auth/me")
        assert response.status_code == 401
        assert response.json()["message"] == "Access token is required"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_non_bearer_scheme(self, client):
        response = client.get("/api/v1/auth/me", headers={"Authorization": "Basic dXNlcjpwYXNz"})
        assert response.status_code == 401

    def test_invalid_token(self, client):
        response = client.get("/api/v1/auth/me", headers=_bearer("invalid-token"))
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid access token"

    def test_expired_token(self, client, clock):
        registered = _register(client)
        clock.advance(hours=2)
        response = client.get("/api/v1/auth/me", headers=_bearer(registered["accessToken"]))
        assert response.status_code == 401
        assert response.json()["message"] == "Access token has expired"

    def test_refresh_token_rejected_as_bearer(self, client):
        registered = _register(client)
        response = client.get("/api/v1/auth/me", headers=_bearer(registered["refreshToken"]))
        assert response.status_code == 401

    def test_logout(self, client):
        registered = _register(client)
        response = client.post("/api/v1/auth/logout", headers=_bearer(registered["accessToken"]))

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Logged out successfully", "data": None}

        replay = client.post("/api/v1/auth/refresh", json={"refreshToken": registered["refreshToken"]})
        assert replay.status_code == 401

    def test_logout_requires_auth(self, client):
        assert client.post("/api/v1/auth/logout").status_code == 401


class TestVerificationEndpoints:
    def test_verify_email(self, client, email_sender):
        _register(client)
        token = email_sender.last_verification_token("alice@example.com")

        response = client.get("/api/v1/auth/verify-email", params={"token": token})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["user"]["emailVerified"] is True
        assert data["message"] == "Email verified successfully"

    def test_verify_email_without_token(self, client):
        response = client.get("/api/v1/auth/verify-email")
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid or expired verification token"

    def test_send_verification(self, client, email_sender):
        registered = _register(client)
        response = client.post("/api/v1/auth/send-verification", headers=_bearer(registered["accessToken"]))

        assert response.status_code == 200
        assert response.json()["message"] == "Verification email sent"
        assert len(email_sender.verifications) == 2

    def test_send_verification_when_verified(self, client, email_sender):
        registered = _register(client)
        client.get(
            "/api/v1/auth/verify-email",
            params={"token": email_sender.last_verification_token("alice@example.com")},
        )
        response = client.post("/api/v1/auth/send-verification", headers=_bearer(registered["accessToken"]))
        assert response.status_code == 400
        assert response.json()["message"] == "Email is already verified"

    def test_resend_verification_is_enumeration_safe(self, client):
        _register(client)
        known = client.post("/api/v1/auth/resend-verification", json={"email": "alice@example.com"})
        unknown = client.post("/api/v1/auth/resend-verification", json={"email": "bob@example.com"})

        assert known.status_code == unknown.status_code == 200
        assert known.json() == unknown.json()


class TestPasswordResetEndpoints:
    def test_forgot_and_reset(self, client, email_sender):
        _register(client)
        forgot = client.post("/api/v1/auth/forgot-password", json={"email": "alice@example.com"})
        assert forgot.status_code == 200

        reset = client.post(
            "/api/v1/auth/reset-password",
            json={"token": email_sender.last_reset_token("alice@example.com"), "newPassword": "N3w!password"},
        )
        assert reset.status_code == 200

        login = client.post("/api/v1/auth/login", json={"email": "alice@example.com", "password": "N3w!password"})
        assert login.status_code == 200

    def test_forgot_password_is_enumeration_safe(self, client):
        _register(client)
        known = client.post("/api/v1/auth/forgot-password", json={"email": "alice@example.com"})
        unknown = client.post("/api/v1/auth/forgot-password", json={"email": "bob@example.com"})
        assert known.json() == unknown.json()

    def test_reset_with_bad_token(self, client):
        response = client.post(
            "/api/v1/auth/reset-password", json={"token": "nope", "newPassword": "N3w!password"}
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid or expired reset token"


class TestAliceScenario:
    def test_full_session_lifecycle(self, client, email_sender):
        """Register, log in, rotate, replay, verify, replay."""
        register = client.post(
            "/api/v1/auth/register",
            json={"email": "alice@x.com", "password": "Passw0rd!", "firstName": "Alice"},
        )
        assert register.status_code == 201
        registered = register.json()["data"]
        assert registered["user"]["emailVerified"] is False
        verification_token = email_sender.last_verification_token("alice@x.com")

        login = client.post("/api/v1/auth/login", json={"email": "alice@x.com", "password": "Passw0rd!"})
        assert login.status_code == 200
        logged_in = login.json()["data"]
        assert logged_in["accessToken"] != registered["accessToken"]
        assert logged_in["refreshToken"] != registered["refreshToken"]

        refresh = client.post("/api/v1/auth/refresh", json={"refreshToken": logged_in["refreshToken"]})
        assert refresh.status_code == 200
        assert refresh.json()["data"]["refreshToken"] != logged_in["refreshToken"]

        replay = client.post("/api/v1/auth/refresh", json={"refreshToken": logged_in["refreshToken"]})
        assert replay.status_code == 401

        verify = client.get("/api/v1/auth/verify-email", params={"token": verification_token})
        assert verify.status_code == 200
        assert verify.json()["data"]["user"]["emailVerified"] is True

        verify_again = client.get("/api/v1/auth/verify-email", params={"token": verification_token})
        assert verify_again.status_code == 400
