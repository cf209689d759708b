"""
Integration tests for authentication API endpoints

Tests:
1. Registration: success, duplicates, validation, no password in output
2. Login: token issue, identical failure for unknown user and wrong password
3. /auth/me with and without a token
"""

import pytest

from app.models.user import User


@pytest.mark.integration
class TestRegistration:
    """Test POST /auth/register"""

    def test_register_success(self, test_client, fresh_session):
        response = test_client.post("/auth/register", json={
            "username": "jonas",
            "email": "jonas@x.com",
            "password": "secret123",
        })

        assert response.status_code == 201
        data = response.json()
        assert data["username"] == "jonas"
        assert data["email"] == "jonas@x.com"
        assert data["admin"] is False
        assert "password" not in data
        assert "password_hash" not in data

        stored = fresh_session().query(User).filter(User.username == "jonas").one()
        assert stored.password_hash != "secret123"

    def test_register_cannot_create_admin(self, test_client):
        response = test_client.post("/auth/register", json={
            "username": "sneaky",
            "email": "sneaky@x.com",
            "password": "secret123",
            "admin": True,
        })

        assert response.status_code == 201
        assert response.json()["admin"] is False

    def test_register_duplicate_username(self, test_client, seeded_users):
        response = test_client.post("/auth/register", json={
            "username": "jonas",
            "email": "other@x.com",
            "password": "secret123",
        })

        assert response.status_code == 409
        assert response.json() == {"error": "Username or email already exists"}

    def test_register_duplicate_email(self, test_client, seeded_users):
        response = test_client.post("/auth/register", json={
            "username": "jonas2",
            "email": "jonas@example.com",
            "password": "secret123",
        })

        assert response.status_code == 409

    @pytest.mark.parametrize("payload, field", [
        ({"username": "jo", "email": "jo@x.com", "password": "secret123"}, "username"),
        ({"username": "jonas", "email": "not-an-email", "password": "secret123"}, "email"),
        ({"username": "jonas", "email": "jonas@x.com", "password": "short"}, "password"),
        ({"username": "jonas", "email": "jonas@x.com"}, "password"),
    ])
    def test_register_validation(self, test_client, payload, field):
        response = test_client.post("/auth/register", json=payload)

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "Invalid registration data"
        assert field in [detail["field"] for detail in data["details"]]

    def test_register_invalid_json(self, test_client):
        response = test_client.post(
            "/auth/register",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400


@pytest.mark.integration
class TestLogin:
    """Test POST /auth/login"""

    def test_login_success(self, test_client, seeded_users, token_service):
        response = test_client.post("/auth/login", json={
            "username": "jonas",
            "password": "secret123",
        })

        assert response.status_code == 200
        data = response.json()
        assert data["user"]["username"] == "jonas"
        assert "password_hash" not in data["user"]
        assert data["expiresIn"] == 3600

        claims = token_service.verify(data["token"])
        assert claims.id == seeded_users.jonas.id
        assert claims.username == "jonas"
        assert claims.admin is False

    def test_admin_login_carries_role(self, test_client, seeded_users, token_service):
        response = test_client.post("/auth/login", json={
            "username": "admin",
            "password": "secret123",
        })

        assert response.status_code == 200
        assert token_service.verify(response.json()["token"]).admin is True

    def test_wrong_password_and_unknown_user_look_identical(self, test_client, seeded_users):
        wrong_password = test_client.post("/auth/login", json={
            "username": "jonas",
            "password": "wrongpass",
        })
        unknown_user = test_client.post("/auth/login", json={
            "username": "nobody",
            "password": "wrongpass",
        })

        assert wrong_password.status_code == 401
        assert unknown_user.status_code == 401
        assert wrong_password.json() == {"error": "Invalid credentials"}
        assert unknown_user.json() == wrong_password.json()

    @pytest.mark.parametrize("payload", [
        {},
        {"username": "jonas"},
        {"password": "secret123"},
        {"username": "", "password": ""},
    ])
    def test_login_missing_fields(self, test_client, payload):
        response = test_client.post("/auth/login", json=payload)

        assert response.status_code == 400
        assert response.json()["error"] == "Username and password required"


@pytest.mark.integration
class TestScenarioRegisterThenLogin:
    """Register jonas, then try logging in with bad credentials"""

    def test_scenario(self, test_client):
        registered = test_client.post("/auth/register", json={
            "username": "jonas",
            "email": "jonas@x.com",
            "password": "secret123",
        })
        assert registered.status_code == 201
        assert "password" not in registered.json()

        bad_password = test_client.post("/auth/login", json={
            "username": "jonas",
            "password": "wrongpass",
        })
        assert bad_password.status_code == 401
        assert bad_password.json() == {"error": "Invalid credentials"}

        unknown = test_client.post("/auth/login", json={
            "username": "ghost",
            "password": "secret123",
        })
        assert unknown.status_code == 401
        assert unknown.json() == bad_password.json()

        good = test_client.post("/auth/login", json={
            "username": "jonas",
            "password": "secret123",
        })
        assert good.status_code == 200


@pytest.mark.integration
class TestMe:
    """Test GET /auth/me"""

    def test_me(self, test_client, seeded_users, jonas_headers):
        response = test_client.get("/auth/me", headers=jonas_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == seeded_users.jonas.id
        assert data["username"] == "jonas"
        assert data["admin"] is False
        assert "password_hash" not in data

    def test_me_with_login_token(self, test_client, seeded_users):
        token = test_client.post("/auth/login", json={
            "username": "katrin",
            "password": "secret123",
        }).json()["token"]

        response = test_client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json()["username"] == "katrin"

    def test_me_for_vanished_user(self, test_client, seeded_users, token_service):
        ghost = User(id=9999, username="ghost", email="ghost@x.com", password_hash="x", admin=False)
        headers = {"Authorization": f"Bearer {token_service.issue(ghost)}"}

        response = test_client.get("/auth/me", headers=headers)

        assert response.status_code == 401
