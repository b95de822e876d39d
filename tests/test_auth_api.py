"""
Tests for registration, login and the current-user endpoint.
"""

from jose import jwt
from sqlmodel import select

from app.core.config import settings
from app.models import User

API = "/api/v1"


def registration(**overrides):
    payload = {
        "username": "alice",
        "email": "alice@example.com",
        "password": "secret123",
        "fullName": "Alice Nguyen",
        "phone": "0911222333",
        "address": {"city": "Hanoi", "district": "Ba Dinh"},
    }
    payload.update(overrides)
    return payload


class TestRegister:
    async def test_register_returns_public_fields_only(self, client):
        response = await client.post(f"{API}/auth/register", json=registration())

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert set(body["data"]) == {"id", "username", "email"}
        assert body["data"]["username"] == "alice"
        assert "password" not in response.text

    async def test_password_stored_as_hash(self, client, session_maker):
        await client.post(f"{API}/auth/register", json=registration())

        async with session_maker() as session:
            user = (await session.execute(select(User).where(User.username == "alice"))).scalar_one()
        assert user.password != "secret123"
        assert user.password.startswith("$2")
        assert user.role.value == "user"
        assert user.address == {
            "street": None, "city": "Hanoi", "district": "Ba Dinh", "ward": None, "zipCode": None,
        }

    async def test_duplicate_username(self, client):
        await client.post(f"{API}/auth/register", json=registration())
        response = await client.post(f"{API}/auth/register", json=registration(email="other@example.com"))

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Username already exists", "status_code": 400}

    async def test_duplicate_email(self, client):
        await client.post(f"{API}/auth/register", json=registration())
        response = await client.post(f"{API}/auth/register", json=registration(username="alice2"))

        assert response.status_code == 400
        assert response.json()["message"] == "Email already registered"

    async def test_missing_required_field(self, client):
        payload = registration()
        del payload["fullName"]
        response = await client.post(f"{API}/auth/register", json=payload)

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert "fullName" in body["message"]

    async def test_role_cannot_be_self_assigned(self, client, session_maker):
        await client.post(f"{API}/auth/register", json=registration(role="admin"))

        async with session_maker() as session:
            user = (await session.execute(select(User).where(User.username == "alice"))).scalar_one()
        assert user.role.value == "user"

    async def test_multibyte_password_within_byte_limit(self, client):
        # 9 characters, 13 bytes
        response = await client.post(f"{API}/auth/register", json=registration(password="mậtkhẩu12"))

        assert response.status_code == 201
        login = await client.post(
            f"{API}/auth/login", json={"email": "alice@example.com", "password": "mậtkhẩu12"}
        )
        assert login.status_code == 200

    async def test_password_over_72_bytes_rejected(self, client, session_maker):
        # 56 characters but well over 72 bytes in UTF-8
        response = await client.post(f"{API}/auth/register", json=registration(password="mậtkhẩu" * 8))

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert "72 bytes" in body["message"]
        async with session_maker() as session:
            assert (await session.execute(select(User))).first() is None


class TestLogin:
    async def test_login_issues_token(self, client, create_user):
        user = await create_user(email="bob@example.com")
        response = await client.post(f"{API}/auth/login", json={"email": "bob@example.com", "password": "secret123"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        payload = jwt.decode(body["token"], settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
        assert payload["userId"] == user.id
        assert payload["role"] == "user"
        assert payload["exp"] > 0

    async def test_wrong_password_and_unknown_email_look_identical(self, client, create_user):
        await create_user(email="bob@example.com")

        wrong_password = await client.post(
            f"{API}/auth/login", json={"email": "bob@example.com", "password": "nope-nope"}
        )
        unknown_email = await client.post(
            f"{API}/auth/login", json={"email": "ghost@example.com", "password": "secret123"}
        )

        assert wrong_password.status_code == unknown_email.status_code == 401
        assert wrong_password.json() == unknown_email.json()
        assert wrong_password.json()["message"] == "Invalid credentials"

    async def test_deactivated_user_cannot_login(self, client, create_user):
        await create_user(email="gone@example.com", isActive=False)
        response = await client.post(f"{API}/auth/login", json={"email": "gone@example.com", "password": "secret123"})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"

    async def test_malformed_email_is_invalid_credentials(self, client):
        response = await client.post(f"{API}/auth/login", json={"email": "not-an-email", "password": "secret123"})

        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Invalid credentials", "status_code": 401}

    async def test_overlong_password_is_invalid_credentials(self, client, create_user):
        await create_user(email="bob@example.com")
        response = await client.post(
            f"{API}/auth/login", json={"email": "bob@example.com", "password": "mậtkhẩu" * 8}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"


class TestMe:
    async def test_requires_token(self, client):
        response = await client.get(f"{API}/auth/me")

        assert response.status_code == 401
        assert response.json()["success"] is False

    async def test_rejects_garbage_token(self, client):
        response = await client.get(f"{API}/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401

    async def test_returns_profile(self, client, seller, auth_headers):
        response = await client.get(f"{API}/auth/me", headers=auth_headers(seller))

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["id"] == seller.id
        assert data["role"] == "sale"
        assert "password" not in data
