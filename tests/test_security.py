"""
Tests for password hashing, token issuing and the access-control dependencies.
"""

from datetime import timedelta

import pytest
from jose import jwt

from app.core.config import settings
from app.core.exceptions import AuthenticationError, AuthorizationError
from app.core.security import (
    Identity,
    authorize,
    create_access_token,
    hash_password,
    verify_password,
    verify_token,
)
from app.models.enums import UserRole


class TestPasswordHashing:
    def test_hash_differs_from_plaintext(self):
        hashed = hash_password("secret123")
        assert hashed != "secret123"
        assert hashed.startswith("$2")

    def test_verify(self):
        hashed = hash_password("secret123")
        assert verify_password("secret123", hashed) is True
        assert verify_password("wrong", hashed) is False

    def test_verify_rejects_non_hash(self):
        assert verify_password("secret123", "secret123") is False


class TestTokens:
    def test_round_trip(self):
        token = create_access_token("user-1", UserRole.SALE)
        identity = verify_token(token)
        assert identity == Identity(user_id="user-1", role=UserRole.SALE)

    def test_claims_and_expiry(self):
        token = create_access_token("user-1", UserRole.USER)
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
        assert payload["userId"] == "user-1"
        assert payload["role"] == "user"
        assert "exp" in payload

    def test_expired_token_rejected(self):
        token = create_access_token("user-1", UserRole.USER, expires_delta=timedelta(minutes=-1))
        with pytest.raises(AuthenticationError):
            verify_token(token)

    def test_wrong_signature_rejected(self):
        token = jwt.encode({"userId": "user-1", "role": "admin"}, "another-secret", algorithm="HS256")
        with pytest.raises(AuthenticationError):
            verify_token(token)

    def test_unknown_role_rejected(self):
        token = jwt.encode({"userId": "user-1", "role": "root"}, settings.jwt_secret_key, algorithm="HS256")
        with pytest.raises(AuthenticationError):
            verify_token(token)

    def test_missing_user_id_rejected(self):
        token = jwt.encode({"role": "user"}, settings.jwt_secret_key, algorithm="HS256")
        with pytest.raises(AuthenticationError):
            verify_token(token)


class TestAuthorize:
    async def test_allowed_role_passes_through(self):
        check = authorize(UserRole.ADMIN, UserRole.SALE)
        identity = Identity(user_id="u", role=UserRole.SALE)
        assert await check(identity) is identity

    async def test_other_role_forbidden(self):
        check = authorize(UserRole.ADMIN)
        with pytest.raises(AuthorizationError):
            await check(Identity(user_id="u", role=UserRole.USER))
