"""
Async unit tests for AsyncAuthService.

Covers password hashing, bearer token issue and verification, caller
resolution and the super admin credential check.
"""

from datetime import timedelta

import jwt
import pytest

from movesbook.core.config import settings
from movesbook.services.async_auth import AsyncAuthService
from movesbook.services.errors import Unauthorized
from tests.utils_jwt import ADMIN_PASSWORD, ATHLETE_PASSWORD, generate_test_jwt


class TestPasswordsAndTokens:
    def test_password_hashing_and_verification(self):
        hashed = AsyncAuthService.get_password_hash("secure_password123")

        assert hashed != "secure_password123"
        assert AsyncAuthService.verify_password("secure_password123", hashed) is True
        assert AsyncAuthService.verify_password("wrong_password", hashed) is False

    def test_access_token_round_trip(self):
        token = AsyncAuthService.create_access_token("user-42", role="ATHLETE")

        payload = AsyncAuthService.decode_access_token(token)

        assert payload.sub == "user-42"
        assert payload.role == "ATHLETE"

    def test_expired_token_is_rejected(self):
        token = AsyncAuthService.create_access_token("user-42", expires_delta=timedelta(seconds=-10))

        with pytest.raises(Unauthorized, match="Invalid token"):
            AsyncAuthService.decode_access_token(token)

    def test_token_signed_with_other_key_is_rejected(self):
        token = jwt.encode({"sub": "user-42", "exp": 9999999999}, "not-the-secret", algorithm=settings.JWT_ALGORITHM)

        with pytest.raises(Unauthorized):
            AsyncAuthService.decode_access_token(token)


class TestCallerResolution:
    @pytest.mark.asyncio
    async def test_missing_token_is_unauthorized(self, async_db_session):
        with pytest.raises(Unauthorized, match="Unauthorized"):
            await AsyncAuthService.get_current_user(async_db_session, None)

    @pytest.mark.asyncio
    async def test_token_resolves_user(self, async_db_session, test_user):
        user = await AsyncAuthService.get_current_user(async_db_session, generate_test_jwt(test_user.id))

        assert user.id == test_user.id

    @pytest.mark.asyncio
    async def test_token_for_unknown_user_is_unauthorized(self, async_db_session):
        with pytest.raises(Unauthorized, match="Invalid token"):
            await AsyncAuthService.get_current_user(async_db_session, generate_test_jwt("ghost"))

    @pytest.mark.asyncio
    async def test_authenticate(self, async_db_session, test_user):
        assert (await AsyncAuthService.authenticate(async_db_session, test_user.email, ATHLETE_PASSWORD)).id == test_user.id
        assert await AsyncAuthService.authenticate(async_db_session, test_user.email, "nope") is None
        assert await AsyncAuthService.authenticate(async_db_session, "nobody@example.com", ATHLETE_PASSWORD) is None


class TestAdminCredential:
    @pytest.mark.asyncio
    async def test_admin_user_password_is_accepted(self, async_db_session, admin_user):
        assert await AsyncAuthService.verify_admin_password(async_db_session, ADMIN_PASSWORD) is True
        assert await AsyncAuthService.verify_admin_password(async_db_session, "guess") is False
        assert await AsyncAuthService.verify_admin_password(async_db_session, None) is False

    @pytest.mark.asyncio
    async def test_non_admin_password_is_rejected(self, async_db_session, test_user):
        assert await AsyncAuthService.verify_admin_password(async_db_session, ATHLETE_PASSWORD) is False

    @pytest.mark.asyncio
    async def test_verifier_error_denies_access(self, async_db_session, admin_user, monkeypatch):
        def broken_verify(plain_password, hashed_password):
            raise RuntimeError("hash backend unavailable")

        monkeypatch.setattr(AsyncAuthService, "verify_password", staticmethod(broken_verify))

        assert await AsyncAuthService.verify_admin_password(async_db_session, ADMIN_PASSWORD) is False
