"""
Async unit tests for DefaultsService.

Defaults blobs are keyed by language, written only with the super admin
password, and replaced wholesale on every save.
"""

import asyncio

import pytest
from sqlalchemy import func, select

from movesbook.core.config import settings
from movesbook.models.defaults import ColorDefaults, DefaultsKind
from movesbook.services.async_auth import AsyncAuthService
from movesbook.services.async_defaults import DefaultsService, validate_language
from movesbook.services.errors import Unauthorized, ValidationError
from tests.utils_jwt import ADMIN_PASSWORD

COLORS_EN = {"pageBackground": "#ffffff", "sports": {"SWIM": "#00aaff", "RUN": "#ff5500"}, "rows": [1, 2, 3]}


class TestLanguageValidation:
    @pytest.mark.parametrize("language", ["en", "pt-BR", "zh-Hant", "fil"])
    def test_accepts_language_codes(self, language):
        assert validate_language(language) == language

    @pytest.mark.parametrize("language", ["EN", "e", "english", "en_US", "en-", "../etc"])
    def test_rejects_malformed_codes(self, language):
        with pytest.raises(ValidationError):
            validate_language(language)

    @pytest.mark.parametrize("language", [None, ""])
    def test_requires_language(self, language):
        with pytest.raises(ValidationError, match="Language parameter required"):
            validate_language(language)


class TestDefaultsStore:
    @pytest.mark.asyncio
    async def test_save_then_load_returns_same_blob(self, async_db_session, admin_user):
        message = await DefaultsService.save(
            async_db_session, DefaultsKind.COLORS, "en", COLORS_EN, ADMIN_PASSWORD
        )

        assert message == "Color defaults saved for en"
        assert await DefaultsService.load(async_db_session, DefaultsKind.COLORS, "en") == COLORS_EN

    @pytest.mark.asyncio
    async def test_load_unknown_language_returns_none(self, async_db_session):
        assert await DefaultsService.load(async_db_session, DefaultsKind.TOOLS, "xx") is None

    @pytest.mark.asyncio
    async def test_repeated_saves_keep_one_row_with_last_value(self, async_db_session, admin_user):
        for index in range(3):
            await DefaultsService.save(
                async_db_session, DefaultsKind.COLORS, "en", {"version": index}, ADMIN_PASSWORD
            )

        result = await async_db_session.execute(
            select(func.count()).select_from(ColorDefaults).where(ColorDefaults.language == "en")
        )
        assert result.scalar_one() == 1
        assert await DefaultsService.load(async_db_session, DefaultsKind.COLORS, "en") == {"version": 2}

    @pytest.mark.asyncio
    async def test_concurrent_saves_keep_one_row(self, session_factory, admin_user):
        blobs = [{"writer": index} for index in range(5)]

        async def save(blob):
            async with session_factory() as session:
                return await DefaultsService.save(session, DefaultsKind.COLORS, "en", blob, ADMIN_PASSWORD)

        messages = await asyncio.gather(*(save(blob) for blob in blobs))

        assert messages == ["Color defaults saved for en"] * len(blobs)
        async with session_factory() as session:
            result = await session.execute(
                select(func.count()).select_from(ColorDefaults).where(ColorDefaults.language == "en")
            )
            assert result.scalar_one() == 1
            assert await DefaultsService.load(session, DefaultsKind.COLORS, "en") in blobs

    @pytest.mark.asyncio
    async def test_languages_and_kinds_are_independent(self, async_db_session, admin_user):
        await DefaultsService.save(async_db_session, DefaultsKind.COLORS, "en", {"lang": "en"}, ADMIN_PASSWORD)
        await DefaultsService.save(async_db_session, DefaultsKind.COLORS, "it", {"lang": "it"}, ADMIN_PASSWORD)
        await DefaultsService.save(async_db_session, DefaultsKind.TOOLS, "en", ["stopwatch"], ADMIN_PASSWORD)

        assert await DefaultsService.load(async_db_session, DefaultsKind.COLORS, "it") == {"lang": "it"}
        assert await DefaultsService.load_all(async_db_session, "en") == {
            "colors": {"lang": "en"},
            "favourites": None,
            "tools": ["stopwatch"],
        }

    @pytest.mark.asyncio
    async def test_wrong_password_changes_nothing(self, async_db_session, admin_user):
        await DefaultsService.save(async_db_session, DefaultsKind.FAVOURITES, "en", {"keep": True}, ADMIN_PASSWORD)

        with pytest.raises(Unauthorized, match="Invalid Super Admin password"):
            await DefaultsService.save(async_db_session, DefaultsKind.FAVOURITES, "en", {"keep": False}, "guess")

        assert await DefaultsService.load(async_db_session, DefaultsKind.FAVOURITES, "en") == {"keep": True}

    @pytest.mark.asyncio
    async def test_password_is_checked_before_fields(self, async_db_session, admin_user):
        with pytest.raises(Unauthorized):
            await DefaultsService.save(async_db_session, DefaultsKind.COLORS, None, None, "guess")

        with pytest.raises(ValidationError, match="Missing required fields"):
            await DefaultsService.save(async_db_session, DefaultsKind.COLORS, None, None, ADMIN_PASSWORD)

    @pytest.mark.asyncio
    async def test_without_any_admin_every_password_is_rejected(self, async_db_session, test_user):
        with pytest.raises(Unauthorized):
            await DefaultsService.save(async_db_session, DefaultsKind.COLORS, "en", COLORS_EN, "")

        with pytest.raises(Unauthorized):
            await DefaultsService.save(async_db_session, DefaultsKind.COLORS, "en", COLORS_EN, ADMIN_PASSWORD)

    @pytest.mark.asyncio
    async def test_configured_super_admin_hash_is_accepted(self, async_db_session, monkeypatch):
        monkeypatch.setattr(settings, "SUPER_ADMIN_PASSWORD_HASH", AsyncAuthService.get_password_hash("configured"))

        message = await DefaultsService.save(async_db_session, DefaultsKind.TOOLS, "pt-BR", {"a": 1}, "configured")

        assert message == "Tools defaults saved for pt-BR"
