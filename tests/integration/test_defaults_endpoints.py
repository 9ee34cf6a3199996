"""HTTP tests for the /defaults endpoints."""

import pytest

from tests.utils_jwt import ADMIN_PASSWORD

DEFAULTS_URL = "/api/v1/defaults"

TOOLS = {"stopwatch": True, "zones": ["Z1", "Z2", "Z3"]}


class TestDefaultsEndpoints:
    @pytest.mark.asyncio
    async def test_save_and_load(self, async_client, admin_user):
        save = await async_client.post(
            f"{DEFAULTS_URL}/tools",
            json={"language": "en", "data": TOOLS, "password": ADMIN_PASSWORD},
        )
        assert save.status_code == 200
        assert save.json() == {"success": True, "message": "Tools defaults saved for en"}

        load = await async_client.get(f"{DEFAULTS_URL}/tools", params={"language": "en"})
        assert load.status_code == 200
        assert load.json() == {"success": True, "data": TOOLS, "language": "en"}

    @pytest.mark.asyncio
    async def test_load_missing_language_is_not_found(self, async_client):
        response = await async_client.get(f"{DEFAULTS_URL}/colors", params={"language": "xx"})

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "No defaults found for this language"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("params", [{}, {"language": "EN_us"}])
    async def test_load_without_valid_language_is_bad_request(self, async_client, params):
        response = await async_client.get(f"{DEFAULTS_URL}/colors", params=params)

        assert response.status_code == 400
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_unknown_kind_is_bad_request(self, async_client):
        response = await async_client.get(f"{DEFAULTS_URL}/fonts", params={"language": "en"})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_save_with_wrong_password(self, async_client, admin_user):
        response = await async_client.post(
            f"{DEFAULTS_URL}/colors",
            json={"language": "en", "data": {"bg": "#000"}, "password": "guess"},
        )

        assert response.status_code == 401
        assert response.json() == {"success": False, "error": "Invalid Super Admin password"}
        load = await async_client.get(f"{DEFAULTS_URL}/colors", params={"language": "en"})
        assert load.status_code == 404

    @pytest.mark.asyncio
    async def test_save_with_missing_fields(self, async_client, admin_user):
        response = await async_client.post(f"{DEFAULTS_URL}/favourites", json={"password": ADMIN_PASSWORD})

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Missing required fields"}

    @pytest.mark.asyncio
    async def test_load_all(self, async_client, admin_user):
        await async_client.post(
            f"{DEFAULTS_URL}/favourites",
            json={"language": "it", "data": ["swim", "run"], "password": ADMIN_PASSWORD},
        )

        response = await async_client.get(DEFAULTS_URL, params={"language": "it"})

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "language": "it",
            "defaults": {"colors": None, "favourites": ["swim", "run"], "tools": None},
        }
