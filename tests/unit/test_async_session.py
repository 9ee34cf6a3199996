import pytest
from sqlalchemy import text

from movesbook.db.async_session import AsyncDatabaseManager


@pytest.mark.asyncio
async def test_manager_connects_and_reports_pool():
    manager = AsyncDatabaseManager("sqlite+aiosqlite://")
    try:
        assert await manager.test_connection() is True

        info = await manager.get_connection_info()
        assert info["status"] == "initialized"

        async for session in manager.get_async_session():
            result = await session.execute(text("SELECT 42"))
            assert result.scalar_one() == 42
    finally:
        await manager.close()

    assert await manager.get_connection_info() == {"status": "not_initialized"}


@pytest.mark.asyncio
async def test_closed_manager_refuses_sessions():
    manager = AsyncDatabaseManager("sqlite+aiosqlite://")
    await manager.close()

    with pytest.raises(RuntimeError):
        async for _ in manager.get_async_session():
            pass
