from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import text
from typing import AsyncGenerator, Optional, Dict, Any
import logging
import asyncio
import time
from datetime import datetime, timezone

from movesbook.core.config import settings

logger = logging.getLogger(__name__)


class AsyncDatabaseManager:
    """
    Manages async database connections and sessions.

    Owns the async engine and the session factory, and hands out one
    session per request through ``get_async_session``.
    """

    def __init__(self, database_url: Optional[str] = None):
        self.database_url = database_url or settings.async_database_url
        self.async_engine = None
        self.async_session_factory = None
        self._is_initialized = False
        self._initialize_engine()

    def _initialize_engine(self):
        """Initialize the async database engine."""
        try:
            async_db_url = self.database_url

            if not async_db_url:
                raise ValueError("Async database URL is not configured")

            # Replace any escaped colons in the URL
            async_db_url = async_db_url.replace("\\x3a", ":")

            logger.info(f"Initializing async database engine with URL: {async_db_url[:50]}...")
            logger.info(f"Environment: {settings.ENVIRONMENT}")

            engine_kwargs: Dict[str, Any] = {
                "echo": settings.ASYNC_DB_ECHO,
                "pool_pre_ping": settings.ASYNC_DB_POOL_PRE_PING,
            }

            if async_db_url.startswith("postgresql+asyncpg"):
                pool_size = settings.ASYNC_DB_POOL_SIZE
                max_overflow = settings.ASYNC_DB_MAX_OVERFLOW
                if settings.ENVIRONMENT == "development":
                    pool_size = min(pool_size, 5)
                    max_overflow = min(max_overflow, 5)

                logger.info(f"Pool configuration - Size: {pool_size}, Max Overflow: {max_overflow}, "
                            f"Timeout: {settings.ASYNC_DB_POOL_TIMEOUT}s, Recycle: {settings.ASYNC_DB_POOL_RECYCLE}s")

                engine_kwargs.update(
                    pool_size=pool_size,
                    max_overflow=max_overflow,
                    pool_recycle=settings.ASYNC_DB_POOL_RECYCLE,
                    pool_timeout=settings.ASYNC_DB_POOL_TIMEOUT,
                    connect_args={
                        "server_settings": {
                            "application_name": "movesbook_backend_async",
                        },
                        "command_timeout": 60,
                    },
                )

            self.async_engine = create_async_engine(async_db_url, **engine_kwargs)

            self.async_session_factory = async_sessionmaker(
                bind=self.async_engine,
                class_=AsyncSession,
                expire_on_commit=False,  # Keep objects accessible after commit
                autoflush=False,
            )

            self._is_initialized = True
            logger.info("Async database engine initialized successfully")

        except Exception as e:
            logger.error(f"Failed to initialize async database engine: {e}")
            raise

    async def get_async_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Get an async database session with proper lifecycle management.

        Rolls back on any exception and always closes the session.

        Yields:
            AsyncSession: Database session for async operations

        Raises:
            RuntimeError: If the database manager is not initialized
        """
        if not self._is_initialized:
            raise RuntimeError("AsyncDatabaseManager is not initialized")

        async with self.async_session_factory() as session:
            try:
                yield session
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error(f"Database error in session: {e}")
                raise
            except Exception as e:
                await session.rollback()
                logger.error(f"Unexpected error in database session: {e}")
                raise
            finally:
                await session.close()

    async def test_connection(self) -> bool:
        """
        Test the database connection.

        Returns:
            bool: True if connection is successful, False otherwise
        """
        try:
            async with self.async_session_factory() as session:
                await session.execute(text("SELECT 1"))
                return True
        except Exception as e:
            logger.error(f"Database connection test failed: {e}")
            return False

    async def get_connection_info(self) -> dict:
        """Get information about the current connection pool."""
        if not self.async_engine:
            return {"status": "not_initialized"}

        pool = self.async_engine.pool
        try:
            return {
                "pool_size": pool.size(),
                "checked_in": pool.checkedin(),
                "checked_out": pool.checkedout(),
                "overflow": pool.overflow(),
                "status": "initialized"
            }
        except AttributeError as e:
            # Pools such as StaticPool do not expose sizing information
            logger.warning(f"Some pool attributes not available: {e}")
            return {
                "status": "initialized",
                "pool_type": str(type(pool).__name__),
            }

    async def close(self):
        """Dispose of the engine and all pooled connections."""
        if self.async_engine:
            try:
                await self.async_engine.dispose()
                logger.info("Async database engine disposed successfully")
            except Exception as e:
                logger.error(f"Error disposing async database engine: {e}")
            finally:
                self._is_initialized = False
                self.async_engine = None
                self.async_session_factory = None


# Global async database manager instance (singleton pattern)
_async_db_manager: Optional[AsyncDatabaseManager] = None
_manager_lock = asyncio.Lock()


async def get_async_db_manager() -> AsyncDatabaseManager:
    """Get or create the global async database manager instance."""
    global _async_db_manager

    if _async_db_manager is None:
        async with _manager_lock:
            # Double-check locking pattern
            if _async_db_manager is None:
                _async_db_manager = AsyncDatabaseManager()
                logger.info("Created new AsyncDatabaseManager singleton instance")

    return _async_db_manager


async def close_async_db_manager():
    """Close the global async database manager and drop the singleton."""
    global _async_db_manager

    if _async_db_manager is not None:
        await _async_db_manager.close()
        _async_db_manager = None
        logger.info("AsyncDatabaseManager singleton closed")


# Async dependency injection function for FastAPI
async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for async database session injection.

    One session per request: created from the pool, rolled back on any
    exception and closed after use.

    Example:
        @router.get("/plans")
        async def get_plan(db: AsyncSession = Depends(get_async_db)):
            ...
    """
    try:
        manager = await get_async_db_manager()
        async for session in manager.get_async_session():
            yield session
    except Exception as e:
        logger.error(f"Failed to provide async database session: {e}")
        raise


# Database startup and shutdown handlers
async def startup_async_database():
    """
    Initialize async database connections on application startup.

    Raises:
        RuntimeError: If the database cannot be reached
    """
    try:
        logger.info("Starting async database initialization...")
        manager = await get_async_db_manager()

        connection_test = await manager.test_connection()
        if not connection_test:
            raise RuntimeError("Failed to establish database connection during startup")

        pool_info = await manager.get_connection_info()
        logger.info(f"Async database startup completed. Pool info: {pool_info}")

    except Exception as e:
        logger.error(f"Failed to initialize async database during startup: {e}")
        raise


async def shutdown_async_database():
    """Clean up async database connections on application shutdown."""
    try:
        logger.info("Starting async database shutdown...")
        await close_async_db_manager()
        logger.info("Async database shutdown completed successfully")
    except Exception as e:
        logger.error(f"Error during async database shutdown: {e}")


async def check_async_database_health() -> dict:
    """
    Check connectivity and pool status of the async database.

    Returns:
        dict: Health check results, e.g.
        {
            "status": "healthy",
            "connection_test": True,
            "pool_info": {...},
            "response_time_ms": 15.2,
            "timestamp": "2026-01-15T10:30:00+00:00"
        }
    """
    start_time = time.time()
    health_status = {
        "status": "unhealthy",
        "connection_test": False,
        "pool_info": {},
        "response_time_ms": 0,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "error": None
    }

    try:
        manager = await get_async_db_manager()

        connection_test = await manager.test_connection()
        health_status["connection_test"] = connection_test
        health_status["pool_info"] = await manager.get_connection_info()

        if connection_test:
            health_status["status"] = "healthy"

    except Exception as e:
        health_status["error"] = str(e)
        logger.error(f"Async database health check failed: {e}")
    finally:
        health_status["response_time_ms"] = round((time.time() - start_time) * 1000, 2)

    return health_status
