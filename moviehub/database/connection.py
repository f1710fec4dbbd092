"""Async database connection management with SQLAlchemy 2.0.

One ``DatabaseConnection`` is built per process (or per test) and
handed to the stores; nothing here is a module-level singleton.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from moviehub.database.models.base import Base
from moviehub.settings import DatabaseSettings


class DatabaseConnection:
    """Owns the async engine and session factory.

    Example:
        ```python
        db = DatabaseConnection.from_settings(settings.database)
        async with db.session() as session:
            await session.execute(text("SELECT 1"))
        await db.dispose()
        ```
    """

    def __init__(self, url: str, echo: bool = False, **engine_kwargs: Any) -> None:
        self.url = url
        self._engine = create_async_engine(url, echo=echo, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            bind=self._engine,
            autoflush=False,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, config: DatabaseSettings) -> "DatabaseConnection":
        """Create a connection from ``DatabaseSettings``.

        Pool sizing only applies to server databases; SQLite uses the
        driver's default pool.
        """
        engine_kwargs: dict[str, Any] = {}
        if not config.is_sqlite:
            engine_kwargs = {
                "pool_size": config.pool_size,
                "max_overflow": config.pool_overflow,
                "pool_timeout": config.pool_timeout,
                "pool_pre_ping": True,
            }
        return cls(config.async_url, echo=config.echo, **engine_kwargs)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a transactional async session scope.

        Commits on success, rolls back on exception, always closes.
        """
        session = self._session_factory()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def create_all(self) -> None:
        """Create all tables registered on ``Base.metadata``."""
        import moviehub.database.models  # noqa: F401

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def check_connection(self) -> bool:
        """Test database connectivity with a simple query."""
        try:
            async with self.session() as session:
                await session.execute(text("SELECT 1"))
            return True
        except Exception:  # noqa: BLE001
            return False

    async def dispose(self) -> None:
        """Dispose the connection pool. Call during shutdown."""
        await self._engine.dispose()

    @property
    def engine(self) -> AsyncEngine:
        return self._engine
