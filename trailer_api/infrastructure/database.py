"""Database engine and session management.

One async engine per process; request handlers get their session from
the ``get_session`` dependency.
"""

import json
from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from trailer_api.infrastructure.config import settings


def json_serializer(value: Any) -> str:
    """Serialize JSON columns without escaping Cyrillic text.

    Keyword search matches against the stored JSON text, so non-ASCII
    characters must be kept as-is.
    """
    return json.dumps(value, ensure_ascii=False)


def build_engine(database_url: str, **kwargs: Any) -> AsyncEngine:
    """Create an async engine with the catalog's JSON serializer.

    Args:
        database_url: SQLAlchemy database URL.
        **kwargs: Extra engine options.

    Returns:
        Configured async engine.
    """
    return create_async_engine(
        database_url,
        json_serializer=json_serializer,
        **kwargs,
    )


# Application engine; pool_pre_ping drops connections the server closed
engine = build_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=True,
)

# Instances stay readable after commit so handlers can serialize them
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

Base = declarative_base()


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide one session per request.

    The transaction commits when the request handler returns and rolls
    back if it raises.

    Yields:
        AsyncSession bound to the application engine.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def create_tables(bind: AsyncEngine | None = None) -> None:
    """Create database tables if they don't exist.

    Args:
        bind: Engine to use, defaults to the application engine.
    """
    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
