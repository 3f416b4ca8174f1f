"""
Jotter Backend: Database Engine & Sessions
===========================================

What:  The async engine, the session factory, the declarative base, and the
       per-request session dependency.
Who:   Routes depend on get_db_session; models subclass Base; Alembic and the
       test suite read Base.metadata.

Concurrency Model:
    One AsyncSession per request, never shared. The engine's pool is the only
    state requests have in common. A single note write is one UPDATE or
    DELETE statement, so row-level atomicity is all the database provides;
    a DELETE racing a PATCH leaves the loser with "not found".
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from jotter.config import settings


def _engine_options(url: str) -> Dict[str, Any]:
    # SQLite drivers reject pool sizing arguments
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if not url.startswith("sqlite"):
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


engine = create_async_engine(settings.database_url, **_engine_options(settings.database_url))

# expire_on_commit=False: handlers serialize ORM objects after the commit
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Declarative base shared by Note, User and AuthToken."""


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding the request's session.

    The transaction commits once the handler returns and rolls back if
    anything raised, including application errors such as a failed ownership
    check, so a rejected request never leaves partial writes behind.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def dispose_engine() -> None:
    """Closes pooled connections; called on application shutdown."""
    await engine.dispose()
