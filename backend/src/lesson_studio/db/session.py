from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from lesson_studio.config import settings

engine = create_async_engine(settings.database_url, echo=False, pool_pre_ping=True)
async_session = async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


async def get_db_session() -> AsyncGenerator[AsyncSession]:
    """Request-scoped session for lesson and course lookups.

    Generated activities are returned to the caller, never written, so nothing
    is committed; the transaction is rolled back when the request ends.
    """
    async with async_session() as session:
        try:
            yield session
        finally:
            await session.rollback()
