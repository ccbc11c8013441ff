"""
Async engine, session factory and schema bootstrap for the tracker database.
"""
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker

from .config import settings
from .models import Base

engine = create_async_engine(
    settings.database_url,
    echo=settings.database_echo,
)

async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False
)


async def create_tables(bind: Optional[AsyncEngine] = None) -> None:
    """Create users, projects, sprints and tasks tables if missing."""
    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# One session per request
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session() as session:
        try:
            yield session
        finally:
            await session.close()
