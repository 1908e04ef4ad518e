from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from rentals_checkout.config import Settings

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


def build_engine(settings: Settings):
    url = settings.database_url or DEFAULT_DATABASE_URL
    if url.startswith("sqlite"):
        return create_async_engine(url)
    return create_async_engine(
        url,
        pool_pre_ping=True,
        pool_recycle=3600,
    )


def build_sessionmaker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
