import asyncio
import ssl
from typing import AsyncGenerator

import structlog
from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from app.config import settings
from app.exceptions import SamdCareException

logger = structlog.get_logger()


def get_connect_args():
    """Get connection arguments"""
    if not settings.DATABASE_URI.startswith("postgresql+asyncpg"):
        return {}

    connect_args = {
        "timeout": 30,
        "command_timeout": 30,
    }

    if settings.is_production:
        ssl_context = ssl.create_default_context()
        ssl_context.check_hostname = False
        ssl_context.verify_mode = ssl.CERT_NONE
        connect_args.update(
            {
                "ssl": ssl_context,
                "server_settings": {
                    "application_name": "samd_care_api",
                    "client_encoding": "utf8",
                },
            }
        )

        if settings.NEON_ENDPOINT_ID:
            connect_args["server_settings"]["neon.endpoint_id"] = (
                settings.NEON_ENDPOINT_ID
            )

    return connect_args


# Create engine with specific configuration for serverless
engine = create_async_engine(
    settings.DATABASE_URI,
    echo=settings.DB_ECHO_QUERIES,
    poolclass=NullPool,
    connect_args=get_connect_args(),
)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    pass


async def _connect_with_retry(session: AsyncSession, attempts: int = 3) -> None:
    """Open the session's connection, retrying transient connection failures."""
    for attempt in range(attempts):
        try:
            await session.connection()
            return
        except Exception as e:
            logger.error(
                "Database connection attempt failed", attempt=attempt + 1, error=str(e)
            )
            if attempt == attempts - 1:
                logger.error("All database connection attempts failed")
                raise
            await asyncio.sleep(1)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        await _connect_with_retry(session)
        try:
            yield session
            await session.commit()
        except (HTTPException, SamdCareException):
            await session.rollback()
            raise
        except Exception as e:
            await session.rollback()
            logger.error("Database error", error=str(e))
            raise
