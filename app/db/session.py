from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker

from app.core.config import settings
from app.helpers.getters import isDebugMode
import logging
logger = logging.getLogger(__name__)

if isDebugMode() and settings.POSTGRES_EXTERNAL_URL:
    logger.info("Using EXTERNAL database URL for debug mode")
    DATABASE_URL = settings.POSTGRES_EXTERNAL_URL
    DATABASE_URL_SYNC = settings.POSTGRES_EXTERNAL_URL_SYNC or settings.POSTGRES_INTERNAL_URL_SYNC
else:
    logger.info("Using INTERNAL database URL")
    DATABASE_URL = settings.POSTGRES_INTERNAL_URL
    DATABASE_URL_SYNC = settings.POSTGRES_INTERNAL_URL_SYNC

engine_internal = create_async_engine(DATABASE_URL, future=True, echo=False)
SessionAsync = sessionmaker(engine_internal, class_=AsyncSession, expire_on_commit=False)

# Sync engine, only used to create the schema at startup
engine_internal_sync = create_engine(DATABASE_URL_SYNC, pool_pre_ping=True)
