"""
MongoDB connection management for the task service
"""
from typing import Optional
import logging

from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from .config import settings
from .models import DOCUMENT_MODELS

logger = logging.getLogger(__name__)

_client: Optional[AsyncIOMotorClient] = None
_db: Optional[AsyncIOMotorDatabase] = None


async def init_db() -> AsyncIOMotorDatabase:
    """
    Connect to MongoDB and register the document models with Beanie.
    Should be called on application startup.
    """
    global _client, _db
    if _db is not None:
        return _db
    try:
        _client = AsyncIOMotorClient(settings.MONGO_URI)
        _db = _client[settings.MONGO_DB_NAME]
        await init_beanie(database=_db, document_models=DOCUMENT_MODELS)
        logger.info("Connected to MongoDB database %s", settings.MONGO_DB_NAME)
    except Exception as e:
        logger.error("MongoDB connection failed: %s", e)
        _client = None
        _db = None
        raise
    return _db


async def close_db() -> None:
    global _client, _db
    if _client is not None:
        _client.close()
        logger.info("MongoDB connection closed")
    _client = None
    _db = None


async def check_db_connection() -> bool:
    """
    Check if the database connection is working.

    Returns:
        bool: True if MongoDB answers a ping, False otherwise
    """
    if _client is None:
        return False
    try:
        await _client.admin.command("ping")
        return True
    except Exception as e:
        logger.error("Database connection check failed: %s", e)
        return False
