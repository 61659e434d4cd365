"""
MongoDB connection lifecycle.

The application starts even when MongoDB is unreachable; requests that need
the database then fail with a 503 until the next restart.
"""
import logging
from contextlib import asynccontextmanager
from typing import Dict, List, Optional, Tuple

from fastapi import FastAPI
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING, IndexModel

from ..exceptions import StorageError
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)

# collection -> (keys, options)
INDEXES: Dict[str, List[Tuple[List[Tuple[str, int]], dict]]] = {
    "products": [
        ([("title", ASCENDING)], {}),
        ([("category", ASCENDING)], {}),
        ([("sizeVariants.price", ASCENDING)], {}),
        ([("createdAt", DESCENDING)], {}),
    ],
    "orders": [
        ([("orderId", ASCENDING)], {"unique": True}),
        ([("createdAt", DESCENDING)], {}),
        ([("totalCartPrice", ASCENDING)], {}),
    ],
}


class DatabaseManager:
    """Owns the Motor client and the storefront database handle."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.client: Optional[AsyncIOMotorClient] = None
        self.database: Optional[AsyncIOMotorDatabase] = None

    async def connect(self) -> bool:
        """
        Open the client and verify it with a ping.

        Returns:
            True if MongoDB answered, False if the app runs without a database
        """
        cfg = self.settings
        logger.info(f"🚀 Connecting to MongoDB database '{cfg.database_name}'...")
        try:
            self.client = AsyncIOMotorClient(
                cfg.mongodb_url,
                serverSelectionTimeoutMS=cfg.server_selection_timeout_ms,
                connectTimeoutMS=cfg.connect_timeout_ms,
                socketTimeoutMS=cfg.socket_timeout_ms,
                maxPoolSize=cfg.max_pool_size,
                minPoolSize=cfg.min_pool_size,
                retryWrites=cfg.retry_writes,
            )
            await self.client.admin.command('ping')
        except Exception as db_error:
            logger.warning(f"⚠️  MongoDB connection failed: {db_error}")
            self.database = None
            return False

        self.database = self.client[cfg.database_name]
        logger.info("✅ Connected to MongoDB successfully")
        return True

    async def disconnect(self) -> None:
        if self.client is None:
            return
        try:
            self.client.close()
            logger.info("🔌 MongoDB connection closed")
        except Exception as e:
            logger.error(f"Error during database disconnect: {e}")
        finally:
            self.client = None
            self.database = None

    async def create_indexes(self) -> None:
        """Create the catalog and order indexes; failures are logged only."""
        if self.database is None:
            logger.warning("Database not connected, skipping index creation")
            return

        try:
            for collection, specs in INDEXES.items():
                models = [IndexModel(keys, **options) for keys, options in specs]
                await self.database[collection].create_indexes(models)
            logger.info("✅ Database indexes created successfully")
        except Exception as index_error:
            logger.warning(f"⚠️  Failed to create indexes: {index_error}")

    async def ping(self) -> str:
        """Connection status for the health endpoint."""
        if self.database is None:
            return "disconnected"
        try:
            await self.database.command('ping')
        except Exception as e:
            return f"error: {str(e)}"
        return "connected"

    def is_connected(self) -> bool:
        return self.database is not None


db_manager = DatabaseManager()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect on startup, close on shutdown."""
    logger.info("🚀 Starting up application...")
    if await db_manager.connect():
        await db_manager.create_indexes()
    app.state.db_manager = db_manager

    yield

    await db_manager.disconnect()


async def get_database() -> AsyncIOMotorDatabase:
    """FastAPI dependency yielding the database, or a 503 when it is unavailable."""
    if not db_manager.is_connected():
        raise StorageError(
            "Database connection not available. Please check your MongoDB connection.",
            status_code=503,
        )
    return db_manager.database


def get_database_manager() -> DatabaseManager:
    return db_manager
