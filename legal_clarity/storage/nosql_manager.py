import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient
from beanie import init_beanie

from ..config import MONGODB_URL, MONGODB_DATABASE
from .nosql_models import AnalysisRecordDocument

logger = logging.getLogger(__name__)


class NoSQLManager:
    """
    Manages the MongoDB connection. ``mongodb_available`` stays False when the
    server cannot be reached so callers can fall back to in-memory storage.
    """

    def __init__(self, mongodb_url: Optional[str] = None, database_name: Optional[str] = None):
        self.mongodb_url = mongodb_url or MONGODB_URL
        self.database_name = database_name or MONGODB_DATABASE
        self.mongodb_client = None
        self.mongodb_available = False
        self.database = None

    async def initialize_mongodb(self):
        """Initialize MongoDB connection"""
        try:
            self.mongodb_client = AsyncIOMotorClient(
                self.mongodb_url,
                serverSelectionTimeoutMS=5000,  # 5 second timeout
                connectTimeoutMS=10000,         # 10 second connection timeout
                tz_aware=True,
            )

            # Test connection
            await self.mongodb_client.admin.command('ping')

            self.database = self.mongodb_client[self.database_name]
            await init_beanie(database=self.database, document_models=[AnalysisRecordDocument])

            self.mongodb_available = True
            logger.info(f"✅ MongoDB connected successfully to {self.database_name}")

        except Exception as e:
            logger.warning(f"⚠️ MongoDB not available: {e}")
            logger.info("Falling back to in-memory storage for development")
            self.mongodb_available = False

    async def initialize(self):
        await self.initialize_mongodb()
        return {
            'mongodb_available': self.mongodb_available,
            'fallback_mode': not self.mongodb_available
        }

    async def close_connections(self):
        """Close all database connections"""
        if self.mongodb_client:
            self.mongodb_client.close()
            self.mongodb_client = None
        self.mongodb_available = False
