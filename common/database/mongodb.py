"""
MongoDB connection manager.

Opens a Motor client, registers Beanie document models (which creates
their collections and indexes) and hands the raw database to services.
"""

import logging
from typing import List, Optional, Type

from beanie import Document, init_beanie
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

logger = logging.getLogger(__name__)


def _mask_uri(uri: str) -> str:
    return uri.split("@")[-1] if "@" in uri else uri


class MongoDB:
    """Owns one Motor client for the lifetime of the app."""

    def __init__(self):
        self._client: Optional[AsyncIOMotorClient] = None
        self._database: Optional[AsyncIOMotorDatabase] = None

    async def connect(
        self,
        uri: str,
        database_name: str,
        document_models: List[Type[Document]],
    ) -> None:
        """
        Connect and initialize Beanie.

        Args:
            uri: MongoDB connection string
            database_name: Database to use
            document_models: Beanie documents to register
        """
        logger.info(f"Connecting to MongoDB at {_mask_uri(uri)} (database {database_name})")

        client = AsyncIOMotorClient(uri)
        try:
            await init_beanie(
                database=client[database_name],
                document_models=document_models,
            )
        except Exception as e:
            logger.error(f"MongoDB initialization failed: {e}")
            client.close()
            raise

        self._client = client
        self._database = client[database_name]
        logger.info(f"Registered models: {', '.join(m.__name__ for m in document_models)}")

    async def disconnect(self) -> None:
        if self._client is None:
            return
        logger.info("Closing MongoDB connection")
        self._client.close()
        self._client = None
        self._database = None

    @property
    def is_connected(self) -> bool:
        return self._database is not None

    @property
    def db(self) -> AsyncIOMotorDatabase:
        """The Motor database; raises RuntimeError before connect()."""
        if self._database is None:
            raise RuntimeError("Database not connected")
        return self._database
