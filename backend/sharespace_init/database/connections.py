"""
MongoDB connection management.
"""
import logging

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import ConnectionFailure

from sharespace_init.config import Settings
from sharespace_init.core.errors import ConnectivityError

logger = logging.getLogger("sharespace_init")


async def connect(settings: Settings) -> AsyncIOMotorClient:
    """
    Create a MongoDB client and check that the server answers.

    Raises:
        ConnectivityError: If `ping` fails (covers server selection timeouts)
    """
    client = AsyncIOMotorClient(
        settings.mongo_uri,
        serverSelectionTimeoutMS=settings.server_selection_timeout_ms,
    )
    try:
        await client.admin.command("ping")
    except ConnectionFailure as e:
        client.close()
        raise ConnectivityError(f"Cannot reach MongoDB: {e}") from e

    logger.info("Connected to MongoDB")
    return client


def close(client: AsyncIOMotorClient) -> None:
    """Close the MongoDB client."""
    client.close()
    logger.info("Disconnected")
