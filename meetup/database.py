"""
Database connection and Beanie ODM initialization.

Beanie is an async ODM for MongoDB built on Motor and Pydantic.
The client is passed in rather than held in module state so tests can hand
over an in-memory fake.
"""

import logging
from typing import List, Type

from beanie import Document, init_beanie
from motor.motor_asyncio import AsyncIOMotorClient

from meetup.config import Settings
from meetup.models.event import Event
from meetup.models.user import User

logger = logging.getLogger(__name__)

# Document models that Beanie will manage (collections + indexes)
DOCUMENT_MODELS: List[Type[Document]] = [User, Event]


def create_mongo_client(settings: Settings) -> AsyncIOMotorClient:
    """Motor client owning the process-wide connection pool."""
    return AsyncIOMotorClient(settings.mongodb_url)


async def connect_to_mongo(client, database_name: str) -> None:
    """
    Initialize Beanie against client[database_name].
    Called once at application startup.
    """
    await init_beanie(database=client[database_name], document_models=DOCUMENT_MODELS)
    logger.info("MongoDB connection established; Beanie initialized (db=%s).", database_name)


async def close_mongo_connection(client) -> None:
    """Close the connection pool on application shutdown."""
    logger.info("Closing MongoDB connection.")
    client.close()
