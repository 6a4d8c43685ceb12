"""MongoDB async connection handling.

The client is created explicitly by the app lifespan and passed down;
there is no module-level singleton. Unique indexes here are the final
arbiter for label uniqueness and per-pair link / exclusion records.
"""
import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

logger = logging.getLogger(__name__)


def connect(settings) -> AsyncIOMotorClient:
    """Open a motor client for settings.MONGO_URL. Caller owns close_db()."""
    client = AsyncIOMotorClient(settings.MONGO_URL, tz_aware=True)
    logger.info("MongoDB client opened: db=%s", settings.DB_NAME)
    return client


def get_database(client: AsyncIOMotorClient, settings) -> AsyncIOMotorDatabase:
    return client[settings.DB_NAME]


async def init_indexes(db: AsyncIOMotorDatabase) -> None:
    """Create required indexes. Idempotent."""
    # Intents: unique id and globally unique label
    await db.intents.create_index("intent_id", unique=True)
    await db.intents.create_index("label", unique=True)
    await db.intents.create_index("is_default")
    await db.intents.create_index("created_at")

    # Links: one record per (scope, intent) pair
    await db.intent_links.create_index(
        [("scope_kind", 1), ("scope_id", 1), ("intent_id", 1)], unique=True
    )
    await db.intent_links.create_index("intent_id")

    # Exclusions: one record per (scope, intent) pair
    await db.intent_exclusions.create_index(
        [("scope_kind", 1), ("scope_id", 1), ("intent_id", 1)], unique=True
    )
    await db.intent_exclusions.create_index("intent_id")

    logger.info("MongoDB indexes initialized")


async def close_db(client: AsyncIOMotorClient) -> None:
    client.close()
    logger.info("MongoDB connection closed")
