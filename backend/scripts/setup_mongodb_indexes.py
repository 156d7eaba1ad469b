"""Setup MongoDB indexes for the activity collection.

Creates the userId index used by find_by_user_id and lists the indexes
of the collection for verification.

Usage:
    uv run python scripts/setup_mongodb_indexes.py

Environment Variables:
    MONGODB_URI: MongoDB connection string (default: mongodb://localhost:27017/fitnessactivity)
    MONGODB_DATABASE: Database name (default: database in the URI)
"""

import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from domain.activity.exceptions import ActivityDomainError
from infrastructure.config import get_mongodb_database, get_mongodb_uri
from infrastructure.persistence.mongodb import (
    MongoActivityRepository,
    MongoConnectionProvider,
    MongoQueryContext,
)

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)
    logging.debug(f"Loaded environment from: {env_path}")


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def list_existing_indexes(context: MongoQueryContext, collection_name: str) -> None:
    """List existing indexes of a collection."""
    indexes = await context.collection(collection_name).list_indexes().to_list(length=None)

    logger.info(f"{context.database_name}.{collection_name}:")
    for idx in indexes:
        name = idx.get("name", "unknown")
        keys = idx.get("key", {})
        unique = " (unique)" if idx.get("unique", False) else ""
        keys_str = ", ".join(f"{k}:{v}" for k, v in keys.items())
        logger.info(f"  • {name}: [{keys_str}]{unique}")


async def setup_all_indexes() -> None:
    """Create the activity indexes on the configured database."""
    client = MongoConnectionProvider.create_client(get_mongodb_uri())
    context = MongoConnectionProvider.create_query_context(client, get_mongodb_database())
    logger.info(f"Connecting to MongoDB: {context.database_name}")

    try:
        await client.admin.command("ping")
        logger.info("✓ Connected to MongoDB successfully")

        repository = MongoActivityRepository(context)
        await repository.ensure_indexes()
        logger.info("✅ All indexes created successfully!")

        await list_existing_indexes(context, repository.collection_name)
    finally:
        client.close()
        logger.info("✓ MongoDB connection closed")


def main() -> None:
    """Main entry point."""
    logger.info("=" * 60)
    logger.info("MongoDB Index Setup for Activity Backend")
    logger.info("=" * 60)

    try:
        asyncio.run(setup_all_indexes())
    except KeyboardInterrupt:
        logger.info("⚠️  Interrupted by user")
        sys.exit(130)
    except ActivityDomainError as e:
        logger.error(f"❌ Error setting up indexes: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"❌ Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
