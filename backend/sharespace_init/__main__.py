"""
ShareSpace database initialization.

Creates the application user, the validated collections and the indexes
on the ShareSpace database. Safe to run on every deployment.

Usage:
    python -m sharespace_init

Environment Variables:
    MONGO_URI: MongoDB connection string (administrative privileges)
    DB_NAME: Target database (default: sharespace)
    APP_USERNAME: Application user name (default: sharespace_app)
    APP_PASSWORD: Application user password (change in production)
    STRICT: Fail when a resource already exists (default: false)
    LOG_LEVEL: Logging level (default: INFO)
"""
import asyncio
import logging
import sys

from sharespace_init.config import Settings, get_settings
from sharespace_init.core.errors import ProvisioningError
from sharespace_init.database.connections import close, connect
from sharespace_init.services.provisioner import AppCredentials, ProvisionConfig, ProvisionReport, provision

logger = logging.getLogger("sharespace_init")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


async def main(settings: Settings) -> ProvisionReport:
    """Connect, provision and disconnect."""
    client = await connect(settings)
    try:
        config = ProvisionConfig(
            client=client,
            db_name=settings.db_name,
            credentials=AppCredentials(
                username=settings.app_username,
                password=settings.app_password,
                database=settings.db_name,
            ),
            strict=settings.strict,
        )
        return await provision(config)
    finally:
        close(client)


def run() -> int:
    """Console entry point; returns the process exit status."""
    settings = get_settings()
    configure_logging(settings.log_level)

    logger.info("=" * 60)
    logger.info("Starting ShareSpace database initialization...")
    logger.info(f"Target database: {settings.db_name}")
    logger.info("=" * 60)

    try:
        report = asyncio.run(main(settings))
    except ProvisioningError as e:
        logger.error(f"Initialization failed: {e}")
        return 1

    logger.info("ShareSpace database initialization completed successfully!")
    logger.info(f"Collections: {', '.join(report.collections_created + report.collections_updated)}")
    logger.info(f"Indexes created: {len(report.indexes_created)}, already present: {len(report.indexes_existing)}")
    logger.info(f"Application user: {settings.app_username} ({'created' if report.user_created else 'updated'})")
    return 0


if __name__ == "__main__":
    sys.exit(run())
