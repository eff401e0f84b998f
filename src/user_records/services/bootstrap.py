"""
Startup schema bootstrap
"""

import logging

from user_records.database import schema
from user_records.database.connection import PersistenceError, PersistenceGateway
from user_records.utils.app_logger import AppLogger

logger = logging.getLogger(__name__)


async def ensure_users_table(gateway: PersistenceGateway) -> None:
    """Create the users table if it does not exist; never alters an existing table"""
    await gateway.execute(schema.CREATE_USERS_TABLE)


async def bootstrap_database(gateway: PersistenceGateway, app_logger: AppLogger, strict: bool = False) -> bool:
    """
    Ensure the schema exists before the service accepts traffic

    Args:
        gateway: Persistence gateway used by the service
        app_logger: Application logger for the outcome entry
        strict: Re-raise the failure instead of starting without a schema

    Returns:
        True when the table is in place, False when the failure was tolerated
    """
    try:
        await ensure_users_table(gateway)
    except PersistenceError as e:
        app_logger.error("Erreur initialisation DB", error=e)
        if strict:
            raise
        logger.warning("Database bootstrap failed; continuing startup")
        return False

    app_logger.info("Base de données initialisée")
    return True
