# shopkeep/core/logging_config.py
"""
Centralized logging configuration for the application.

Keeps the shopkeep loggers at the configured level and turns down the
database and server libraries that are chatty at INFO.
"""

import logging

from shopkeep.core.config import get_settings


def configure_logging():
    """
    Configure logging for the application.

    - App code: LOG_LEVEL from settings (INFO by default)
    - Database drivers and SQLAlchemy engine: WARNING only
    - uvicorn access log: WARNING only
    """
    log_level = get_settings().LOG_LEVEL.upper()
    level = getattr(logging, log_level, logging.INFO)

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler()]
    )

    # Quiet database loggers
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("asyncpg").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("alembic").setLevel(logging.WARNING)

    # Quiet server and hashing libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("bcrypt").setLevel(logging.WARNING)

    logging.getLogger("shopkeep").setLevel(level)
    logging.getLogger("__main__").setLevel(level)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging configured at level: {log_level}")
