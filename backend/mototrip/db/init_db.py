"""
Database initialization script.
"""
import logging

from mototrip.core.config import settings
from mototrip.core.logging import init_logging
from mototrip.db.session import init_db

logger = logging.getLogger(__name__)

if __name__ == "__main__":
    init_logging(level=settings.LOG_LEVEL, json_output=settings.LOG_JSON)
    logger.info("Initializing database...")
    init_db()
    logger.info("Database initialized successfully!")
