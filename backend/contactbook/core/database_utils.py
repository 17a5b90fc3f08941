"""
Database utility functions for schema setup, seeding and connectivity checks
"""

from sqlalchemy import text
from typing import Optional
import logging

from contactbook.core.database import Database
from contactbook.models.base import Base
from contactbook.services.license_keys import ensure_license_key

logger = logging.getLogger(__name__)


def create_all_tables(database: Database) -> None:
    """
    Create all database tables
    """
    try:
        Base.metadata.create_all(bind=database.engine)
        logger.info("All database tables created successfully")
    except Exception as e:
        logger.error(f"Error creating database tables: {e}")
        raise


def check_database_connection(database: Database) -> bool:
    """
    Check if database connection is working
    """
    try:
        with database.session_scope() as db:
            db.execute(text("SELECT 1"))
        logger.info("Database connection successful")
        return True
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False


def seed_license_key(database: Database, key_value: Optional[str]) -> bool:
    """
    Make sure the demo key exists so a fresh install can register its first user
    """
    if not key_value:
        return False
    with database.session_scope() as db:
        inserted = ensure_license_key(db, key_value)
    if inserted:
        logger.info(f"Seeded license key {key_value}")
    return inserted
