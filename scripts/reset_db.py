#!/usr/bin/env python3
"""
Database reset script
Drops every table and recreates the schema for the configured database
"""

import logging

from app.config.database import Base, engine
from app.config.settings import settings
from app.shared.database import models  # noqa: F401  registers tables on Base

logger = logging.getLogger("reset_db")

def reset_database():
    """Drop all tables (details first) and run the migrations again"""
    url = engine.url.render_as_string(hide_password=True)
    logger.info(f"Connecting to database {url} schema={settings.database_schema or 'default'}")

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    logger.info("Database reset completed")

if __name__ == "__main__":
    logging.basicConfig(level=settings.log_level.upper())
    reset_database()
