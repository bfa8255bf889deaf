"""
Create the database schema.

Run with ``python -m fairway.db.init_db``.
"""
import logging
from fairway.core.config import settings
from fairway.db.session import init_db

if __name__ == "__main__":
    logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    init_db()
