"""Migration script to add the regeneration lock column to trips.

Adds:
- regen_lock_until: nullable timestamp; NULL or past means the trip is
  unlocked, a future value means a regeneration owns it
"""

from loguru import logger
from sqlalchemy import inspect, text

from app.db.session import get_engine


def migrate_add_trip_regen_lock() -> None:
    """Add trips.regen_lock_until if it doesn't exist."""
    engine = get_engine()
    inspector = inspect(engine)

    if not inspector.has_table("trips"):
        logger.info("trips table does not exist yet. Skipping migration.")
        return

    columns = {column["name"] for column in inspector.get_columns("trips")}
    if "regen_lock_until" in columns:
        logger.debug("regen_lock_until column already exists.")
        return

    column_type = "TIMESTAMP WITH TIME ZONE"
    if engine.dialect.name == "sqlite":
        column_type = "DATETIME"

    logger.info("Adding regen_lock_until column to trips table...")
    with engine.begin() as conn:
        conn.execute(text(f"ALTER TABLE trips ADD COLUMN regen_lock_until {column_type}"))
    logger.info("Migration complete: added trips.regen_lock_until.")


if __name__ == "__main__":
    migrate_add_trip_regen_lock()
