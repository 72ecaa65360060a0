"""Create the analytics tables."""
from parking_analytics.infrastructure.persistence.database import init_db
from parking_analytics.shared.utils import logger

if __name__ == "__main__":
    logger.info("Initializing parking analytics database...")
    init_db()
    logger.info("Database initialization complete!")
