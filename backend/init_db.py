from sqlalchemy import inspect
from sqlalchemy.engine import Engine
import logging

from database import Base
import models  # noqa: F401  (registers tables on Base.metadata)

logger = logging.getLogger(__name__)


def init_database(engine: Engine) -> None:
    """
    Create any missing tables.

    Existing tables are left as they are; there is no migration step.
    """
    existing = set(inspect(engine).get_table_names())
    Base.metadata.create_all(bind=engine)
    created = sorted(set(Base.metadata.tables) - existing)
    if created:
        logger.info(f"Created tables: {', '.join(created)}")
    else:
        logger.info("Database schema up to date")
