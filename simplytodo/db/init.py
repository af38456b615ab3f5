"""Initialize database tables."""
import logging
from typing import Optional

from sqlalchemy.engine import Engine
from sqlmodel import SQLModel

# Imported for their side effect of registering tables on SQLModel.metadata
from simplytodo.models.recurring_rule import RecurringRule, RecurringRuleInstance  # noqa: F401
from simplytodo.models.task import Task  # noqa: F401

logger = logging.getLogger(__name__)


def init_db(db_engine: Optional[Engine] = None) -> None:
    """Create all tables in the database."""
    if db_engine is None:
        from simplytodo.db.config import engine as db_engine

    logger.info("[DB INIT] Creating all tables...")
    SQLModel.metadata.create_all(db_engine)
    logger.info("[DB INIT] Tables created successfully.")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
