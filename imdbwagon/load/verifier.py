"""Smoke test that the primary load produced queryable tables."""
from imdbwagon.database.database_manager import DatabaseManager
from imdbwagon.logging_config import get_logger

logger = get_logger(__name__)

VERIFICATION_TABLE = "title"


class PostLoadVerifier:
    """Checks a single well-known table; this is not an integrity check."""

    def __init__(self, table_name: str = VERIFICATION_TABLE) -> None:
        self.table_name = table_name

    def verify(self, db_manager: DatabaseManager) -> bool:
        if db_manager.check_table(self.table_name):
            logger.info(f"Verified table '{self.table_name}' is queryable")
            return True

        logger.warning(f"Table '{self.table_name}' is missing after load")
        return False
