# repositories/base.py
import logging
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger("dataset_service.repositories")

class BaseRepository:
    def __init__(self, db: Session):
        self.db = db

    def _commit(self, *instances):
        """Commit the session, refreshing `instances`; roll back and re-raise on failure."""
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error: {e}")
            raise
        for instance in instances:
            self.db.refresh(instance)
