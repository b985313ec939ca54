import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


def save(db: Session, instance: Optional[object] = None) -> None:
    """Add ``instance`` (if given), commit, and refresh it.

    Rolls back and re-raises on database errors so callers can translate them.
    """
    try:
        if instance is not None:
            db.add(instance)
        db.commit()
        if instance is not None:
            db.refresh(instance)
    except SQLAlchemyError as e:
        logger.error(e, exc_info=True)
        try:
            db.rollback()
        except SQLAlchemyError as ex:
            logger.error(ex, exc_info=True)
        raise


def remove(db: Session, instance: object) -> None:
    try:
        db.delete(instance)
        db.commit()
    except SQLAlchemyError as e:
        logger.error(e, exc_info=True)
        try:
            db.rollback()
        except SQLAlchemyError as ex:
            logger.error(ex, exc_info=True)
        raise
