import logging
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from shared.core.exceptions import BusinessError, ConflictError, DuplicateResourceError, LeasingError

logger = logging.getLogger(__name__)


@contextmanager
def unit_of_work(db: Session, action: str):
    """Commit everything done inside the block, or roll all of it back.

    Typed leasing errors propagate unchanged. A lost optimistic-version race
    becomes ConflictError, a constraint violation DuplicateResourceError, and
    anything else BusinessError wrapping the cause.
    """
    try:
        yield db
        db.commit()
    except LeasingError as e:
        db.rollback()
        logger.warning("%s rejected: %s", action, e.message)
        raise
    except StaleDataError as e:
        db.rollback()
        logger.warning("%s lost a concurrent update: %s", action, e)
        raise ConflictError(
            f"Could not {action}: the record was modified concurrently") from e
    except IntegrityError as e:
        db.rollback()
        logger.warning("%s violated a constraint: %s", action, e.orig)
        raise DuplicateResourceError(
            f"Could not {action}: a conflicting record already exists") from e
    except Exception as e:
        db.rollback()
        logger.exception("%s failed", action)
        raise BusinessError(f"Failed to {action}: {e}", cause=e) from e
