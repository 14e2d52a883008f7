"""Single-statement transactional writes."""
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql.expression import Executable

LOG = logging.getLogger(__name__)


def run_write(session: Session, statement: Executable) -> int:
    """Execute one insert/update/delete and commit. Returns the affected row count.

    On failure the transaction is rolled back and the original exception is re-raised.
    """
    try:
        result = session.execute(statement)
        session.commit()
    except SQLAlchemyError:
        LOG.debug("Write aborted, rolling back")
        session.rollback()
        raise
    return result.rowcount
