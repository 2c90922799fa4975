from contextlib import contextmanager

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from sudut_buku.errors import LibraryError, PersistenceError


@contextmanager
def atomic(session, action: str):
    """
    One unit of work: commit when the block finishes, roll back on any error.

    Business rejections (LibraryError) are re-raised as they are. Storage
    errors are logged and replaced by a generic PersistenceError so callers
    never see driver exceptions.
    """
    try:
        yield session
        session.commit()
    except LibraryError:
        session.rollback()
        raise
    except SQLAlchemyError as e:
        session.rollback()
        current_app.logger.exception(f"[{action}] storage error, rolled back: {e}")
        raise PersistenceError() from e
    except Exception:
        session.rollback()
        raise
