from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError

from sudut_buku.errors import DatabaseUnavailableError
from sudut_buku.extensions import db
from sudut_buku.models import book, loan, member  # noqa: F401 tables for create_all


def configure_sqlite(engine):
    """
    SQLite specifics:
    - foreign keys are off per connection by default.
    - transactions start with BEGIN IMMEDIATE so the write lock is taken up
      front. Two borrowers of the last copy then queue on the lock (busy
      timeout = DB_CONNECT_TIMEOUT) instead of both reading available=1.
    """
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_conn, _record):
        # let SQLAlchemy emit BEGIN itself
        dbapi_conn.isolation_level = None
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON;")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def ensure_database(app):
    """
    Called once by the app factory after db.init_app.
    Unreachable database is fatal: log and raise DatabaseUnavailableError.
    """
    with app.app_context():
        engine = db.engine
        if engine.dialect.name == "sqlite":
            configure_sqlite(engine)

        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            if app.config.get("DB_AUTO_CREATE", True):
                db.create_all()
            app.logger.info(f"[db_setup] database ready ({engine.dialect.name}).")
        except SQLAlchemyError as e:
            app.logger.error(f"[db_setup] database unreachable: {e}")
            raise DatabaseUnavailableError(f"Database unreachable: {e}") from e
