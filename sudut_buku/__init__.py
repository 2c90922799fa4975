from flask import Flask, jsonify
from sqlalchemy.exc import SQLAlchemyError

from sudut_buku.config import Config, engine_options
from sudut_buku.db_setup import ensure_database
from sudut_buku.errors import PersistenceError
from sudut_buku.extensions import cors, db, migrate
from sudut_buku.utils.responses import json_error


def _cors_origins(raw):
    if isinstance(raw, (list, tuple)):
        return list(raw)
    origins = [o.strip() for o in str(raw or "").split(",") if o.strip()]
    return "*" if not origins or "*" in origins else origins


def create_app(config_object=Config, **overrides):
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.config.update(overrides)

    # derived from the final URI and timeout unless given explicitly
    if "SQLALCHEMY_ENGINE_OPTIONS" not in app.config:
        app.config["SQLALCHEMY_ENGINE_OPTIONS"] = engine_options(
            app.config["SQLALCHEMY_DATABASE_URI"], float(app.config["DB_CONNECT_TIMEOUT"])
        )
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # 1) db init, then connectivity check + SQLite tuning
    db.init_app(app)
    ensure_database(app)

    # 2) migrations (flask db upgrade), CORS for the browser frontend
    migrate.init_app(app, db)
    cors.init_app(app, origins=_cors_origins(app.config.get("CORS_ORIGINS", "*")))

    # 3) blueprints
    from sudut_buku.controllers.book_controller import book_bp
    from sudut_buku.controllers.loan_controller import loan_bp
    from sudut_buku.controllers.member_controller import member_bp
    from sudut_buku.controllers.search_controller import search_bp
    app.register_blueprint(book_bp)
    app.register_blueprint(member_bp)
    app.register_blueprint(loan_bp)
    app.register_blueprint(search_bp)

    @app.get("/health")
    def health():
        return jsonify({"ok": True})

    @app.errorhandler(SQLAlchemyError)
    def storage_error(e):
        db.session.rollback()
        app.logger.exception(f"[request] storage error: {e}")
        return json_error(PersistenceError())

    # overdue loan report
    from sudut_buku.tasks.scheduler import start_scheduler
    start_scheduler(app)

    return app
