import os

from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


def engine_options(uri: str, timeout: float) -> dict:
    """
    Driver-level connect timeout. sqlite3 and pyodbc call it `timeout`,
    the MySQL/PostgreSQL drivers `connect_timeout`.
    """
    if uri.startswith("sqlite") or "+pyodbc" in uri:
        connect_args = {"timeout": timeout}
        if uri.startswith("sqlite"):
            connect_args["check_same_thread"] = False
    else:
        connect_args = {"connect_timeout": int(timeout)}
    return {"pool_pre_ping": True, "connect_args": connect_args}


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "super-secret-key")

    SQLALCHEMY_DATABASE_URI = os.getenv(
        "SQLALCHEMY_DATABASE_URI",
        os.getenv("DATABASE_URL", "sqlite:///sudut_buku.db"),
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    DB_CONNECT_TIMEOUT = float(os.getenv("DB_CONNECT_TIMEOUT", "5"))
    DB_AUTO_CREATE = _flag("DB_AUTO_CREATE", "1")

    # 0 = one worker per CPU
    SEARCH_MAX_WORKERS = int(os.getenv("SEARCH_MAX_WORKERS", "0"))

    SCHEDULER_ENABLED = _flag("SCHEDULER_ENABLED", "1")
    OVERDUE_CHECK_MINUTES = int(os.getenv("OVERDUE_CHECK_MINUTES", "60"))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # comma separated, "*" = any origin
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")


class TestConfig(Config):
    TESTING = True
    SCHEDULER_ENABLED = False
    SEARCH_MAX_WORKERS = 4
