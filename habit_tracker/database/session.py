from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker

from habit_tracker.config import Settings


def build_sqlalchemy_database_url_from_settings(_settings: Settings) -> str:
    """
    Returns the database URL from the settings, creating the folder of a
    SQLite database file if it does not exist yet.

    Parameters:
        _settings (Settings): An instance of the Settings class.

    Returns:
        str: The SQLAlchemy URL.
    """
    url = make_url(_settings.DATABASE_URL)
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    return _settings.DATABASE_URL


def _enable_sqlite_pragmas(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine(database_url: str, echo=False) -> Engine:
    """
    Creates and returns a SQLAlchemy Engine object for connecting to a database.

    SQLite connections are opened in WAL mode with foreign keys enforced, so
    deleting a habit cascades to its check-ins.

    Parameters:
        database_url (str): The URL of the database to connect to.
        echo (bool): Whether or not to enable echoing of SQL statements.
        Defaults to False.

    Returns:
        Engine: A SQLAlchemy Engine object representing the database connection.
    """
    engine = create_engine(database_url, echo=echo, future=True)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_pragmas)
    return engine


def get_local_session(engine: Engine) -> sessionmaker:
    """
    Create and return a sessionmaker bound to ``engine``.

    Objects stay readable after commit so the store can hand them back to
    callers once the session is closed.
    """
    return sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        future=True,
    )
