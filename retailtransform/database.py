"""
Database schema and connection management.

Uses SQLAlchemy against the retail PostgreSQL store. SQLite files with the
same schema are supported for local runs and tests.
"""

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from sqlalchemy import Column, ForeignKey, Integer, String, Text, create_engine, event, text
from sqlalchemy.engine import URL, Engine
from sqlalchemy.exc import ArgumentError, DBAPIError, InterfaceError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .config import DatabaseConfig
from .errors import ConfigError, StoreConnectivityError, StoreQueryError

Base = declarative_base()


class Product(Base):
    """Product model."""

    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    product_guid = Column(String, nullable=False)  # stable id shared with other systems
    name = Column(String, nullable=False)
    short_description = Column(Text, nullable=True)
    eslite_sn = Column(String, nullable=True)  # not exported


class Character(Base):
    """Person or organisation credited on products (authors, translators...)."""

    __tablename__ = "characters"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)


class CharacterProduct(Base):
    """Association between a product and a character, labelled with a role."""

    __tablename__ = "character_products"

    product_id = Column(Integer, ForeignKey("products.id"), primary_key=True)
    character_id = Column(Integer, ForeignKey("characters.id"), primary_key=True)
    # Column name is the store's own spelling.
    character_type = Column("charter_type", String, primary_key=True)


def _enable_case_sensitive_like(dbapi_connection, connection_record):
    # SQLite LIKE ignores ASCII case by default; PostgreSQL LIKE does not.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA case_sensitive_like = ON")
    cursor.close()


def make_engine(url) -> Engine:
    """
    Create an engine whose LIKE semantics match PostgreSQL.

    Args:
        url: SQLAlchemy URL or URL string
    """
    engine = create_engine(url)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_case_sensitive_like)
    return engine


def read_only_url(url: URL) -> URL:
    """
    Return a URL that opens a SQLite file read-only.

    A missing file then fails to open instead of being created. Other
    backends, in-memory databases and URI-style paths are returned unchanged.
    """
    if url.get_backend_name() != "sqlite":
        return url
    database = url.database
    if not database or database == ":memory:" or database.startswith("file:"):
        return url
    return url.set(
        database=f"file:{database}",
        query={**url.query, "mode": "ro", "uri": "true"},
    )


class FileSession(Session):
    """Session that owns its engine and disposes it on close."""

    def close(self) -> None:
        super().close()
        self.bind.dispose()


def init_database(db_path: Path) -> None:
    """
    Initialize a SQLite database and create tables.

    Args:
        db_path: Path to SQLite database file
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = make_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)
    engine.dispose()


def get_session(db_path: Path) -> Session:
    """
    Get a session on a SQLite database file.

    Closing the session also disposes its engine.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLAlchemy session
    """
    engine = make_engine(f"sqlite:///{db_path}")
    Session = sessionmaker(bind=engine, class_=FileSession)
    return Session()


@contextmanager
def translate_store_errors(operation: str) -> Iterator[None]:
    """
    Re-raise driver errors as StoreConnectivityError or StoreQueryError.

    Args:
        operation: Short description used in the error message
    """
    try:
        yield
    except DBAPIError as e:
        if e.connection_invalidated or isinstance(e, InterfaceError):
            raise StoreConnectivityError(
                f"{operation} failed, connection lost: {e.orig}"
            ) from e
        raise StoreQueryError(f"{operation} failed: {e.orig}") from e


@contextmanager
def open_store(config: DatabaseConfig) -> Iterator[Session]:
    """
    Open a session on the configured store and verify it answers.

    SQLite files are opened read-only. The session is closed and the
    engine disposed on exit, whether the body succeeded or raised.

    Args:
        config: Connection settings

    Yields:
        An open SQLAlchemy session

    Raises:
        ConfigError: If the URL or its driver is unusable
        StoreConnectivityError: If the ping fails
    """
    try:
        engine = make_engine(read_only_url(config.url()))
    except (ArgumentError, ImportError) as e:
        raise ConfigError(f"Cannot create database engine: {e}") from e

    session = sessionmaker(bind=engine, class_=FileSession)()
    try:
        try:
            session.execute(text("SELECT 1"))
        except DBAPIError as e:
            raise StoreConnectivityError(f"Cannot reach database: {e.orig}") from e
        yield session
    finally:
        session.close()
