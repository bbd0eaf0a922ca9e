"""Database connection management for panelkit."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal

from sqlalchemy import Engine, create_engine, event, text
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from panelkit.exceptions import ConnectionError

if TYPE_CHECKING:
    from sqlalchemy.engine.url import URL

# Driver for URLs that name only the dialect, matching the optional extras
DEFAULT_DRIVERS = {
    "postgresql": "psycopg",
    "mysql": "pymysql",
}


def normalize_url(url: str) -> str:
    """Add the default driver to ``dialect://`` URLs; leave others alone.

    >>> normalize_url("postgresql://localhost/shop")
    'postgresql+psycopg://localhost/shop'
    """
    scheme, sep, rest = url.partition("://")
    if sep and scheme in DEFAULT_DRIVERS:
        return f"{scheme}+{DEFAULT_DRIVERS[scheme]}://{rest}"
    return url


def _is_sqlite_memory(url: str) -> bool:
    return url.startswith("sqlite") and (url.endswith(":memory:") or url.rstrip("/") == "sqlite:")


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


class DatabaseConnection:
    """Manages one SQLAlchemy engine.

    Used both for panelkit's own tables (configuration documents, accounts)
    and for the data source that gets introspected.
    """

    SUPPORTED_DIALECTS = ("postgresql", "sqlite", "mysql")

    def __init__(self, url: str | URL, echo: bool = False) -> None:
        """
        Args:
            url: ``postgresql://...``, ``mysql://...`` or ``sqlite:///path`` (``sqlite:///:memory:``
                for a throwaway database)
            echo: Echo SQL statements
        """
        if not isinstance(url, str):
            url = url.render_as_string(hide_password=False)
        self._url = normalize_url(url)

        self._echo = echo
        self._engine: Engine | None = None
        self._session_factory: sessionmaker[Session] | None = None

    @property
    def url(self) -> str:
        """Normalized connection URL."""
        return self._url

    @property
    def engine(self) -> Engine:
        """Get or create the SQLAlchemy engine."""
        if self._engine is None:
            try:
                kwargs: dict[str, Any] = {"echo": self._echo, "pool_pre_ping": True}
                if self._url.startswith("sqlite"):
                    kwargs["connect_args"] = {"check_same_thread": False}
                    # One shared connection, otherwise every thread sees its own empty database
                    if _is_sqlite_memory(self._url):
                        kwargs["poolclass"] = StaticPool

                engine = create_engine(self._url, **kwargs)

                if engine.dialect.name not in self.SUPPORTED_DIALECTS:
                    raise ConnectionError(
                        f"Unsupported database dialect: {engine.dialect.name}. "
                        f"Supported: {', '.join(self.SUPPORTED_DIALECTS)}"
                    )

                if engine.dialect.name == "sqlite":
                    event.listen(engine, "connect", _enable_sqlite_foreign_keys)

                self._engine = engine
            except Exception as e:
                if isinstance(e, ConnectionError):
                    raise
                raise ConnectionError(f"Failed to create database engine: {e}") from e
        return self._engine

    @property
    def dialect(self) -> Literal["postgresql", "sqlite", "mysql"]:
        """Get the database dialect name."""
        return self.engine.dialect.name  # type: ignore[return-value]

    @property
    def is_sqlite(self) -> bool:
        """Check if connected to SQLite."""
        return self.dialect == "sqlite"

    @property
    def session_factory(self) -> sessionmaker[Session]:
        """Get the session factory."""
        if self._session_factory is None:
            self._session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)
        return self._session_factory

    def get_session(self) -> Session:
        """Create a new database session."""
        return self.session_factory()

    def test_connection(self) -> bool:
        """Test if the database connection works.

        Raises:
            ConnectionError: If connection test fails
        """
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            raise ConnectionError(f"Database connection test failed: {e}") from e

    def close(self) -> None:
        """Close the database connection and dispose of the engine."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._session_factory = None

    def __enter__(self) -> DatabaseConnection:
        self.test_connection()
        return self

    def __exit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        self.close()
