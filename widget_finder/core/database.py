"""
DatabaseConnection — Single-connection lifecycle for the catalog DB.

Key design decisions:
- NullPool: every operation opens and closes its own connection.
  Nothing is shared between calls, so no locking is needed.
- Bound parameters only: callers pass ``:name`` placeholders plus a
  params dict, caller data never reaches the SQL text.
- Scoped acquisition: use ``with DatabaseConnection(...)`` or
  ``open_connection(...)``; the connection is closed when the block
  exits, on success or failure.

Usage::

    with open_connection(settings.db_credentials) as conn:
        rows = conn.execute("SELECT id, tag FROM tag WHERE tag = :tag", {"tag": "tag5"})
"""

from __future__ import annotations

import logging
import warnings
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Union

from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Connection, Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import NullPool

from widget_finder.core.exceptions import (
    ConnectionStateError,
    DatabaseConnectionError,
    QueryError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DatabaseCredentials:
    """Host / user / password / database for the catalog DB."""
    host: str
    user: str
    password: str = field(repr=False)
    database: str
    port: int = 3306

    def url(self, driver: str = "pymysql") -> URL:
        """Build a SQLAlchemy MySQL URL (password is escaped, never rendered)."""
        return URL.create(
            f"mysql+{driver}",
            username=self.user,
            password=self.password or None,
            host=self.host,
            port=self.port,
            database=self.database,
        )


class DatabaseConnection:
    """
    Owns exactly one DBAPI connection: ``open`` → ``execute``* → ``close``.

    Either *credentials* or a full *url* must be given; *url* wins when
    both are present (used for alternative drivers and for tests).
    """

    def __init__(
        self,
        credentials: Optional[DatabaseCredentials] = None,
        *,
        url: Union[str, URL, None] = None,
        connect_timeout: Optional[int] = None,
        query_timeout: Optional[int] = None,
    ) -> None:
        if url is not None:
            self._url = make_url(url)
        elif credentials is not None:
            self._url = credentials.url()
        else:
            raise ValueError("credentials or url is required")

        self.connect_timeout = connect_timeout
        self.query_timeout = query_timeout

        self._engine: Optional[Engine] = None
        self._conn: Optional[Connection] = None

    # ─────────────────────────────────────────────────────────────
    #  LIFECYCLE
    # ─────────────────────────────────────────────────────────────

    @property
    def is_open(self) -> bool:
        return self._conn is not None and not self._conn.closed

    @property
    def safe_url(self) -> str:
        """URL for log lines, password masked."""
        return self._url.render_as_string(hide_password=True)

    def open(self) -> None:
        """
        Establish the connection.

        Driver warnings are silenced while connecting; any failure is
        reported as a single :class:`DatabaseConnectionError` whose
        message carries no credentials.
        """
        if self.is_open:
            return

        engine: Optional[Engine] = None
        try:
            # Unknown dialects and missing driver modules fail here
            engine = create_engine(
                self._url,
                poolclass=NullPool,
                connect_args=self._connect_args(),
            )
            with warnings.catch_warnings():
                warnings.simplefilter("ignore")
                conn = engine.connect()
        except (SQLAlchemyError, ImportError) as exc:
            if engine is not None:
                engine.dispose()
            logger.error(f"[Database] Connection to {self.safe_url} failed: {exc}")
            raise DatabaseConnectionError(
                "Could not connect to the catalog database"
            ) from exc

        self._engine = engine
        self._conn = conn
        logger.debug(f"[Database] Connected to {self.safe_url}")

    def close(self) -> None:
        """Release the connection.  Safe to call any number of times."""
        conn, engine = self._conn, self._engine
        self._conn = None
        self._engine = None

        if conn is not None:
            conn.close()
        if engine is not None:
            engine.dispose()
            logger.debug(f"[Database] Closed connection to {self.safe_url}")

    def __enter__(self) -> "DatabaseConnection":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ─────────────────────────────────────────────────────────────
    #  EXECUTION
    # ─────────────────────────────────────────────────────────────

    def execute(
        self,
        query: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Run *query* with named bind *params* and return all rows as dicts.

        Raises:
            ConnectionStateError: the connection is not open.
            QueryError:           the statement failed (syntax,
                                  constraint, lost connection ...).
        """
        if not self.is_open:
            raise ConnectionStateError("No open database connection")

        try:
            result = self._conn.execute(text(query), dict(params or {}))
            if not result.returns_rows:
                return []
            return [dict(row) for row in result.mappings().all()]
        except (SQLAlchemyError, OverflowError) as exc:
            # Drivers raise OverflowError for binds outside the column range
            logger.error(f"[Database] Query failed on {self.safe_url}: {exc}")
            raise QueryError("Error executing query") from exc

    # ─────────────────────────────────────────────────────────────
    #  DRIVER OPTIONS
    # ─────────────────────────────────────────────────────────────

    def _connect_args(self) -> Dict[str, Any]:
        """pymysql options; other backends get none."""
        if self._url.get_backend_name() != "mysql":
            return {}

        args: Dict[str, Any] = {"charset": "utf8mb4"}
        if self.connect_timeout:
            args["connect_timeout"] = self.connect_timeout
        if self.query_timeout:
            args["read_timeout"] = self.query_timeout
            args["write_timeout"] = self.query_timeout
        return args


@contextmanager
def open_connection(
    credentials: Optional[DatabaseCredentials] = None,
    *,
    url: Union[str, URL, None] = None,
    connect_timeout: Optional[int] = None,
    query_timeout: Optional[int] = None,
) -> Iterator[DatabaseConnection]:
    """Open a connection for the duration of a ``with`` block."""
    connection = DatabaseConnection(
        credentials,
        url=url,
        connect_timeout=connect_timeout,
        query_timeout=query_timeout,
    )
    connection.open()
    try:
        yield connection
    finally:
        connection.close()
