"""Async SQLAlchemy engine construction for the two storage backends."""

import ssl
from typing import Any, Dict, Tuple
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlmodel import SQLModel

from app.config import Settings


def _normalize_db_url(url: str) -> str:
    """Ensure an async-capable PostgreSQL driver is selected when using Postgres.

    If the URL is plain "postgresql://..." or the alias "postgres://...",
    switch to the asyncpg driver via "postgresql+asyncpg://...".
    """
    try:
        u = make_url(url)
        driver = (u.drivername or "").lower()
        # If an explicit driver is present (e.g., postgresql+psycopg), respect it.
        if "+" in driver:
            return u.render_as_string(hide_password=False)
        if driver in ("postgres", "postgresql"):
            u = u.set(drivername="postgresql+asyncpg")
        return u.render_as_string(hide_password=False)
    except Exception:
        # Fallback string-level normalization for odd/partial URLs
        if url.startswith("postgresql+asyncpg://"):
            return url
        if url.startswith("postgresql://"):
            return "postgresql+asyncpg://" + url.split("://", 1)[1]
        if url.startswith("postgres://"):
            return "postgresql+asyncpg://" + url.split("://", 1)[1]
        return url


def _strip_jdbc_prefix(url: str) -> str:
    """Accept JDBC-style connection strings ("jdbc:postgresql://...")."""
    if url.startswith("jdbc:"):
        return url[len("jdbc:"):]
    return url


def _prepare_asyncpg_connection(url: str) -> Tuple[str, Dict[str, Any]]:
    """Strip unsupported query args and derive asyncpg connect kwargs."""

    normalized_url = _normalize_db_url(_strip_jdbc_prefix(url))
    split = urlsplit(normalized_url)
    query_pairs = parse_qsl(split.query, keep_blank_values=True)

    sslmode = None
    filtered_pairs = []
    for key, value in query_pairs:
        if key == "sslmode":
            sslmode = value
            continue
        if key == "channel_binding":
            # asyncpg does not accept this kwarg; drop it.
            continue
        filtered_pairs.append((key, value))

    cleaned_query = urlencode(filtered_pairs, doseq=True)
    cleaned_url = urlunsplit(split._replace(query=cleaned_query)).rstrip("?")

    connect_args: Dict[str, Any] = {}
    if sslmode:
        mode = sslmode.lower()
        if mode == "disable":
            connect_args["ssl"] = False
        elif mode in {"allow", "prefer"}:
            # asyncpg negotiates TLS on its own when the server requires it.
            pass
        elif mode == "require":
            ssl_context = ssl.create_default_context()
            ssl_context.check_hostname = False
            ssl_context.verify_mode = ssl.CERT_NONE
            connect_args["ssl"] = ssl_context
        elif mode == "verify-ca":
            ssl_context = ssl.create_default_context()
            ssl_context.check_hostname = False
            connect_args["ssl"] = ssl_context
        elif mode == "verify-full":
            connect_args["ssl"] = ssl.create_default_context()
        else:
            # Unknown value; fall back to a secure default.
            connect_args["ssl"] = ssl.create_default_context()

    return cleaned_url, connect_args


def resolve_database_target(settings: Settings) -> Tuple[str, Dict[str, Any]]:
    """Pick the backend: networked Postgres when configured, else embedded SQLite."""
    networked = settings.networked_database_url
    if networked is not None:
        return _prepare_asyncpg_connection(networked)
    return settings.embedded_database_url, {}


def create_engine(settings: Settings) -> AsyncEngine:
    """Build the async engine with a connection pool bounded by `pool_size`.

    `max_overflow=0` keeps the number of concurrent database operations at
    `pool_size`; further callers wait for a free connection.
    """
    url, connect_args = resolve_database_target(settings)
    return create_async_engine(
        url,
        echo=settings.sql_echo,
        pool_size=settings.pool_size,
        max_overflow=0,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


async def init_db(engine: AsyncEngine) -> None:
    """Create the tables if they do not exist yet."""
    # Import locally so metadata is populated without import cycles
    from app.schemas import feedback, news, subscriptions, tokens  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


def describe_database_url(url: str) -> str:
    """Return a sanitized, human-readable description of the DB URL for logging.

    Example: "postgresql+asyncpg://user@host:5432/dbname"
    Passwords are never included.
    """
    try:
        u = make_url(url)
        if u.drivername.startswith("sqlite"):
            return f"{u.drivername}:///{u.database or ':memory:'}"
        auth = u.username or "?"
        host = u.host or "?"
        port = f":{u.port}" if u.port else ""
        db = u.database or "?"
        return f"{u.drivername}://{auth}@{host}{port}/{db}"
    except Exception:
        # On parse failure, do not log the raw URL; hint only
        return "<unparseable database URL>"
