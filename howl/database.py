"""
Howl Backend — Database Connection and Session Management
===========================================================

What:  Async SQLAlchemy engine wrapper, session dependency, and first-run
       provisioning of the application database role.
Why:   One explicitly constructed `Database` object owns the connection pool.
       It is created in the application lifespan, stored on `app.state`, and
       handed to route handlers through `get_db_session`. Nothing opens a
       connection at import time.
How:   `Database` wraps `create_async_engine` + `async_sessionmaker`.
       `get_db_session` yields one session per request, committing on success
       and rolling back on error.

Lifecycle:
    startup:  provision_app_user() (optional) → Database(...) → connect()
    requests: get_db_session() per request
    shutdown: dispose()
"""

import logging
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models inherit from this class so Alembic and `Database.create_all`
    share a single metadata object.
    """

    def to_dict(self) -> Dict[str, Any]:
        """Column values keyed by column name, ready for a JSON response."""
        return {column.key: getattr(self, column.key) for column in self.__table__.columns}


class Database:
    """
    Owns the engine and session factory for one database URL.

    Pool options only apply to server databases; SQLite (used by the test
    suite) is created with the dialect's default pool.
    """

    def __init__(
        self,
        url: str,
        pool_size: int = 10,
        max_overflow: int = 5,
        pool_pre_ping: bool = True,
        echo: bool = False,
    ):
        self.url = url
        engine_kwargs = {"echo": echo}
        if make_url(url).get_backend_name() != "sqlite":
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_pre_ping=pool_pre_ping,
                pool_recycle=3600,
            )
        self.engine = create_async_engine(url, **engine_kwargs)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings) -> "Database":
        return cls(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            echo=settings.log_level == "DEBUG",
        )

    async def connect(self) -> None:
        """
        Open a connection and run `SELECT 1`.

        Raises whatever the driver raises; the lifespan lets it propagate so
        the server never starts accepting requests without a database.
        """
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info("Connected to database %s", make_url(self.url).render_as_string(hide_password=True))

    async def ping(self) -> bool:
        """Lightweight connectivity probe for the health endpoint."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Database ping failed: %s", str(e))
            return False

    async def create_all(self) -> None:
        """Create every mapped table. Used by tests; deployments run Alembic."""
        import howl.models  # noqa: F401  registers models with Base.metadata

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    The session comes from the `Database` stored on `app.state.database`.
    On success the transaction is committed; on any exception it is rolled
    back and the exception re-raised for the global handlers.

    Example usage in a route:
        @router.get("/businesses/{businessid}")
        async def get_business(businessid: int, db: AsyncSession = Depends(get_db_session)):
            ...
    """
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Provisioning ──────────────────────────────────────────────────────────
_PRIVILEGE_STATEMENTS = (
    "GRANT CONNECT ON DATABASE {database} TO {role}",
    "GRANT USAGE ON SCHEMA public TO {role}",
    "GRANT SELECT, INSERT, UPDATE, DELETE ON ALL TABLES IN SCHEMA public TO {role}",
    "GRANT USAGE, SELECT ON ALL SEQUENCES IN SCHEMA public TO {role}",
    "ALTER DEFAULT PRIVILEGES IN SCHEMA public GRANT SELECT, INSERT, UPDATE, DELETE ON TABLES TO {role}",
    "ALTER DEFAULT PRIVILEGES IN SCHEMA public GRANT USAGE, SELECT ON SEQUENCES TO {role}",
)


def _quote_literal(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


async def provision_app_user(
    admin_url: str,
    username: str,
    password: str,
    database_name: Optional[str],
) -> bool:
    """
    Create the read/write role the application connects as.

    What:    Connects with the admin URL, creates `username` if it does not
             exist, and grants it read/write access to the public schema.
    When:    Once per startup, before the application engine connects.
    Returns: True if provisioning ran, False if skipped (non-PostgreSQL URL).

    The admin URL must point at the application database so the schema
    grants land in the right place. The role is created only if missing, so
    restarts against an already provisioned database succeed.

    Raises:
        Any driver error. It is logged and re-raised so startup aborts.
    """
    admin = make_url(admin_url)
    if admin.get_backend_name() != "postgresql":
        logger.warning(
            "Skipping user provisioning: unsupported backend '%s'",
            admin.get_backend_name(),
        )
        return False

    engine = create_async_engine(admin_url, poolclass=NullPool)
    try:
        quote = engine.dialect.identifier_preparer.quote
        role = quote(username)
        async with engine.begin() as conn:
            result = await conn.execute(
                text("SELECT 1 FROM pg_roles WHERE rolname = :name"),
                {"name": username},
            )
            if result.scalar() is None:
                await conn.exec_driver_sql(
                    f"CREATE ROLE {role} LOGIN PASSWORD {_quote_literal(password)}"
                )
                logger.info("Created database role %s", username)
            else:
                logger.info("Database role %s already exists", username)

            for statement in _PRIVILEGE_STATEMENTS:
                if "{database}" in statement and not database_name:
                    continue
                await conn.exec_driver_sql(
                    statement.format(role=role, database=quote(database_name or ""))
                )
        return True
    except Exception:
        logger.error("Error creating first user.", exc_info=True)
        raise
    finally:
        await engine.dispose()
