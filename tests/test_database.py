"""
Howl Backend — Database, Provisioning and Lifespan Tests
==========================================================

What:  Role provisioning against a mocked engine, startup/shutdown through
       the lifespan, and the health probe.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from fastapi import FastAPI
from sqlalchemy.exc import OperationalError

import howl.database as database_module
from howl.config import settings
from howl.database import Database, provision_app_user
from howl.main import lifespan

ADMIN_URL = "postgresql+asyncpg://postgres:secret@db:5432/howl"


def _mock_engine(role_exists: bool):
    """An engine whose begin() yields a connection recording every statement."""
    conn = AsyncMock()
    lookup = MagicMock()
    lookup.scalar.return_value = 1 if role_exists else None
    conn.execute = AsyncMock(return_value=lookup)
    conn.exec_driver_sql = AsyncMock()

    engine = MagicMock()
    engine.dialect.identifier_preparer.quote = lambda name: f'"{name}"'
    engine.begin.return_value.__aenter__.return_value = conn
    engine.begin.return_value.__aexit__.return_value = False
    engine.dispose = AsyncMock()
    return engine, conn


def _statements(conn):
    return [call.args[0] for call in conn.exec_driver_sql.await_args_list]


class TestProvisionAppUser:

    @pytest.mark.asyncio
    async def test_creates_missing_role_and_grants(self, monkeypatch):
        engine, conn = _mock_engine(role_exists=False)
        monkeypatch.setattr(database_module, "create_async_engine", MagicMock(return_value=engine))

        assert await provision_app_user(ADMIN_URL, "howl", "it's", "howl") is True

        statements = _statements(conn)
        assert statements[0] == "CREATE ROLE \"howl\" LOGIN PASSWORD 'it''s'"
        assert 'GRANT CONNECT ON DATABASE "howl" TO "howl"' in statements
        assert any(s.startswith("ALTER DEFAULT PRIVILEGES") for s in statements)
        engine.dispose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_existing_role_is_not_recreated(self, monkeypatch):
        engine, conn = _mock_engine(role_exists=True)
        monkeypatch.setattr(database_module, "create_async_engine", MagicMock(return_value=engine))

        assert await provision_app_user(ADMIN_URL, "howl", "hunter2", "howl") is True

        assert not any(s.startswith("CREATE ROLE") for s in _statements(conn))
        assert len(_statements(conn)) == 6

    @pytest.mark.asyncio
    async def test_driver_error_is_logged_and_raised(self, monkeypatch, caplog):
        engine, conn = _mock_engine(role_exists=False)
        conn.exec_driver_sql.side_effect = RuntimeError("permission denied")
        monkeypatch.setattr(database_module, "create_async_engine", MagicMock(return_value=engine))

        with pytest.raises(RuntimeError, match="permission denied"):
            await provision_app_user(ADMIN_URL, "howl", "hunter2", "howl")

        assert "Error creating first user." in caplog.text
        engine.dispose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_non_postgres_backend_is_skipped(self, monkeypatch):
        factory = MagicMock()
        monkeypatch.setattr(database_module, "create_async_engine", factory)

        assert await provision_app_user("sqlite+aiosqlite:///x.db", "howl", "pw", None) is False
        factory.assert_not_called()


class TestDatabase:

    @pytest.mark.asyncio
    async def test_ping_reports_reachable_database(self, database):
        assert await database.ping() is True

    @pytest.mark.asyncio
    async def test_ping_reports_unreachable_database(self, tmp_path):
        db = Database(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'howl.db'}")
        try:
            assert await db.ping() is False
        finally:
            await db.dispose()


class TestLifespan:

    @pytest.mark.asyncio
    async def test_startup_attaches_and_shutdown_disposes(self, monkeypatch, tmp_path):
        monkeypatch.setattr(settings, "database_url", f"sqlite+aiosqlite:///{tmp_path / 'howl.db'}")
        monkeypatch.setattr(settings, "db_admin_url", None)
        app = FastAPI()

        async with lifespan(app):
            assert isinstance(app.state.database, Database)
            assert await app.state.database.ping() is True

        assert app.state.database is None

    @pytest.mark.asyncio
    async def test_unreachable_database_aborts_startup(self, monkeypatch, tmp_path):
        monkeypatch.setattr(
            settings, "database_url", f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'howl.db'}"
        )
        monkeypatch.setattr(settings, "db_admin_url", None)
        app = FastAPI()
        app.state.database = None

        with pytest.raises(OperationalError):
            async with lifespan(app):
                pass

        assert app.state.database is None

    @pytest.mark.asyncio
    async def test_provisioning_failure_aborts_startup(self, monkeypatch):
        monkeypatch.setattr(settings, "db_admin_url", ADMIN_URL)
        monkeypatch.setattr(
            "howl.main.provision_app_user",
            AsyncMock(side_effect=RuntimeError("role exists with other owner")),
        )
        connect = AsyncMock()
        monkeypatch.setattr(Database, "connect", connect)

        with pytest.raises(RuntimeError):
            async with lifespan(FastAPI()):
                pass

        connect.assert_not_awaited()


class TestHealth:

    @pytest.mark.asyncio
    async def test_healthy_with_database(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"

    @pytest.mark.asyncio
    async def test_unhealthy_without_database(self):
        from httpx import ASGITransport, AsyncClient

        from howl.main import create_app

        app = create_app()
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            body = (await client.get("/health")).json()

        assert body["status"] == "unhealthy"
        assert body["database"] == "disconnected"
