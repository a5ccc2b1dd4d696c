"""
Tests for the shop-admin CLI.
"""

from contextlib import contextmanager
from unittest.mock import patch

import pytest
from rich.console import Console
from sqlalchemy import create_engine, inspect
from sqlalchemy.pool import StaticPool
from typer.testing import CliRunner

from rest_api.cli import app
from rest_api.models import MenuItem, User
from rest_api.seed import DEFAULT_MENU_ITEMS
from shared.config.settings import settings
from shared.security.token_store import MemoryTokenStore
from tests.factories import ADMIN_EMAIL, ADMIN_PASSWORD


runner = CliRunner()


@pytest.fixture(autouse=True)
def wide_console():
    # Keeps table cells on one line
    with patch("rest_api.cli.console", Console(width=200)):
        yield


@pytest.fixture
def cli_db(db_session):
    """Point the CLI's sessions at the test database."""

    @contextmanager
    def fake_context():
        yield db_session

    with patch("rest_api.cli.get_db_context", fake_context):
        yield db_session


@pytest.fixture
def cli_store():
    store = MemoryTokenStore()
    with patch("rest_api.cli.build_token_store", return_value=store):
        yield store


class TestDatabaseCommands:
    def test_db_init_creates_tables(self):
        fresh = create_engine(
            "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
        )
        with patch("rest_api.cli.engine", fresh):
            result = runner.invoke(app, ["db-init"])

        assert result.exit_code == 0
        tables = set(inspect(fresh).get_table_names())
        assert {"app_user", "product", "shop_order", "order_item", "menu_item"} <= tables

    def test_db_seed_inserts_menu_once(self, cli_db):
        first = runner.invoke(app, ["db-seed"])
        second = runner.invoke(app, ["db-seed"])

        assert first.exit_code == 0
        assert f"Inserted {len(DEFAULT_MENU_ITEMS)} menu items" in first.output
        assert "nothing inserted" in second.output
        assert cli_db.query(MenuItem).count() == len(DEFAULT_MENU_ITEMS)

    def test_db_seed_refused_in_production(self, cli_db):
        with patch.object(settings, "environment", "production"):
            result = runner.invoke(app, ["db-seed"])

        assert result.exit_code == 1
        assert cli_db.query(MenuItem).count() == 0


class TestUserCommands:
    def test_create_admin(self, cli_db):
        result = runner.invoke(
            app, ["create-admin", "--email", ADMIN_EMAIL, "--password", ADMIN_PASSWORD]
        )

        assert result.exit_code == 0, result.output
        user = cli_db.query(User).filter(User.email == ADMIN_EMAIL).one()
        assert user.role_type == "admin"
        assert user.password != ADMIN_PASSWORD

    def test_create_admin_duplicate_email(self, cli_db, seed_admin_user):
        result = runner.invoke(
            app, ["create-admin", "--email", ADMIN_EMAIL, "--password", ADMIN_PASSWORD]
        )

        assert result.exit_code == 1
        assert "Email is already registered" in result.output

    def test_create_admin_short_password(self, cli_db):
        result = runner.invoke(
            app, ["create-admin", "--email", "new@example.com", "--password", "123"]
        )

        assert result.exit_code == 1
        assert "password:" in result.output
        assert cli_db.query(User).count() == 0

    def test_users_lists_active(self, cli_db, seed_admin_user, seed_regular_user):
        seed_regular_user.soft_delete()
        cli_db.commit()

        result = runner.invoke(app, ["users"])

        assert result.exit_code == 0
        assert ADMIN_EMAIL in result.output
        assert seed_regular_user.email not in result.output

    def test_users_empty(self, cli_db):
        result = runner.invoke(app, ["users"])
        assert "No active users" in result.output


class TestSessionCommands:
    def test_session_shows_ttl(self, cli_store):
        cli_store.set("user-1", "token", 600)

        result = runner.invoke(app, ["session", "user-1"])

        assert result.exit_code == 0
        assert "expires in" in result.output

    def test_session_missing(self, cli_store):
        result = runner.invoke(app, ["session", "user-1"])
        assert result.exit_code == 1
        assert "No active session" in result.output

    def test_revoke(self, cli_store):
        cli_store.set("user-1", "token", 600)
        # close() clears the memory store, so watch delete directly
        with patch.object(cli_store, "delete", wraps=cli_store.delete) as delete:
            result = runner.invoke(app, ["revoke", "user-1"])

        assert result.exit_code == 0
        assert "Session revoked" in result.output
        delete.assert_called_once_with("user-1")


class TestUtilityCommands:
    def test_config_check_passes_outside_production(self):
        result = runner.invoke(app, ["config-check"])
        assert result.exit_code == 0
        assert "Configuration OK" in result.output

    def test_config_check_flags_production_problems(self):
        with patch.object(settings, "environment", "production"), patch.object(
            settings, "token_store_backend", "memory"
        ):
            result = runner.invoke(app, ["config-check"])

        assert result.exit_code == 1
        assert "TOKEN_STORE_BACKEND" in result.output

    def test_version(self):
        result = runner.invoke(app, ["version"])
        assert "Shop Admin API" in result.output
