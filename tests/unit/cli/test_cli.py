"""Tests for the storefront CLI."""

import pytest
from typer.testing import CliRunner

from src.cli import app
from src.storefront.runtime.config.config_data import ConfigData, DatabaseConfig
from src.storefront.runtime.context import with_context

runner = CliRunner()


@pytest.fixture
def cli_database(tmp_path):
    config = ConfigData(database=DatabaseConfig(url=f"sqlite:///{tmp_path / 'cli.db'}"))
    with with_context(config):
        yield


class TestCli:
    def test_db_init(self, cli_database):
        result = runner.invoke(app, ["db", "init"])

        assert result.exit_code == 0
        assert "Database ready" in result.output

    def test_add_and_list_users(self, cli_database):
        added = runner.invoke(
            app, ["users", "add", "ada@example.com", "--name", "Ada", "--password", "pw"]
        )
        listed = runner.invoke(app, ["users", "list"])

        assert added.exit_code == 0
        assert "Created user 'ada@example.com'" in added.output
        assert listed.exit_code == 0
        assert "ada@example.com" in listed.output

    def test_duplicate_user_fails(self, cli_database):
        args = ["users", "add", "ada@example.com", "--name", "Ada", "--password", "pw"]
        runner.invoke(app, args)

        result = runner.invoke(app, args)

        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_list_empty(self, cli_database):
        runner.invoke(app, ["db", "init"])

        result = runner.invoke(app, ["users", "list"])

        assert result.exit_code == 0
        assert "No users found" in result.output
