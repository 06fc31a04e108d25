"""
Tests for the command line entry points
"""

from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from usergraph import __version__
from usergraph.cli import cli
from usergraph.database import cli as migrate_cli


def test_version():
    result = CliRunner().invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_serve_uses_app_factory_and_settings(monkeypatch):
    monkeypatch.setenv("PORT", "5055")

    with patch("usergraph.cli.uvicorn.run") as mock_run:
        result = CliRunner().invoke(cli, ["serve", "--host", "127.0.0.1"])

    assert result.exit_code == 0, result.output
    args, kwargs = mock_run.call_args
    assert args == ("usergraph.api.app:create_app",)
    assert kwargs["factory"] is True
    assert kwargs["host"] == "127.0.0.1"
    assert kwargs["port"] == 5055


def test_alembic_config_points_at_project(monkeypatch):
    monkeypatch.delenv(migrate_cli.ALEMBIC_INI_ENV, raising=False)

    config = migrate_cli.get_alembic_config()

    assert Path(config.config_file_name).name == "alembic.ini"
    assert Path(config.config_file_name).exists()


def test_upgrade_invokes_alembic(monkeypatch):
    with patch("usergraph.database.cli.command.upgrade") as mock_upgrade:
        result = CliRunner().invoke(migrate_cli.main, ["upgrade"])

    assert result.exit_code == 0, result.output
    assert mock_upgrade.call_args.args[1] == "head"


def test_missing_alembic_ini_exits_nonzero(monkeypatch, tmp_path):
    monkeypatch.setenv(migrate_cli.ALEMBIC_INI_ENV, str(tmp_path / "missing.ini"))

    result = CliRunner().invoke(migrate_cli.main, ["current"])

    assert result.exit_code == 1


def test_current_logs_resolved_alembic_ini():
    with patch("usergraph.database.cli.command.current") as mock_current:
        result = CliRunner().invoke(migrate_cli.main, ["current"])

    assert result.exit_code == 0, result.output
    config = mock_current.call_args.args[0]
    assert config.config_file_name in result.output
    assert '"command": "current"' in result.output


def test_failing_alembic_command_exits_nonzero():
    with patch("usergraph.database.cli.command.history", side_effect=RuntimeError("no db")):
        result = CliRunner().invoke(migrate_cli.main, ["history"])

    assert result.exit_code == 1
    assert "Migration command failed" in result.output
