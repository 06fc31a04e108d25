"""
Tests for the PostgreSQL detection used to skip database-backed tests
"""

import shutil
import subprocess

from conftest import postgres_available


def fake_which(found):
    return lambda name: found.get(name)


def fake_bindir(path):
    def run(args, **kwargs):
        return subprocess.CompletedProcess(args, 0, stdout=f"{path}\n", stderr="")

    return run


def test_pg_ctl_on_path(monkeypatch):
    monkeypatch.setattr(shutil, "which", fake_which({"pg_ctl": "/usr/bin/pg_ctl"}))

    assert postgres_available() is True


def test_no_postgres_tools(monkeypatch):
    monkeypatch.setattr(shutil, "which", fake_which({}))

    assert postgres_available() is False


def test_client_only_install_is_not_enough(monkeypatch, tmp_path):
    # pg_config points at a bindir that was never installed
    monkeypatch.setattr(shutil, "which", fake_which({"pg_config": "/usr/bin/pg_config"}))
    monkeypatch.setattr(subprocess, "run", fake_bindir(tmp_path / "missing" / "bin"))

    assert postgres_available() is False


def test_pg_ctl_found_through_pg_config_bindir(monkeypatch, tmp_path):
    (tmp_path / "pg_ctl").touch()
    monkeypatch.setattr(shutil, "which", fake_which({"pg_config": "/usr/bin/pg_config"}))
    monkeypatch.setattr(subprocess, "run", fake_bindir(tmp_path))

    assert postgres_available() is True
