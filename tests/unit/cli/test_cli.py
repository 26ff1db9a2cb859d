"""Tests for the command line interface."""

from typer.testing import CliRunner

from fitness_users.cli import app

runner = CliRunner()


def test_help_lists_commands():
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    assert "serve" in result.output
    assert "init-db" in result.output


def test_init_db():
    result = runner.invoke(app, ["init-db"])

    assert result.exit_code == 0
    assert "Database initialized." in result.output


def test_serve_uses_configured_address(monkeypatch):
    calls = []
    monkeypatch.setattr("uvicorn.run", lambda *args, **kwargs: calls.append((args, kwargs)))

    result = runner.invoke(app, ["serve", "--port", "9001"])

    assert result.exit_code == 0
    assert len(calls) == 1
    args, kwargs = calls[0]
    assert args == ("fitness_users.api.http.app:app",)
    assert kwargs["host"] == "localhost"
    assert kwargs["port"] == 9001
    assert kwargs["reload"] is False


def test_init_db_releases_engine(monkeypatch):
    from fitness_users.core.services import DbSessionService

    disposed = []
    original_dispose = DbSessionService.dispose

    def record_dispose(self):
        disposed.append(self)
        original_dispose(self)

    monkeypatch.setattr(DbSessionService, "dispose", record_dispose)

    result = runner.invoke(app, ["init-db"])

    assert result.exit_code == 0
    assert len(disposed) == 1
