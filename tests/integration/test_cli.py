"""Tests for the consolelog CLI."""

import json

import pytest

from consolelog.cli.main import cli
from consolelog.core.console import ConsoleLogger
from consolelog.core.session import LogSession


@pytest.fixture
def header_value():
    session = LogSession()
    console = ConsoleLogger(session=session)
    console.group("Request")
    console.info("user", {"id": 7})
    console.group_end()
    console.warn("done")
    return session.encode()


class TestCli:
    def test_no_command_prints_help(self, capsys):
        with pytest.raises(SystemExit) as exc:
            cli([])
        assert exc.value.code == 0
        assert "consolelog" in capsys.readouterr().out

    def test_decode(self, header_value, capsys):
        cli(["decode", header_value])
        out = capsys.readouterr().out
        assert "(4 rows)" in out
        assert "[group] Request" in out
        assert '  [info] user {"id": 7}' in out
        assert "test_cli.py : " in out
        assert "[warn] done" in out

    def test_decode_full_header_line(self, header_value, capsys):
        cli(["decode", f"X-ChromeLogger-Data: {header_value}"])
        assert "(4 rows)" in capsys.readouterr().out

    def test_decode_raw(self, header_value, capsys):
        cli(["decode", "--raw", header_value])
        payload = json.loads(capsys.readouterr().out)
        assert payload["columns"] == ["log", "backtrace", "type"]
        assert len(payload["rows"]) == 4

    def test_decode_garbage(self, capsys):
        with pytest.raises(SystemExit) as exc:
            cli(["decode", "%%%"])
        assert exc.value.code == 1
        assert "error:" in capsys.readouterr().err

    def test_demo_runs_uvicorn(self, monkeypatch):
        calls = []
        monkeypatch.setattr("uvicorn.run", lambda app, **kwargs: calls.append((app, kwargs)))
        cli(["demo", "--port", "9999"])
        (app, kwargs) = calls[0]
        assert kwargs["port"] == 9999
        assert kwargs["host"] == "127.0.0.1"
        assert app.title == "consolelog demo"
