"""Tests for the standard logging bridge."""

import inspect
import logging

import pytest

from consolelog.adapters.logging_handler import ConsoleLogHandler, console_level
from consolelog.core.console import ConsoleLogger
from consolelog.core.models import LevelTag
from consolelog.core.session import LogSession
from consolelog.transport.memory import MemoryHeaderSink


@pytest.fixture
def session():
    return LogSession()


@pytest.fixture
def sink():
    return MemoryHeaderSink()


@pytest.fixture
def app_logger(session, sink):
    handler = ConsoleLogHandler(ConsoleLogger(session=session, sink=sink))
    log = logging.getLogger("tests.bridge")
    log.setLevel(logging.DEBUG)
    log.propagate = False
    log.addHandler(handler)
    yield log
    log.removeHandler(handler)
    log.propagate = True


class TestConsoleLevel:
    def test_mapping(self):
        assert console_level(logging.DEBUG) is LevelTag.LOG
        assert console_level(logging.INFO) is LevelTag.INFO
        assert console_level(logging.WARNING) is LevelTag.WARN
        assert console_level(logging.ERROR) is LevelTag.ERROR
        assert console_level(logging.CRITICAL) is LevelTag.ERROR


class TestConsoleLogHandler:
    def test_record_becomes_row(self, app_logger, session, sink):
        line = inspect.currentframe().f_lineno + 1
        app_logger.warning("disk %s", "full")
        (row,) = session.rows
        assert row.type is LevelTag.WARN
        assert row.data == ["disk full"]
        assert row.call_site.endswith(f"test_logging_handler.py : {line}")
        assert sink.writes == 1

    def test_mapping_args_are_kept(self, app_logger, session):
        app_logger.info("%(user)s logged in", {"user": "ann"})
        assert session.rows[0].data == ["ann logged in", {"user": "ann"}]

    def test_exception_text_is_included(self, app_logger, session):
        try:
            raise KeyError("missing")
        except KeyError:
            app_logger.exception("lookup failed")
        data = session.rows[0].data
        assert session.rows[0].type is LevelTag.ERROR
        assert data[0] == "lookup failed"
        assert "Traceback" in data[1]
        assert "KeyError" in data[1]

    def test_own_records_are_ignored(self, session, sink):
        handler = ConsoleLogHandler(ConsoleLogger(session=session, sink=sink))
        record = logging.LogRecord("consolelog.session", logging.INFO, __file__, 1, "x", None, None)
        handler.handle(record)
        assert session.rows == []

    def test_header_already_sent_goes_to_handle_error(self, app_logger, session, sink, capsys):
        sink.flush()
        app_logger.info("too late")
        assert "HeaderAlreadySent" in capsys.readouterr().err
