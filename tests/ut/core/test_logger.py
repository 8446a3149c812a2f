"""日志配置测试"""

from __future__ import annotations

import json
import logging

from repoget.utils.logger import JSONFormatter, reset_logging, setup_logging


class TestJSONFormatter:
    def test_event_field(self) -> None:
        record = logging.LogRecord(
            "repoget.services.getter", logging.INFO, __file__, 1,
            "clone %s -> %s", ("https://github.com/a/b", "/r/github.com/a/b"), None,
        )
        record.event = "clone"
        data = json.loads(JSONFormatter().format(record))
        assert data["event"] == "clone"
        assert data["level"] == "INFO"
        assert data["message"] == "clone https://github.com/a/b -> /r/github.com/a/b"

    def test_plain_record_has_no_event(self) -> None:
        record = logging.LogRecord("x", logging.WARNING, __file__, 1, "hi", None, None)
        assert "event" not in json.loads(JSONFormatter().format(record))


class TestSetupLogging:
    def test_single_handler(self) -> None:
        try:
            setup_logging("DEBUG")
            setup_logging("DEBUG", json_output=True)
            root = logging.getLogger()
            assert len(root.handlers) == 1
            assert isinstance(root.handlers[0].formatter, JSONFormatter)
            assert root.level == logging.DEBUG
        finally:
            reset_logging()
            logging.getLogger().setLevel(logging.WARNING)
