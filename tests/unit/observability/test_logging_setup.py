"""
로깅 설정 테스트
"""

import json
import logging
import sys
from unittest.mock import patch

from loguru import logger

from fireguard.observability.logging_setup import InterceptHandler, get_logger, setup_logging


def _record(level=logging.INFO, msg="server started"):
    return logging.LogRecord("uvicorn.error", level, __file__, 1, msg, None, None)


class TestLoggingSetup:
    """로깅 설정 테스트"""

    def test_intercept_handler_forwards_to_loguru(self):
        with patch("fireguard.observability.logging_setup.logger") as mock_logger:
            InterceptHandler().emit(_record())

        mock_logger.opt.assert_called_once()
        mock_logger.opt.return_value.log.assert_called_once_with(
            mock_logger.level.return_value.name, "server started"
        )

    def test_intercept_handler_unknown_level(self):
        with patch("fireguard.observability.logging_setup.logger") as mock_logger:
            mock_logger.level.side_effect = ValueError("unknown level")
            InterceptHandler().emit(_record(level=35, msg="custom"))

        mock_logger.opt.return_value.log.assert_called_once_with(35, "custom")

    def test_get_logger_binds_name(self):
        names = []
        sink_id = logger.add(lambda m: names.append(m.record["extra"].get("name")), level="INFO")
        try:
            get_logger("fireguard.test").info("hello")
        finally:
            logger.remove(sink_id)

        assert names == ["fireguard.test"]

    def test_json_logs(self, capsys):
        with patch("fireguard.observability.logging_setup._intercept_stdlib"):
            setup_logging("INFO", json_logs=True)
        try:
            get_logger("fireguard.test").info("structured")
            line = capsys.readouterr().out.strip().splitlines()[-1]
        finally:
            logger.remove()
            logger.add(sys.stderr)

        record = json.loads(line)["record"]
        assert record["message"] == "structured"
        assert record["extra"]["name"] == "fireguard.test"
