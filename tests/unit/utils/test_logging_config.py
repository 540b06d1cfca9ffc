"""
Unit tests for logging configuration.
"""
import logging

import pytest

from riskpremia.utils import logging_config
from riskpremia.utils.logging_config import get_logger, setup_logger


@pytest.fixture(autouse=True)
def fresh_log_file(monkeypatch):
    monkeypatch.setattr(logging_config, '_SHARED_LOG_FILE', None)


@pytest.fixture
def logger_name(request):
    name = f"TEST.{request.node.name}"
    yield name
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


class TestSetupLogger:
    """Test suite for setup_logger."""

    def test_writes_to_shared_file(self, tmp_path, logger_name):
        logger = setup_logger(logger_name, log_to_console=False, log_dir=tmp_path)
        logger.info("Evaluating 2020-07-30")
        for handler in logger.handlers:
            handler.flush()

        log_files = list(tmp_path.glob('riskpremia_log_*.log'))
        assert len(log_files) == 1
        assert f"| {logger_name} | INFO | Evaluating 2020-07-30" in log_files[0].read_text()

    def test_no_duplicate_handlers(self, tmp_path, logger_name):
        setup_logger(logger_name, log_to_console=True, log_dir=tmp_path)
        logger = setup_logger(logger_name, log_to_console=True, log_dir=tmp_path)
        assert len(logger.handlers) == 2

    def test_level(self, tmp_path, logger_name):
        logger = setup_logger(logger_name, level=logging.DEBUG, log_to_console=False, log_dir=tmp_path)
        assert logger.level == logging.DEBUG

    def test_get_logger_reuses_handlers(self, tmp_path, logger_name):
        logger = setup_logger(logger_name, log_to_console=False, log_dir=tmp_path)
        assert get_logger(logger_name) is logger
        assert len(logger.handlers) == 1
