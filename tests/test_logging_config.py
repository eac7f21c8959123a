"""Tests for logging setup."""

import logging

import pytest

from partydraft.logging_config import get_logger, setup_logging


@pytest.fixture(autouse=True)
def reset_handlers():
    yield
    logging.getLogger('partydraft').handlers = []


class TestSetupLogging:
    """Tests for handler installation and logger names."""

    def test_file_and_console(self, tmp_path):
        logger = setup_logging(log_dir=tmp_path, level=logging.DEBUG)
        assert len(logger.handlers) == 2
        get_logger('matchups').debug('anchor picked')
        for handler in logger.handlers:
            handler.flush()
        (log_file,) = tmp_path.glob('draft_*.log')
        assert 'anchor picked' in log_file.read_text()

    def test_rerun_replaces_handlers(self):
        setup_logging(log_to_file=False)
        logger = setup_logging(log_to_file=False)
        assert len(logger.handlers) == 1

    def test_get_logger_names(self):
        assert get_logger('cli').name == 'partydraft.cli'
        assert get_logger('partydraft.raffle').name == 'partydraft.raffle'
        assert get_logger().name == 'partydraft'
