"""Tests for logger configuration."""

from loguru import logger

from objstore.util.logger import init_logger


class TestInitLogger:
    def test_level_filters(self, capsys) -> None:
        init_logger('WARNING')

        logger.info('quiet message')
        logger.warning('loud message')

        err = capsys.readouterr().err
        assert 'quiet message' not in err
        assert 'loud message' in err

    def test_trace(self, capsys) -> None:
        init_logger('TRACE')

        logger.trace('trace message')

        assert 'trace message' in capsys.readouterr().err
