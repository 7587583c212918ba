"""Shared fixtures for tests."""

import sys
from collections.abc import Callable

import pytest
from loguru import logger

from objstore.config.model import LOG_LEVELS, Config


@pytest.fixture
def make_config() -> Callable[..., Config]:
    """Create a factory of Configs for testing."""

    def _make(
        backend: str = 'wasabi',
        endpoint: str = 'mybucket.s3.us-east-1.wasabisys.com',
        access_key: str = 'AK',
        secret_key: str = 'SK',
        token: str = '',
        log_level: LOG_LEVELS = 'DEBUG',
    ) -> Config:
        return Config(
            backend=backend,
            endpoint=endpoint,
            access_key=access_key,
            secret_key=secret_key,
            token=token,
            log_level=log_level,
        )

    return _make


@pytest.fixture
def isolated_aws_env(monkeypatch, tmp_path):
    """Keep botocore from reading the real environment and config files."""
    for var in (
        'AWS_ACCESS_KEY_ID',
        'AWS_SECRET_ACCESS_KEY',
        'AWS_SESSION_TOKEN',
        'AWS_PROFILE',
        'AWS_DEFAULT_REGION',
        'AWS_REGION',
        'AWS_ENDPOINT_URL',
        'AWS_ENDPOINT_URL_S3',
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv('AWS_CONFIG_FILE', str(tmp_path / 'aws_config'))
    monkeypatch.setenv('AWS_SHARED_CREDENTIALS_FILE', str(tmp_path / 'aws_credentials'))


@pytest.fixture(autouse=True)
def reset_logger():
    """Restore loguru's default sink after tests that replace it."""
    yield
    logger.remove()
    logger.add(sys.__stderr__)
