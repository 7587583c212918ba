"""Tests for configuration loading."""

import errno

import pytest
from pydantic import ValidationError

from objstore.config import load_config, parse_args
from objstore.config.model import Config


class TestConfigModel:
    def test_backend_is_normalized(self) -> None:
        config = Config(backend=' Wasabi ', endpoint=' mybucket.s3.us-east-1.wasabisys.com ')

        assert config.backend == 'wasabi'
        assert config.endpoint == 'mybucket.s3.us-east-1.wasabisys.com'

    def test_secrets_are_hidden(self) -> None:
        config = Config(backend='s3', endpoint='e', secret_key='SK', token='TOKEN')

        assert 'SK' not in repr(config)
        assert 'TOKEN' not in repr(config)
        assert config.secret_key.get_secret_value() == 'SK'

    @pytest.mark.parametrize(('backend', 'endpoint'), [('', 'e'), ('s3', ''), ('s3', '  ')])
    def test_empty_values_fail(self, backend: str, endpoint: str) -> None:
        with pytest.raises(ValidationError):
            Config(backend=backend, endpoint=endpoint)

    def test_bad_log_level_fails(self) -> None:
        with pytest.raises(ValidationError):
            Config(backend='s3', endpoint='e', log_level='LOUD')  # ty:ignore[invalid-argument-type]


class TestLoadConfig:
    def test_from_args(self) -> None:
        args = parse_args([
            '-b',
            'wasabi',
            '-e',
            'mybucket.s3.us-east-1.wasabisys.com',
            '--access-key',
            'AK',
            '--secret-key',
            'SK',
            '-l',
            'debug',
            'ls',
            'prefix/',
        ])

        config = load_config(args)

        assert config.backend == 'wasabi'
        assert config.endpoint == 'mybucket.s3.us-east-1.wasabisys.com'
        assert config.access_key == 'AK'
        assert config.secret_key.get_secret_value() == 'SK'
        assert config.token.get_secret_value() == ''
        assert config.log_level == 'DEBUG'
        assert args.command == 'ls'
        assert args.args == ['prefix/']

    def test_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv('OBJSTORE_BACKEND', 's3')
        monkeypatch.setenv('OBJSTORE_ENDPOINT', 'http://minio.local:9000/bucket')
        monkeypatch.setenv('OBJSTORE_ACCESS_KEY', 'AK')
        monkeypatch.setenv('OBJSTORE_TOKEN', 'TOKEN')

        args = parse_args([])
        config = load_config(args)

        assert config.backend == 's3'
        assert config.endpoint == 'http://minio.local:9000/bucket'
        assert config.access_key == 'AK'
        assert config.token.get_secret_value() == 'TOKEN'
        assert args.command == 'info'

    def test_args_override_env(self, monkeypatch) -> None:
        monkeypatch.setenv('OBJSTORE_BACKEND', 's3')

        config = load_config(parse_args(['-b', 'wasabi', '-e', 'b.s3.r.example.com']))

        assert config.backend == 'wasabi'

    def test_invalid_exits(self, monkeypatch) -> None:
        monkeypatch.delenv('OBJSTORE_BACKEND', raising=False)
        monkeypatch.delenv('OBJSTORE_ENDPOINT', raising=False)

        with pytest.raises(SystemExit) as exc_info:
            load_config(parse_args([]))

        assert exc_info.value.code == errno.EINVAL
