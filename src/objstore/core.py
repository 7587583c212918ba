"""Main module."""

from __future__ import annotations

import errno
import sys
from collections.abc import Sequence
from pathlib import Path

from loguru import logger

from objstore.config import load_config, parse_args
from objstore.config.model import Config
from objstore.storage.model import Storage
from objstore.storage.registry import StorageRegistry, default_registry
from objstore.util.errors import (
    ConfigLoadError,
    InvalidEndpointError,
    NotFoundError,
    StorageError,
    UnknownBackendError,
)
from objstore.util.logger import init_logger


class Runner:
    """Opens the configured storage backend and runs commands against it."""

    def __init__(self, config: Config, registry: StorageRegistry | None = None) -> None:
        self.config = config
        self.registry = registry or default_registry()
        self.storage = self._open()

    def _open(self) -> Storage:
        try:
            storage = self.registry.create(
                self.config.backend,
                self.config.endpoint,
                self.config.access_key,
                self.config.secret_key.get_secret_value(),
                self.config.token.get_secret_value(),
            )
        except UnknownBackendError as e:
            logger.critical(str(e))
            sys.exit(errno.EINVAL)
        except InvalidEndpointError as e:
            logger.critical(str(e))
            sys.exit(errno.EINVAL)
        except ConfigLoadError as e:
            logger.critical(f'error configuring {self.config.backend}: {e}')
            sys.exit(errno.EIO)
        logger.info(f'opened {self.storage_name(storage)}')
        return storage

    @staticmethod
    def storage_name(storage: Storage) -> str:
        return f'{storage.name} ({storage})'

    def info(self) -> str:
        """Describe the opened backend."""
        return self.storage_name(self.storage)

    def ls(self, prefix: str = '') -> list[str]:
        """List keys and common prefixes directly under ``prefix``."""
        return [entry.key for entry in self.storage.list_objects(prefix, delimiter='/')]

    def cat(self, key: str) -> bytes:
        """Read an object."""
        data, _ = self.storage.read(key)
        return data

    def put(self, key: str, src: Path) -> str | None:
        """Upload a local file to ``key``."""
        if not src.is_file():
            raise ValueError(f'{src} is not a regular file')
        return self.storage.write(key, src.read_bytes())

    def rm(self, key: str) -> None:
        """Delete an object."""
        self.storage.delete(key)


def main(argv: Sequence[str] | None = None) -> None:
    """Command line entry point."""
    args = parse_args(argv)
    config = load_config(args)
    init_logger(config.log_level)
    runner = Runner(config)

    try:
        match args.command, args.args:
            case 'info', []:
                print(runner.info())
            case 'ls', [] | [_]:
                for key in runner.ls(*args.args):
                    print(key)
            case 'cat', [key]:
                sys.stdout.buffer.write(runner.cat(key))
            case 'put', [src, key]:
                revision = runner.put(key, Path(src))
                logger.info(f'uploaded {src} to {runner.storage}{key} ({revision})')
            case 'rm', [key]:
                runner.rm(key)
            case command, rest:
                logger.critical(f'wrong arguments for {command}: {rest}')
                sys.exit(errno.EINVAL)
    except NotFoundError as e:
        logger.error(str(e))
        sys.exit(errno.ENOENT)
    except StorageError as e:
        logger.critical(str(e))
        sys.exit(errno.EIO)
    except TimeoutError as e:
        logger.critical(str(e))
        sys.exit(errno.ETIMEDOUT)
    except ValueError as e:
        logger.critical(str(e))
        sys.exit(errno.EINVAL)
