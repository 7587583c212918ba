"""Configuration loading.

Every option can be given as a command line flag or through an ``OBJSTORE_*``
environment variable. Flags take precedence.
"""

from __future__ import annotations

import errno
import os
import sys
from argparse import ArgumentParser, Namespace
from collections.abc import Sequence

from loguru import logger
from pydantic import ValidationError

from objstore.config.model import Config

ENV_PREFIX = 'OBJSTORE_'
COMMANDS = ('info', 'ls', 'cat', 'put', 'rm')


def _env(name: str, default: str | None = None) -> str | None:
    return os.environ.get(f'{ENV_PREFIX}{name}', default)


def build_parser() -> ArgumentParser:
    """Build the command line parser.

    :return: The argument parser.
    :rtype: ArgumentParser
    """
    parser = ArgumentParser(prog='objstore', description='Operate on a named object storage backend.')
    parser.add_argument('-b', '--backend', default=_env('BACKEND'), help='storage backend name')
    parser.add_argument('-e', '--endpoint', default=_env('ENDPOINT'), help='bucket endpoint')
    parser.add_argument('--access-key', default=_env('ACCESS_KEY', ''), help='access key id')
    parser.add_argument('--secret-key', default=_env('SECRET_KEY', ''), help='secret access key')
    parser.add_argument('--token', default=_env('TOKEN', ''), help='session token')
    parser.add_argument('-l', '--log-level', default=_env('LOG_LEVEL', 'INFO'), help='log level')
    parser.add_argument('command', choices=COMMANDS, nargs='?', default='info', help='command to run')
    parser.add_argument('args', nargs='*', help='command arguments')
    return parser


def parse_args(argv: Sequence[str] | None = None) -> Namespace:
    """Parse the command line.

    :param argv: The arguments, defaults to ``sys.argv[1:]``.
    :type argv: Sequence[str] | None
    :return: The parsed arguments.
    :rtype: Namespace
    """
    return build_parser().parse_args(argv)


def load_config(args: Namespace | None = None) -> Config:
    """Load the configuration.

    :param args: Already parsed arguments, parsed from ``sys.argv`` if ``None``.
    :type args: Namespace | None
    :return: The validated configuration.
    :rtype: Config
    :raises SystemExit: If the configuration is not valid.
    """
    if args is None:
        args = parse_args()

    try:
        config = Config(
            backend=args.backend or '',
            endpoint=args.endpoint or '',
            access_key=args.access_key,
            secret_key=args.secret_key,
            token=args.token,
            log_level=args.log_level.upper(),
        )
    except ValidationError as e:
        logger.critical(f'invalid configuration: {e}')
        sys.exit(errno.EINVAL)

    logger.debug(f'loaded config for backend {config.backend} at {config.endpoint}')
    return config


__all__ = ['Config', 'load_config', 'parse_args']
