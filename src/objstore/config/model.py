"""Configuration model."""

from typing import Literal

from pydantic import BaseModel, SecretStr, field_validator

LOG_LEVELS = Literal['TRACE', 'DEBUG', 'INFO', 'SUCCESS', 'WARNING', 'ERROR', 'CRITICAL']
"""Log levels understood by loguru."""


class Config(BaseModel):
    """Configuration used to open a storage backend.

    The credentials are static: nothing here is looked up from the environment
    or from a credentials chain once the model is built.
    """

    backend: str
    """The name of the storage backend, as registered in the registry."""

    endpoint: str
    """The endpoint of the bucket, e.g. ``mybucket.s3.us-east-1.wasabisys.com``."""

    access_key: str = ''
    """The access key id."""

    secret_key: SecretStr = SecretStr('')
    """The secret access key."""

    token: SecretStr = SecretStr('')
    """The session token, empty for long-lived credentials."""

    log_level: LOG_LEVELS = 'INFO'
    """The log level."""

    @field_validator('backend')
    @classmethod
    def _lower_backend(cls, v: str) -> str:
        v = v.strip().lower()
        if not v:
            raise ValueError('backend must not be empty')
        return v

    @field_validator('endpoint')
    @classmethod
    def _strip_endpoint(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('endpoint must not be empty')
        return v
