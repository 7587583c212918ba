"""Exceptions raised by objstore."""

from __future__ import annotations


class ObjstoreError(Exception):
    """Base class for all objstore errors."""


class StorageError(ObjstoreError):
    """Base class for errors raised by storage backends."""


class NotFoundError(StorageError):
    """Raise when something could not be found."""

    def __init__(self, msg: str | None = None, thing: str | None = None) -> None:
        self.thing = thing
        if msg is None:
            msg = f'{thing} not found' if thing else 'not found'
        super().__init__(msg)


class InvalidEndpointError(StorageError):
    """Raise when an endpoint string cannot be turned into an endpoint.

    :ivar endpoint: The endpoint as received, before any normalization.
    :vartype endpoint: str
    :ivar reason: What is wrong with it.
    :vartype reason: str
    """

    def __init__(self, endpoint: str, reason: str) -> None:
        self.endpoint = endpoint
        self.reason = reason
        super().__init__(f'invalid endpoint {endpoint!r}: {reason}')


class ConfigLoadError(StorageError):
    """Raise when a storage client configuration can not be assembled."""


class NotSupportedError(StorageError):
    """Raise when an operation is meaningless for a storage backend."""

    def __init__(self, operation: str, backend: str) -> None:
        self.operation = operation
        self.backend = backend
        super().__init__(f'{operation} is not supported by {backend}')


class UnknownBackendError(ObjstoreError):
    """Raise when a storage backend name is not registered."""

    def __init__(self, name: str, available: list[str] | None = None) -> None:
        self.name = name
        self.available = available or []
        msg = f'unknown storage backend {name!r}'
        if self.available:
            msg += f' (available: {", ".join(self.available)})'
        super().__init__(msg)
