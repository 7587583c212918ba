"""Registry for storage backends."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from threading import Lock

from loguru import logger

from objstore.storage.model import Storage, StorageConstructor
from objstore.storage.s3 import new_s3
from objstore.storage.wasabi import new_wasabi
from objstore.util.errors import UnknownBackendError


@dataclass(frozen=True)
class BackendDescriptor:
    """A storage backend name bound to the function that builds it."""

    name: str
    constructor: StorageConstructor


class StorageRegistry:
    """Registry that maps backend names to storage constructors.

    Names are case insensitive. A name can only be registered once, the
    registry is meant to be filled at startup and then only read.

    When a new storage backend is written, a :class:`BackendDescriptor` for it
    must be added to ``BUILTIN_BACKENDS`` (or passed to the registry by the
    application) to be usable by name.
    """

    def __init__(self, descriptors: Iterable[BackendDescriptor] = ()) -> None:
        self._lock = Lock()
        self._constructors: dict[str, StorageConstructor] = {}
        for descriptor in descriptors:
            self.register(descriptor.name, descriptor.constructor)

    @staticmethod
    def _key(name: str) -> str:
        return name.strip().lower()

    def register(self, name: str, constructor: StorageConstructor) -> None:
        """Register a storage backend constructor.

        :param name: The backend name.
        :type name: str
        :param constructor: The function building the backend.
        :type constructor: StorageConstructor
        :raises ValueError: If the name is empty or already registered.
        """
        key = self._key(name)
        if not key:
            raise ValueError('backend name must be a non-empty string')
        with self._lock:
            if key in self._constructors:
                raise ValueError(f'storage backend {key!r} is already registered')
            self._constructors[key] = constructor
        logger.trace(f'registered storage backend {key}')

    def lookup(self, name: str) -> StorageConstructor | None:
        """Get the constructor registered for a name.

        :param name: The backend name.
        :type name: str
        :return: The constructor, or ``None`` if there is none.
        :rtype: StorageConstructor | None
        """
        with self._lock:
            return self._constructors.get(self._key(name))

    def names(self) -> list[str]:
        """List the registered backend names, sorted."""
        with self._lock:
            return sorted(self._constructors)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.lookup(name) is not None

    def create(
        self,
        name: str,
        endpoint: str,
        access_key: str = '',
        secret_key: str = '',
        token: str = '',
    ) -> Storage:
        """Build the storage backend registered for a name.

        :param name: The backend name.
        :type name: str
        :param endpoint: The bucket endpoint.
        :type endpoint: str
        :param access_key: The access key id.
        :type access_key: str
        :param secret_key: The secret access key.
        :type secret_key: str
        :param token: The session token, may be empty.
        :type token: str
        :return: The storage backend.
        :rtype: Storage
        :raises UnknownBackendError: If nothing is registered for the name.
        :raises InvalidEndpointError: If the endpoint can not be parsed.
        :raises ConfigLoadError: If the client configuration can not be assembled.
        """
        constructor = self.lookup(name)
        if constructor is None:
            raise UnknownBackendError(name, self.names())
        return constructor(endpoint, access_key, secret_key, token)

    def __repr__(self) -> str:
        return f'StorageRegistry(backends={self.names()})'


BUILTIN_BACKENDS: tuple[BackendDescriptor, ...] = (
    BackendDescriptor('s3', new_s3),
    BackendDescriptor('wasabi', new_wasabi),
)


def default_registry() -> StorageRegistry:
    """Create a registry holding the built-in backends.

    :return: A new registry.
    :rtype: StorageRegistry
    """
    return StorageRegistry(BUILTIN_BACKENDS)
