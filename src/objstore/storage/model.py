"""Abstract base class and data types for storage backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum, auto

from objstore.util.errors import NotSupportedError

Revision = str | None
"""Type alias for object revision identifiers (ETags for S3 backends)."""


@dataclass
class StatResult:
    """Dataclass representing object metadata."""

    size: int | None
    """The object size in bytes, `None` if unknown."""
    revision: Revision = None
    """The object revision identifier."""
    mtime: float | None = None
    """The object modification time as a Unix timestamp, `None` if unknown."""
    storage_class: str | None = None
    """The storage class the object is stored with, if the backend reports it."""


@dataclass
class ObjectInfo:
    """An entry of an object listing."""

    key: str
    size: int = 0
    revision: Revision = None
    mtime: float | None = None
    is_dir: bool = False
    """Whether the entry is a common prefix rather than an object."""


class OpStatus(StrEnum):
    """Outcome of an operation that a backend may not support."""

    OK = auto()
    NOT_SUPPORTED = auto()


@dataclass(frozen=True)
class OpResult:
    """Result of an operation that a backend may legitimately reject.

    Real failures are raised as exceptions. An ``OpResult`` only distinguishes
    "done" from "meaningless for this backend", so callers can treat the latter
    as a normal negative answer.
    """

    status: OpStatus
    operation: str
    backend: str
    detail: str | None = None

    @classmethod
    def ok(cls, operation: str, backend: str, detail: str | None = None) -> OpResult:
        return cls(OpStatus.OK, operation, backend, detail)

    @classmethod
    def not_supported(cls, operation: str, backend: str, detail: str | None = None) -> OpResult:
        return cls(OpStatus.NOT_SUPPORTED, operation, backend, detail)

    @property
    def supported(self) -> bool:
        return self.status is OpStatus.OK

    def raise_for_status(self) -> None:
        """Raise if the operation was not supported.

        :raises NotSupportedError: If the status is ``NOT_SUPPORTED``.
        """
        if self.status is OpStatus.NOT_SUPPORTED:
            raise NotSupportedError(self.operation, self.backend)


class Storage(ABC):
    """Abstract base class for bucket-scoped storage backends.

    A ``Storage`` instance is bound to a single bucket, every location it takes
    is an object key inside that bucket. Backends must either implement each
    operation or reject it explicitly, never silently do nothing.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The name of the storage backend.

        :return: The name of the storage backend.
        :rtype: str
        """

    @abstractmethod
    def __str__(self) -> str:
        """Identify the backend and bucket as ``<scheme>://<bucket>/``."""

    @abstractmethod
    def stat(self, key: str) -> StatResult:
        """Get metadata for an object.

        :param key: The object key.
        :type key: str
        :return: A :class:`StatResult` object containing the object metadata.
        :rtype: :class:`StatResult`
        :raises NotFoundError: If the object does not exist.
        """

    @abstractmethod
    def read(self, key: str) -> tuple[bytes, Revision]:
        """Read the contents of an object.

        :param key: The object key.
        :type key: str
        :return: A tuple of (object contents as bytes, object revision).
        :rtype: tuple[bytes, Revision]
        :raises NotFoundError: If the object does not exist.
        :raises TimeoutError: If the read operation times out.
        """

    def read_text(self, key: str, encoding: str = 'utf-8') -> tuple[str, Revision]:
        """Read the contents of an object as text.

        :param key: The object key.
        :type key: str
        :param encoding: The text encoding. Defaults to 'utf-8'.
        :type encoding: str
        :return: A tuple of (object contents as a string, object revision).
        :rtype: tuple[str, Revision]
        :raises NotFoundError: If the object does not exist.
        """
        data, revision = self.read(key)
        return data.decode(encoding), revision

    @abstractmethod
    def write(self, key: str, data: bytes) -> Revision:
        """Write data to an object, replacing it if it exists.

        :param key: The object key.
        :type key: str
        :param data: The data to write.
        :type data: bytes
        :return: The revision of the written object.
        :rtype: Revision
        """

    def write_text(self, key: str, data: str, *, encoding: str = 'utf-8') -> Revision:
        """Write text to an object.

        :param key: The object key.
        :type key: str
        :param data: The text to write.
        :type data: str
        :param encoding: (keyword-only) The text encoding. Defaults to 'utf-8'.
        :type encoding: str
        :return: The revision of the written object.
        :rtype: Revision
        """
        return self.write(key, data.encode(encoding))

    @abstractmethod
    def delete(self, key: str) -> None:
        """Delete an object.

        Deleting an object that does not exist is not an error.

        :param key: The object key.
        :type key: str
        """

    @abstractmethod
    def list_objects(
        self,
        prefix: str = '',
        *,
        delimiter: str | None = None,
        limit: int | None = None,
    ) -> list[ObjectInfo]:
        """List objects under a prefix.

        With a delimiter, keys sharing a prefix up to the delimiter are folded
        into a single entry with ``is_dir`` set.

        :param prefix: The key prefix.
        :type prefix: str
        :param delimiter: (keyword-only) Fold keys on this delimiter.
        :type delimiter: str | None
        :param limit: (keyword-only) Stop after this many entries.
        :type limit: int | None
        :return: The entries, in key order.
        :rtype: list[ObjectInfo]
        """

    @abstractmethod
    def glob(self, prefix: str, pattern: str = '*') -> list[str]:
        """List object keys matching a glob pattern under a prefix.

        :param prefix: The key prefix, treated as a folder.
        :type prefix: str
        :param pattern: The pattern to match for.
        :type pattern: str
        :return: A list of object keys.
        :rtype: list[str]
        """

    @abstractmethod
    def copy_within(self, src: str, dst: str) -> Revision:
        """Copy an object inside the bucket without downloading it.

        :param src: The source key.
        :type src: str
        :param dst: The destination key.
        :type dst: str
        :return: The revision of the copied object.
        :rtype: Revision
        :raises NotFoundError: If the source object does not exist.
        """

    @abstractmethod
    def set_storage_class(self, storage_class: str) -> OpResult:
        """Set the storage class used for objects written from now on.

        :param storage_class: The provider specific storage class name.
        :type storage_class: str
        :return: ``OK`` if applied, ``NOT_SUPPORTED`` if the backend has no
            storage classes.
        :rtype: OpResult
        """


StorageConstructor = Callable[[str, str, str, str], Storage]
"""Builds a storage backend from ``(endpoint, access_key, secret_key, token)``."""
