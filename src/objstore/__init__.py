"""Pluggable object storage backends selected by name."""

from objstore.storage.registry import BUILTIN_BACKENDS, BackendDescriptor, StorageRegistry, default_registry

__all__ = [
    'BUILTIN_BACKENDS',
    'BackendDescriptor',
    'StorageRegistry',
    'default_registry',
]
