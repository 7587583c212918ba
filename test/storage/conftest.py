"""Shared fixtures for storage tests."""

from unittest.mock import MagicMock

import pytest

from objstore.storage.endpoint import Endpoint, Scheme
from objstore.storage.s3 import S3Storage
from objstore.storage.wasabi import WasabiStorage


@pytest.fixture
def endpoint() -> Endpoint:
    """Create an endpoint for testing."""
    return Endpoint(
        scheme=Scheme.HTTPS,
        host='s3.us-east-1.example.com',
        bucket='bucket',
        region='us-east-1',
    )


@pytest.fixture
def mock_client() -> MagicMock:
    """Create a stand-in for a boto3 s3 client."""
    return MagicMock()


@pytest.fixture
def s3_storage(mock_client: MagicMock, endpoint: Endpoint) -> S3Storage:
    return S3Storage(mock_client, endpoint)


@pytest.fixture
def wasabi_storage(mock_client: MagicMock, endpoint: Endpoint) -> WasabiStorage:
    return WasabiStorage(mock_client, endpoint)
