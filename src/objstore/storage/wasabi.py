"""Wasabi storage class."""
# ruff: noqa: D102 # docstring inheritance

from __future__ import annotations

from loguru import logger

from objstore.storage.endpoint import parse_virtual_hosted
from objstore.storage.model import OpResult
from objstore.storage.s3 import S3Storage, build_client

REGION_LABEL = 2
"""Wasabi endpoints are ``<bucket>.s3.<region>.wasabisys.com``."""


class WasabiStorage(S3Storage):
    """Wasabi storage class.

    Wasabi speaks the S3 protocol with a single storage tier, so storage
    classes are rejected.
    """

    scheme = 'wasabi'

    @property
    def name(self) -> str:
        return 'Wasabi'

    def set_storage_class(self, storage_class: str) -> OpResult:
        return OpResult.not_supported(
            'set_storage_class',
            self.name,
            f'{self.name} has no storage classes, ignoring {storage_class!r}',
        )


def new_wasabi(endpoint: str, access_key: str, secret_key: str, token: str) -> WasabiStorage:
    """Create a Wasabi storage backend.

    The endpoint is virtual-hosted, ``[scheme://]<bucket>.s3.<region>.wasabisys.com``;
    requests go to the same host without the bucket label. The client:

    * uses only the given static credentials.
    * addresses the bucket through the virtual host.
    * sends ``UNSIGNED-PAYLOAD`` instead of hashing request bodies into the
      signature, which Wasabi accepts.
    * makes a single attempt per request, retrying is up to the caller.

    :param endpoint: The bucket endpoint.
    :type endpoint: str
    :param access_key: The access key id.
    :type access_key: str
    :param secret_key: The secret access key.
    :type secret_key: str
    :param token: The session token, may be empty.
    :type token: str
    :return: The storage backend.
    :rtype: WasabiStorage
    :raises InvalidEndpointError: If the endpoint can not be parsed.
    :raises ConfigLoadError: If the client configuration can not be assembled.
    """
    parsed = parse_virtual_hosted(endpoint, region_label=REGION_LABEL)
    client = build_client(
        parsed,
        access_key,
        secret_key,
        token,
        addressing_style='virtual',
        payload_signing=False,
        max_attempts=1,
    )
    storage = WasabiStorage(client, parsed)
    logger.debug(f'created {storage} at {parsed.url} in region {parsed.region}')
    return storage
