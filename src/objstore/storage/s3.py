"""S3 protocol storage class."""
# ruff: noqa: D102 # docstring inheritance

from __future__ import annotations

from fnmatch import fnmatchcase
from typing import TYPE_CHECKING, Any

from boto3.session import Session
from botocore import UNSIGNED
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError, ConnectTimeoutError, ReadTimeoutError
from loguru import logger

from objstore.storage.endpoint import Endpoint, has_path, parse_path_style, parse_virtual_hosted
from objstore.storage.model import ObjectInfo, OpResult, Revision, StatResult, Storage
from objstore.util.errors import ConfigLoadError, NotFoundError, StorageError
from objstore.util.util import split_glob

if TYPE_CHECKING:
    from botocore.client import BaseClient

REQUEST_TIMEOUT = 60
CONNECT_TIMEOUT = 10
MAX_POOL_CONNECTIONS = 64
NOT_FOUND_CODES = frozenset({'404', 'NoSuchKey', 'NotFound'})

HTTP_CONFIG = Config(
    connect_timeout=CONNECT_TIMEOUT,
    read_timeout=REQUEST_TIMEOUT,
    max_pool_connections=MAX_POOL_CONNECTIONS,
    tcp_keepalive=True,
)
"""Transport settings shared by every client built here."""


def build_client(
    endpoint: Endpoint,
    access_key: str,
    secret_key: str,
    token: str = '',
    *,
    addressing_style: str = 'virtual',
    payload_signing: bool | None = None,
    max_attempts: int | None = None,
) -> BaseClient:
    """Build a boto3 s3 client for an endpoint from static credentials.

    Credentials are never discovered from the environment. Empty keys build an
    anonymous client that sends unsigned requests.

    :param endpoint: The parsed endpoint.
    :type endpoint: Endpoint
    :param access_key: The access key id.
    :type access_key: str
    :param secret_key: The secret access key.
    :type secret_key: str
    :param token: The session token, empty for long-lived credentials.
    :type token: str
    :param addressing_style: (keyword-only) ``virtual`` or ``path``.
    :type addressing_style: str
    :param payload_signing: (keyword-only) Whether to hash request bodies into
        the signature, ``False`` sends ``UNSIGNED-PAYLOAD`` with plain bodies
        and only computes checksums where an operation requires them. ``None``
        keeps botocore's default.
    :type payload_signing: bool | None
    :param max_attempts: (keyword-only) Total attempts per request, including
        the first one. ``None`` keeps botocore's default.
    :type max_attempts: int | None
    :return: The client.
    :rtype: BaseClient
    :raises ConfigLoadError: If botocore can not assemble the configuration.
    """
    s3_options: dict[str, Any] = {'addressing_style': addressing_style}
    if payload_signing is not None:
        s3_options['payload_signing_enabled'] = payload_signing

    retries: dict[str, Any] = {'mode': 'standard'}
    if max_attempts is not None:
        retries['total_max_attempts'] = max_attempts

    client_config = Config(s3=s3_options, retries=retries)
    if payload_signing is False:
        # default checksums would send aws-chunked bodies with a trailer instead
        client_config = client_config.merge(
            Config(request_checksum_calculation='when_required', response_checksum_validation='when_required')
        )
    anonymous = not access_key and not secret_key
    if anonymous:
        client_config = client_config.merge(Config(signature_version=UNSIGNED))

    try:
        if anonymous:
            session = Session()
        else:
            session = Session(
                aws_access_key_id=access_key,
                aws_secret_access_key=secret_key,
                aws_session_token=token or None,
            )
        client = session.client(
            's3',
            region_name=endpoint.region,
            endpoint_url=endpoint.url,
            use_ssl=endpoint.ssl,
            config=HTTP_CONFIG.merge(client_config),
        )
    except (BotoCoreError, ValueError) as e:
        raise ConfigLoadError(f'failed to load config for {endpoint.url}: {e}') from e

    logger.trace(f'built s3 client for {endpoint.url} in {endpoint.region} ({addressing_style} addressing)')
    return client


def _error_code(e: ClientError) -> str:
    return str(e.response.get('Error', {}).get('Code', ''))


def _etag(resp: dict[str, Any]) -> Revision:
    etag = resp.get('ETag')
    return etag.strip('"') if etag else None


class S3Storage(Storage):
    """S3 protocol storage class.

    Wraps a boto3 client bound to a single bucket. Providers speaking the S3
    protocol subclass it to change how they identify themselves and which
    operations they reject.

    :ivar endpoint: The parsed endpoint the client was built from.
    :vartype endpoint: Endpoint
    """

    scheme = 's3'
    """Scheme used to identify the backend."""

    def __init__(self, client: BaseClient, endpoint: Endpoint) -> None:
        self._client = client
        self.endpoint = endpoint
        self._storage_class: str | None = None

    @property
    def name(self) -> str:
        return 'S3 Storage'

    @property
    def bucket(self) -> str:
        return self.endpoint.bucket

    @property
    def client(self) -> BaseClient:
        return self._client

    @property
    def storage_class(self) -> str | None:
        """The storage class new objects are written with, ``None`` for the default."""
        return self._storage_class

    def __str__(self) -> str:
        return f'{self.scheme}://{self.bucket}/'

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.endpoint!r})'

    def _translate(self, e: Exception, key: str, action: str) -> Exception:
        if isinstance(e, (ReadTimeoutError, ConnectTimeoutError)):
            return TimeoutError(f'timeout {action} {self}{key}: {e}')
        if isinstance(e, ClientError) and _error_code(e) in NOT_FOUND_CODES:
            return NotFoundError(thing=f'{self}{key}')
        return StorageError(f'error {action} {self}{key}: {e}')

    def _write_args(self) -> dict[str, str]:
        if self._storage_class:
            return {'StorageClass': self._storage_class}
        return {}

    def stat(self, key: str) -> StatResult:
        try:
            resp = self._client.head_object(Bucket=self.bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            raise self._translate(e, key, 'getting metadata for')

        logger.trace(f'got metadata for {self}{key}')
        last_modified = resp.get('LastModified')
        return StatResult(
            size=resp.get('ContentLength'),
            revision=_etag(resp),
            mtime=last_modified.timestamp() if last_modified else None,
            storage_class=resp.get('StorageClass'),
        )

    def read(self, key: str) -> tuple[bytes, Revision]:
        try:
            resp = self._client.get_object(Bucket=self.bucket, Key=key)
            data = resp['Body'].read()
        except (BotoCoreError, ClientError) as e:
            raise self._translate(e, key, 'reading')

        logger.debug(f'downloaded {self}{key}')
        return data, _etag(resp)

    def write(self, key: str, data: bytes) -> Revision:
        try:
            resp = self._client.put_object(Bucket=self.bucket, Key=key, Body=data, **self._write_args())
        except (BotoCoreError, ClientError) as e:
            raise self._translate(e, key, 'uploading to')

        logger.debug(f'uploaded {len(data)} bytes to {self}{key}')
        return _etag(resp)

    def delete(self, key: str) -> None:
        try:
            self._client.delete_object(Bucket=self.bucket, Key=key)
        except ClientError as e:
            if _error_code(e) in NOT_FOUND_CODES:
                logger.debug(f'{self}{key} already gone')
                return
            raise self._translate(e, key, 'deleting')
        except BotoCoreError as e:
            raise self._translate(e, key, 'deleting')
        logger.debug(f'deleted {self}{key}')

    def list_objects(
        self,
        prefix: str = '',
        *,
        delimiter: str | None = None,
        limit: int | None = None,
    ) -> list[ObjectInfo]:
        params: dict[str, Any] = {'Bucket': self.bucket, 'Prefix': prefix}
        if delimiter:
            params['Delimiter'] = delimiter
        if limit is not None:
            params['PaginationConfig'] = {'MaxItems': limit}

        entries: list[ObjectInfo] = []
        try:
            for page in self._client.get_paginator('list_objects_v2').paginate(**params):
                for obj in page.get('Contents', []):
                    last_modified = obj.get('LastModified')
                    entries.append(
                        ObjectInfo(
                            key=obj['Key'],
                            size=obj.get('Size', 0),
                            revision=_etag(obj),
                            mtime=last_modified.timestamp() if last_modified else None,
                        )
                    )
                entries.extend(ObjectInfo(key=p['Prefix'], is_dir=True) for p in page.get('CommonPrefixes', []))
        except (BotoCoreError, ClientError) as e:
            raise self._translate(e, prefix, 'listing')

        entries.sort(key=lambda entry: entry.key)
        if limit is not None:
            entries = entries[:limit]
        logger.trace(f'listed {len(entries)} entries under {self}{prefix}')
        return entries

    def glob(self, prefix: str, pattern: str = '*') -> list[str]:
        if prefix and not prefix.endswith('/'):
            prefix = f'{prefix}/'
        full_pattern = f'{prefix}{pattern}'
        literal, rest = split_glob(full_pattern)

        keys = [entry.key for entry in self.list_objects(literal)]
        if rest:
            # wildcards stay within one folder level unless the pattern uses **
            depth = full_pattern.count('/')
            recursive = '**' in rest
            keys = [k for k in keys if (recursive or k.count('/') == depth) and fnmatchcase(k, full_pattern)]

        if not keys:
            logger.warning(f'no files found matching glob {self}{full_pattern}')
        return keys

    def copy_within(self, src: str, dst: str) -> Revision:
        try:
            resp = self._client.copy_object(
                Bucket=self.bucket,
                Key=dst,
                CopySource={'Bucket': self.bucket, 'Key': src},
                **self._write_args(),
            )
        except (BotoCoreError, ClientError) as e:
            raise self._translate(e, src, f'copying to {dst} from')

        logger.debug(f'copied {self}{src} to {self}{dst}')
        return _etag(resp.get('CopyObjectResult', {}))

    def set_storage_class(self, storage_class: str) -> OpResult:
        self._storage_class = storage_class or None
        logger.debug(f'{self} storage class set to {self._storage_class or "default"}')
        return OpResult.ok('set_storage_class', self.name, storage_class)


def new_s3(endpoint: str, access_key: str, secret_key: str, token: str) -> S3Storage:
    """Create an S3 storage backend.

    Endpoints with a path, like ``http://minio.local:9000/mybucket``, are
    addressed path style with the default region. Anything else is read as a
    virtual-hosted endpoint, ``mybucket.s3.eu-west-1.amazonaws.com``, with the
    region in the third host label.

    Any path switches to path style, whatever the host looks like: the first
    path segment is the bucket, so ``mybucket.s3.eu-west-1.amazonaws.com/prefix``
    addresses bucket ``prefix`` on host ``mybucket.s3.eu-west-1.amazonaws.com``.
    Virtual-hosted endpoints must not carry a path.

    :param endpoint: The bucket endpoint.
    :type endpoint: str
    :param access_key: The access key id.
    :type access_key: str
    :param secret_key: The secret access key.
    :type secret_key: str
    :param token: The session token, may be empty.
    :type token: str
    :return: The storage backend.
    :rtype: S3Storage
    :raises InvalidEndpointError: If the endpoint can not be parsed.
    :raises ConfigLoadError: If the client configuration can not be assembled.
    """
    if has_path(endpoint):
        parsed = parse_path_style(endpoint)
        addressing_style = 'path'
    else:
        parsed = parse_virtual_hosted(endpoint, region_label=2)
        addressing_style = 'virtual'

    client = build_client(parsed, access_key, secret_key, token, addressing_style=addressing_style)
    storage = S3Storage(client, parsed)
    logger.debug(f'created {storage} at {parsed.url} in region {parsed.region}')
    return storage
