"""Endpoint parsing for object storage providers.

Users configure a bucket with a single endpoint string. Providers embed the
bucket, and sometimes the region, in it in different ways, so each provider
picks the parser matching its convention:

* virtual-hosted style, ``[scheme://]<bucket>.<service>.<region>.<domain>``,
  handled by :func:`parse_virtual_hosted`.
* path style, ``scheme://<host>[:port]/<bucket>``, handled by
  :func:`parse_path_style`.

Endpoint strings are persisted in user configuration, so the parsing rules
here must not change in a way that reads an existing string differently.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from urllib.parse import SplitResult, urlsplit

from loguru import logger

from objstore.util.errors import InvalidEndpointError

DEFAULT_SCHEME = 'https'
DEFAULT_REGION = 'us-east-1'
HOST_RE = re.compile(r'^(?:[A-Za-z0-9._-]+|\[[0-9A-Fa-f:.]+\])(?::[0-9]+)?$')


class Scheme(StrEnum):
    """Schemes an endpoint can use."""

    HTTP = 'http'
    HTTPS = 'https'


@dataclass(frozen=True)
class Endpoint:
    """A parsed endpoint.

    ``host`` is the provider host requests are sent to, with the bucket label
    already removed for virtual-hosted endpoints. It keeps the port if the user
    gave one.
    """

    scheme: Scheme
    host: str
    bucket: str
    region: str

    @property
    def ssl(self) -> bool:
        return self.scheme is Scheme.HTTPS

    @property
    def url(self) -> str:
        """The base url of the provider, ``<scheme>://<host>``."""
        return f'{self.scheme}://{self.host}'


def normalize_scheme(raw: str) -> str:
    """Prefix ``https://`` to an endpoint that has no scheme.

    :param raw: The endpoint as given by the user.
    :type raw: str
    :return: The endpoint with a scheme.
    :rtype: str
    """
    if '://' not in raw:
        return f'{DEFAULT_SCHEME}://{raw}'
    return raw


def _host(uri: SplitResult) -> str:
    # drop any userinfo, keep host[:port] as typed
    return uri.netloc.rsplit('@', 1)[-1]


def _split(raw: str) -> tuple[Scheme, SplitResult]:
    if not raw or not raw.strip():
        raise InvalidEndpointError(raw, 'endpoint is empty')

    endpoint = normalize_scheme(raw.strip())
    try:
        uri = urlsplit(endpoint)
        # the port is parsed lazily, force it so bad ports fail here
        uri.port  # noqa: B018
    except ValueError as e:
        raise InvalidEndpointError(raw, str(e))

    try:
        scheme = Scheme(uri.scheme.lower())
    except ValueError:
        raise InvalidEndpointError(raw, f'unsupported scheme {uri.scheme!r}')

    if not uri.hostname:
        raise InvalidEndpointError(raw, 'missing host')
    if not HOST_RE.match(_host(uri)):
        raise InvalidEndpointError(raw, f'invalid host {_host(uri)!r}')
    return scheme, uri


def parse_virtual_hosted(raw: str, *, region_label: int = 2) -> Endpoint:
    """Parse a virtual-hosted style endpoint.

    The first label of the host is the bucket name, label ``region_label`` is
    the region. This is a provider convention, not a general url rule: Wasabi
    and AWS both put the region in the third label, as in
    ``mybucket.s3.us-east-1.wasabisys.com``. The provider host is the original
    host without the bucket label and the dot after it.

    >>> e = parse_virtual_hosted('mybucket.s3.us-east-1.example.com')
    >>> e.bucket, e.region, e.url
    ('mybucket', 'us-east-1', 'https://s3.us-east-1.example.com')

    :param raw: The endpoint as given by the user, with or without a scheme.
    :type raw: str
    :param region_label: (keyword-only) Index of the host label holding the region.
    :type region_label: int
    :return: The parsed endpoint.
    :rtype: Endpoint
    :raises InvalidEndpointError: If the endpoint can not be parsed, or the host
        has too few labels for the bucket and region convention.
    """
    scheme, uri = _split(raw)
    host = _host(uri)
    labels = host.split('.')

    if len(labels) <= region_label:
        raise InvalidEndpointError(
            raw,
            f'expected at least {region_label + 1} host labels (bucket and region), got {len(labels)}',
        )

    bucket = labels[0]
    region = labels[region_label].split(':', 1)[0]
    if not bucket:
        raise InvalidEndpointError(raw, 'empty bucket label')
    if not region:
        raise InvalidEndpointError(raw, 'empty region label')

    endpoint = Endpoint(
        scheme=scheme,
        host=host[len(bucket) + 1 :],
        bucket=bucket,
        region=region,
    )
    logger.trace(f'parsed virtual-hosted endpoint {raw}: {endpoint}')
    return endpoint


def parse_path_style(raw: str, *, default_region: str = DEFAULT_REGION) -> Endpoint:
    """Parse a path style endpoint.

    The host is used as is and the bucket is the first path segment, as in
    ``http://minio.local:9000/mybucket``. Path style hosts carry no region, so
    ``default_region`` is used.

    :param raw: The endpoint as given by the user, with or without a scheme.
    :type raw: str
    :param default_region: (keyword-only) The region to report.
    :type default_region: str
    :return: The parsed endpoint.
    :rtype: Endpoint
    :raises InvalidEndpointError: If the endpoint can not be parsed or has no bucket.
    """
    scheme, uri = _split(raw)
    bucket = uri.path.strip('/').split('/', 1)[0]
    if not bucket:
        raise InvalidEndpointError(raw, 'missing bucket in path')

    endpoint = Endpoint(
        scheme=scheme,
        host=_host(uri),
        bucket=bucket,
        region=default_region,
    )
    logger.trace(f'parsed path style endpoint {raw}: {endpoint}')
    return endpoint


def has_path(raw: str) -> bool:
    """Tell whether an endpoint carries a path after its host.

    :param raw: The endpoint as given by the user, with or without a scheme.
    :type raw: str
    :return: ``True`` if there is a non-empty path.
    :rtype: bool
    """
    try:
        return bool(urlsplit(normalize_scheme(raw.strip())).path.strip('/'))
    except ValueError:
        return False
