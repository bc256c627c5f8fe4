"""
Request model and builder.

Callers describe a request with ``RequestOptions``; ``build_request``
merges it over the defaults, serializes the body and resolves the URL
against the credentials' host.
"""

import json
import logging
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import urljoin

from .canonical import encode_query
from .constants import (
    BODYLESS_METHODS,
    DEFAULT_CONTENT_TYPE,
    DEFAULT_MAX_REDIRECTS,
    SUPPORTED_METHODS
)
from .credentials import Credentials, validate_credentials
from .exceptions import SigningError

logger = logging.getLogger(__name__)

# Fields merged key by key; all others are replaced wholesale.
MAPPING_FIELDS = ('headers', 'query', 'headers_to_sign')


@dataclass
class RequestOptions:
    """
    Caller-supplied request description.

    ``None`` means "not supplied" and leaves the default in place. For
    ``headers``, ``query`` and ``headers_to_sign`` the caller's keys are
    merged over the default keys; the other fields replace the default.
    """

    method: Optional[str] = None
    path: Optional[str] = None
    query: Optional[Mapping[str, Any]] = None
    headers: Optional[Mapping[str, str]] = None
    headers_to_sign: Optional[Mapping[str, str]] = None
    body: Any = None
    max_redirects: Optional[int] = None

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> 'RequestOptions':
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise SigningError(f"Unknown request option(s): {', '.join(unknown)}")
        return cls(**options)


DEFAULT_OPTIONS = RequestOptions(
    method='GET',
    headers={'Content-Type': DEFAULT_CONTENT_TYPE},
    max_redirects=DEFAULT_MAX_REDIRECTS,
)


@dataclass(frozen=True)
class UnsignedRequest:
    """Fully merged request with an absolute URL, ready for signing."""

    method: str
    url: str
    path: str
    query: Optional[Dict[str, Any]] = None
    headers: Dict[str, str] = field(default_factory=dict)
    headers_to_sign: Optional[Dict[str, str]] = None
    body: Optional[Union[str, bytes]] = None
    max_redirects: int = DEFAULT_MAX_REDIRECTS


@dataclass(frozen=True)
class SignedRequest(UnsignedRequest):
    """Request whose headers carry the EdgeGrid Authorization header."""

    @property
    def authorization(self) -> str:
        return self.headers['Authorization']


def merge_options(defaults: RequestOptions,
                  options: Union[RequestOptions, Mapping[str, Any], None]) -> RequestOptions:
    """
    Merge caller options over defaults.

    Mapping fields are merged key by key with default keys first and the
    caller's values winning. Scalar fields are replaced when supplied.
    """
    if options is None:
        options = RequestOptions()
    elif not isinstance(options, RequestOptions):
        options = RequestOptions.from_mapping(options)

    merged = {}
    for f in fields(RequestOptions):
        default = getattr(defaults, f.name)
        value = getattr(options, f.name)

        if f.name not in MAPPING_FIELDS:
            merged[f.name] = default if value is None else value
        elif default is None and value is None:
            merged[f.name] = None
        else:
            # copies, so callers and defaults never share a dict
            merged[f.name] = {**(default or {}), **(value or {})}

    return RequestOptions(**merged)


def serialize_body(body: Any) -> Optional[Union[str, bytes]]:
    """Serialize structured bodies to JSON; text and bytes pass through."""
    if body is None or isinstance(body, (str, bytes)):
        return body

    try:
        return json.dumps(body, separators=(',', ':'))
    except (TypeError, ValueError) as e:
        raise SigningError(f"Body cannot be serialized to JSON: {e}")


def make_url(host: str, path: str, query: Optional[Mapping[str, Any]] = None) -> str:
    """
    Build an absolute URL from the host, path and optional query.

    A path that already has a query string keeps it and ``query`` is not
    applied.
    """
    if query is not None and '?' not in path:
        path = f"{path}?{encode_query(query)}"

    url = urljoin(host + '/', path)
    logger.debug("Built request URL %s", url)
    return url


def build_request(credentials: Union[Credentials, Mapping[str, str]],
                  options: Union[RequestOptions, Mapping[str, Any], None] = None,
                  defaults: RequestOptions = DEFAULT_OPTIONS) -> UnsignedRequest:
    """
    Assemble an unsigned request.

    Args:
        credentials: Credentials or a mapping of credential fields
        options: Caller request description
        defaults: Options the caller's values are merged over

    Returns:
        UnsignedRequest with serialized body and absolute URL

    Raises:
        ConfigurationError: If credential fields are missing
        SigningError: If the request description is invalid
    """
    credentials = validate_credentials(credentials)
    merged = merge_options(defaults, options)

    if not merged.path:
        raise SigningError("Request path is required")

    method = (merged.method or '').upper()
    if method not in SUPPORTED_METHODS:
        raise SigningError(f"Unsupported HTTP method: {merged.method!r}")

    body = serialize_body(merged.body)
    if body and method in BODYLESS_METHODS:
        raise SigningError(f"{method} requests cannot carry a body")

    # signed headers must also be sent; explicit headers take precedence
    headers = dict(merged.headers or {})
    present = {name.lower() for name in headers}
    for name, value in (merged.headers_to_sign or {}).items():
        if name.lower() not in present:
            headers[name] = value

    return UnsignedRequest(
        method=method,
        url=make_url(credentials.host, merged.path, merged.query),
        path=merged.path,
        query=merged.query,
        headers=headers,
        headers_to_sign=merged.headers_to_sign,
        body=body,
        max_redirects=merged.max_redirects,
    )
