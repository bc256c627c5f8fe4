"""
Canonical forms of request parts used in EG1-HMAC-SHA256 signing.

Mapping order is significant everywhere in this module: headers and query
parameters are rendered in iteration order and never sorted.
"""

import math
import re
from typing import Mapping, Optional, Union
from urllib.parse import quote, urlsplit

from .exceptions import SigningError
from .signing import content_hash

_WHITESPACE_RE = re.compile(r'\s+')

# Characters left alone by JavaScript's encodeURIComponent
_QUERY_SAFE = "-_.!~*'()"

QueryValue = Union[str, int, float, bool]


def canonicalize_headers(headers_to_sign: Optional[Mapping[str, str]]) -> str:
    """
    Render headers as tab-separated ``name:value`` pairs.

    Names are lower-cased; values are trimmed with inner whitespace runs
    collapsed to one space.

    Raises:
        SigningError: If a header value is not a string
    """
    if not headers_to_sign:
        return ''

    formatted = []
    for name, value in headers_to_sign.items():
        if not isinstance(value, str):
            raise SigningError(f"Header {name!r} must be a string, got {type(value).__name__}")
        formatted.append(name.lower() + ':' + _WHITESPACE_RE.sub(' ', value.strip()))

    return '\t'.join(formatted)


def _query_value(key, value) -> str:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        if not math.isfinite(value):
            raise SigningError(f"Query parameter {key!r} must be finite, got {value!r}")
        # integral floats render without a fraction, e.g. 1.0 -> "1"
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    if not isinstance(value, (str, int)):
        raise SigningError(
            f"Query parameter {key!r} cannot be encoded: {type(value).__name__}"
        )
    return str(value)


def encode_query(query: Mapping[str, QueryValue]) -> str:
    """
    Render a query mapping as ``key=value`` pairs joined by ``&``.

    Raises:
        SigningError: If a value is not a string, number or boolean
    """
    pairs = []
    for key, value in query.items():
        text = _query_value(key, value)
        try:
            pairs.append(f"{key}={quote(text, safe=_QUERY_SAFE)}")
        except UnicodeEncodeError as e:
            raise SigningError(f"Query parameter {key!r} cannot be encoded: {e}")

    return '&'.join(pairs)


def data_to_sign(request, auth_header: str, max_body: int) -> str:
    """
    Build the canonical request string that gets signed.

    Args:
        request: An ``UnsignedRequest``
        auth_header: Unsigned Authorization header prefix
        max_body: Number of body bytes covered by the content hash

    Returns:
        Seven tab-separated fields: method, scheme, host, path and query,
        canonical headers, content hash, auth header
    """
    parsed = urlsplit(request.url)

    return '\t'.join([
        request.method.upper(),
        parsed.scheme,
        parsed.hostname or '',
        parsed.path + '?' + parsed.query,
        canonicalize_headers(request.headers_to_sign),
        content_hash(request.method, request.body, max_body),
        auth_header,
    ])
