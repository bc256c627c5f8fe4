"""
EG1-HMAC-SHA256 Authorization header assembly.

Every call works on its own ``SigningContext`` and returns a new
``SignedRequest``; nothing is kept between calls.
"""

import datetime
import logging
import uuid
from dataclasses import dataclass, fields
from typing import Optional

from .canonical import data_to_sign
from .constants import AUTH_SCHEME, DEFAULT_CONFIG, HEADER_AUTHORIZATION, TIMESTAMP_FORMAT
from .credentials import Credentials
from .exceptions import SigningError
from .request import SignedRequest, UnsignedRequest
from .signing import sign

logger = logging.getLogger(__name__)


def make_timestamp(now: Optional[datetime.datetime] = None) -> str:
    """
    Format a UTC timestamp as ``YYYYMMDDTHH:MM:SS+0000``.

    Args:
        now: Time to format; defaults to the current time
    """
    if now is None:
        now = datetime.datetime.now(datetime.timezone.utc)
    elif now.tzinfo is not None:
        now = now.astimezone(datetime.timezone.utc)
    return now.strftime(TIMESTAMP_FORMAT)


def make_nonce() -> str:
    """Random UUID v4 in lowercase hyphenated form."""
    return str(uuid.uuid4())


@dataclass(frozen=True)
class SigningContext:
    """Per-request signing inputs. Pin both values for reproducible signatures."""

    timestamp: str
    nonce: str
    max_body: int = DEFAULT_CONFIG['max_body']

    @classmethod
    def create(cls, max_body: int = DEFAULT_CONFIG['max_body']) -> 'SigningContext':
        return cls(timestamp=make_timestamp(), nonce=make_nonce(), max_body=max_body)


def unsigned_auth_header(client_token: str, access_token: str,
                         timestamp: str, nonce: str) -> str:
    """Authorization header up to and including the ``;`` before the signature."""
    pairs = (
        ('client_token', client_token),
        ('access_token', access_token),
        ('timestamp', timestamp),
        ('nonce', nonce),
    )
    joined = ''.join(f"{key}={value};" for key, value in pairs)
    return f"{AUTH_SCHEME} {joined}"


def make_auth_header(request: UnsignedRequest, credentials: Credentials,
                     context: SigningContext) -> str:
    """
    Compute the full Authorization header value.

    Args:
        request: Request to sign
        credentials: Validated credentials
        context: Timestamp, nonce and body limit for this request

    Returns:
        ``EG1-HMAC-SHA256 client_token=...;access_token=...;timestamp=...;nonce=...;signature=...``
    """
    auth_header = unsigned_auth_header(
        credentials.client_token,
        credentials.access_token,
        context.timestamp,
        context.nonce
    )
    data = data_to_sign(request, auth_header, context.max_body)
    signature = sign(data, context.timestamp, credentials.client_secret)

    return f"{auth_header}signature={signature}"


def sign_request(request: UnsignedRequest, credentials: Credentials,
                 context: Optional[SigningContext] = None) -> SignedRequest:
    """
    Sign a request.

    Args:
        request: Request built by ``build_request``
        credentials: Validated credentials
        context: Signing context; a fresh one is created when omitted

    Returns:
        New SignedRequest with the Authorization header set

    Raises:
        SigningError: If credentials are incomplete or the request is malformed
    """
    missing = credentials.missing_fields()
    if missing:
        raise SigningError(f"Cannot sign request, missing: {', '.join(missing)}")

    if context is None:
        context = SigningContext.create()

    authorization = make_auth_header(request, credentials, context)
    logger.debug(
        "Signed %s %s (nonce=%s, timestamp=%s)",
        request.method, request.url, context.nonce, context.timestamp
    )

    headers = dict(request.headers)
    headers[HEADER_AUTHORIZATION] = authorization

    values = {f.name: getattr(request, f.name) for f in fields(request)}
    values['headers'] = headers
    return SignedRequest(**values)
