"""
Content hashing and the two-stage HMAC-SHA256 key chain.
"""

import base64
import hashlib
import hmac
import logging
from typing import Optional, Union

from .exceptions import SigningError

logger = logging.getLogger(__name__)


def _to_bytes(data: Union[str, bytes]) -> bytes:
    if isinstance(data, bytes):
        return data
    try:
        return data.encode('utf-8')
    except UnicodeEncodeError as e:
        raise SigningError(f"Cannot encode signing input as UTF-8: {e}")


def base64_sha256(data: Union[str, bytes]) -> str:
    """Base64-encoded SHA-256 digest."""
    return base64.b64encode(hashlib.sha256(_to_bytes(data)).digest()).decode('ascii')


def base64_hmac_sha256(data: Union[str, bytes], key: Union[str, bytes]) -> str:
    """Base64-encoded HMAC-SHA256 of ``data`` under ``key``."""
    mac = hmac.new(_to_bytes(key), _to_bytes(data), hashlib.sha256)
    return base64.b64encode(mac.digest()).decode('ascii')


def content_hash(method: str, body: Optional[Union[str, bytes]], max_body: int) -> str:
    """
    Hash the request body for inclusion in the signature.

    Only non-empty POST bodies are hashed; everything else yields ``""``.
    Bodies longer than ``max_body`` bytes are truncated first, matching
    the server's own truncation.

    Args:
        method: HTTP method
        body: Serialized request body
        max_body: Maximum number of bytes to hash

    Returns:
        Base64 SHA-256 of the (possibly truncated) body, or ``""``

    Raises:
        SigningError: If the body has not been serialized to text or bytes
    """
    if body is None:
        return ''
    if not isinstance(body, (str, bytes)):
        raise SigningError(f"Body must be str or bytes, got {type(body).__name__}")

    if method.upper() != 'POST' or not body:
        return ''

    prepared = _to_bytes(body)
    if len(prepared) > max_body:
        logger.debug(
            "Data length (%d) is larger than maximum %d, truncating",
            len(prepared), max_body
        )
        prepared = prepared[:max_body]

    digest = base64_sha256(prepared)
    logger.debug("Body content hash is %s", digest)
    return digest


def signing_key(timestamp: str, client_secret: str) -> str:
    """Derive the per-request key: HMAC of the timestamp under the client secret."""
    return base64_hmac_sha256(timestamp, client_secret)


def sign(data: str, timestamp: str, client_secret: str) -> str:
    """
    Sign canonical request data.

    The base64 text of the derived signing key is the HMAC key; it is not
    decoded back to raw bytes.

    Args:
        data: Canonical request string
        timestamp: EdgeGrid timestamp the key is derived from
        client_secret: Long-lived client secret

    Returns:
        Base64-encoded signature
    """
    return base64_hmac_sha256(data, signing_key(timestamp, client_secret))
