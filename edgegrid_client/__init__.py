"""
EdgeGrid Client Library

A Python client library that signs HTTP API requests with the
EG1-HMAC-SHA256 (EdgeGrid) authentication scheme.

Example usage:
    from edgegrid_client import EdgeGridClient, EdgercCredentialProvider

    client = EdgeGridClient(EdgercCredentialProvider("~/.edgerc", "default"))
    response = client.get("/identity-management/v3/user-profile")
"""

from .auth import (
    SigningContext,
    make_auth_header,
    make_nonce,
    make_timestamp,
    sign_request,
    unsigned_auth_header
)
from .canonical import canonicalize_headers, data_to_sign, encode_query
from .client import EdgeGridClient
from .credentials import (
    CredentialProvider,
    Credentials,
    EdgercCredentialProvider,
    StaticCredentialProvider,
    parse_edgerc,
    validate_credentials
)
from .exceptions import (
    EdgeGridClientError,
    ConfigurationError,
    SigningError,
    HTTPError
)
from .request import (
    RequestOptions,
    SignedRequest,
    UnsignedRequest,
    build_request,
    make_url,
    merge_options
)
from .signing import content_hash, sign, signing_key
from .constants import (
    AUTH_SCHEME,
    HEADER_AUTHORIZATION,
    DEFAULT_CONFIG,
    MAX_BODY
)

__version__ = "1.0.0"
__all__ = [
    "EdgeGridClient",
    "Credentials",
    "CredentialProvider",
    "StaticCredentialProvider",
    "EdgercCredentialProvider",
    "parse_edgerc",
    "validate_credentials",
    "RequestOptions",
    "UnsignedRequest",
    "SignedRequest",
    "build_request",
    "make_url",
    "merge_options",
    "SigningContext",
    "make_timestamp",
    "make_nonce",
    "unsigned_auth_header",
    "make_auth_header",
    "sign_request",
    "canonicalize_headers",
    "encode_query",
    "data_to_sign",
    "content_hash",
    "signing_key",
    "sign",
    "EdgeGridClientError",
    "ConfigurationError",
    "SigningError",
    "HTTPError",
    "AUTH_SCHEME",
    "HEADER_AUTHORIZATION",
    "DEFAULT_CONFIG",
    "MAX_BODY"
]
