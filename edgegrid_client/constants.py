"""
Constants for the EdgeGrid client library.
Values follow the EG1-HMAC-SHA256 wire format.
"""

# Authorization header
HEADER_AUTHORIZATION = "Authorization"
AUTH_SCHEME = "EG1-HMAC-SHA256"

# UTC timestamp, e.g. 20240101T00:00:00+0000
TIMESTAMP_FORMAT = "%Y%m%dT%H:%M:%S+0000"

# Bytes of a POST body covered by the content hash
MAX_BODY = 128 * 1024

# Default configuration values
DEFAULT_CONFIG = {
    'max_body': MAX_BODY,
    'timeout': 30,       # HTTP timeout in seconds
}

# Request defaults applied before signing
DEFAULT_CONTENT_TYPE = "application/json"
DEFAULT_MAX_REDIRECTS = 0

# .edgerc lookup
DEFAULT_SECTION = "default"
DEFAULT_EDGERC = "~/.edgerc"

# Credential fields, in the order missing ones are reported
CREDENTIAL_FIELDS = ('client_token', 'client_secret', 'access_token', 'host')

SUPPORTED_METHODS = ('GET', 'HEAD', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS')
BODYLESS_METHODS = ('GET', 'HEAD')
