"""
Shared fixtures for EdgeGrid client tests.
"""

import pytest

from edgegrid_client import Credentials, SigningContext

HOST = "akab-test.luna.akamaiapis.net"
TIMESTAMP = "20240101T00:00:00+0000"
NONCE = "00000000-0000-4000-8000-000000000000"


@pytest.fixture
def credentials():
    """Validated test credentials."""
    return Credentials(
        host=f"https://{HOST}",
        client_token="akab-client-token",
        client_secret="test-client-secret",
        access_token="akab-access-token",
    )


@pytest.fixture
def context():
    """Signing context with pinned timestamp and nonce."""
    return SigningContext(timestamp=TIMESTAMP, nonce=NONCE)
