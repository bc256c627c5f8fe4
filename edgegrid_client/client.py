"""
HTTP client that sends EdgeGrid-signed requests.

This module provides a thin ``requests`` transport around the signing
pipeline: build, sign with a fresh timestamp and nonce, dispatch.
"""

import logging
from typing import Any, Mapping, Optional, Union

import requests

from .auth import SigningContext, sign_request
from .constants import DEFAULT_CONFIG
from .credentials import CredentialProvider, Credentials, validate_credentials
from .exceptions import ConfigurationError, HTTPError
from .request import RequestOptions, SignedRequest, build_request

logger = logging.getLogger(__name__)


class EdgeGridClient:
    """
    Client for making EdgeGrid-authenticated requests.

    Each request is signed with its own timestamp and nonce, so a retried
    call is signed again rather than replayed.
    """

    def __init__(self,
                 credentials: Union[Credentials, CredentialProvider, Mapping[str, str]],
                 **config):
        """
        Initialize EdgeGrid client.

        Args:
            credentials: Credentials, a CredentialProvider, or a mapping
                with client_token, client_secret, access_token and host
            **config: Configuration options (max_body, timeout)
        """
        if isinstance(credentials, CredentialProvider):
            self.credentials = credentials.load()
        else:
            self.credentials = validate_credentials(credentials)

        # Merge default config with user overrides
        self.config = {**DEFAULT_CONFIG, **config}

        # Validate configuration
        self._validate_config()

        # Create HTTP session
        self.session = requests.Session()

    @property
    def base_url(self) -> str:
        return self.credentials.host

    def _validate_config(self):
        """Validate client configuration."""
        unknown = set(self.config) - set(DEFAULT_CONFIG)
        if unknown:
            raise ConfigurationError(f"Unknown configuration option(s): {', '.join(sorted(unknown))}")

        if self.config['max_body'] <= 0:
            raise ConfigurationError("max_body must be positive")

        if self.config['timeout'] <= 0:
            raise ConfigurationError("timeout must be positive")

    def auth(self, options: Union[RequestOptions, Mapping[str, Any], None] = None,
             context: Optional[SigningContext] = None) -> SignedRequest:
        """
        Build and sign a request.

        Args:
            options: Request description merged over the defaults
            context: Pinned signing context; a fresh one is used when omitted

        Returns:
            SignedRequest ready for ``send``

        Raises:
            ConfigurationError: If credentials are incomplete
            SigningError: If the request description is invalid
        """
        request = build_request(self.credentials, options)
        if context is None:
            context = SigningContext.create(max_body=self.config['max_body'])
        return sign_request(request, self.credentials, context)

    def send(self, signed: SignedRequest, **kwargs) -> requests.Response:
        """
        Dispatch a signed request.

        Args:
            signed: Request returned by ``auth``
            **kwargs: Additional requests arguments

        Returns:
            requests.Response object

        Raises:
            HTTPError: If request fails
        """
        kwargs.setdefault('timeout', self.config['timeout'])
        kwargs.setdefault('allow_redirects', signed.max_redirects > 0)

        if signed.body:
            kwargs['data'] = signed.body

        logger.debug("Sending %s %s", signed.method, signed.url)

        try:
            return self.session.request(
                signed.method,
                signed.url,
                headers=dict(signed.headers),
                **kwargs
            )
        except requests.RequestException as e:
            raise HTTPError(f"HTTP request failed: {e}")

    def request(self, method: str, path: str, query=None, headers=None,
                headers_to_sign=None, body=None, **kwargs) -> requests.Response:
        """Sign and send a request."""
        signed = self.auth(RequestOptions(
            method=method,
            path=path,
            query=query,
            headers=headers,
            headers_to_sign=headers_to_sign,
            body=body,
        ))
        return self.send(signed, **kwargs)

    def get(self, path: str, **kwargs) -> requests.Response:
        """Make authenticated GET request."""
        return self.request('GET', path, **kwargs)

    def post(self, path: str, body=None, **kwargs) -> requests.Response:
        """Make authenticated POST request."""
        return self.request('POST', path, body=body, **kwargs)

    def put(self, path: str, body=None, **kwargs) -> requests.Response:
        """Make authenticated PUT request."""
        return self.request('PUT', path, body=body, **kwargs)

    def delete(self, path: str, **kwargs) -> requests.Response:
        """Make authenticated DELETE request."""
        return self.request('DELETE', path, **kwargs)

    def close(self):
        """Close HTTP session."""
        if self.session:
            self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
