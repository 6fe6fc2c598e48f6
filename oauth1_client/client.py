"""
OAuth 1.0 client built on requests.

This module sends signed ``OAuthRequest`` objects over HTTP. All
signing happens in the request itself; the client only checks that the
request is usable, materializes it and hands it to a requests session.
"""

import logging
from typing import Optional

import requests

from .constants import (
    DEFAULT_CONFIG,
    FORM_URLENCODED,
    HTTP_GET,
    HTTP_POST,
)
from .exceptions import (
    ConfigurationError,
    HTTPError,
    RequestEndpointError,
    RequestError,
    RequestTimeoutError,
    RequestValidationError,
)
from .nonce import NonceGenerator
from .parameters import ParameterSource
from .request import OAuthRequest, SigningCredentials, valid_endpoint

logger = logging.getLogger(__name__)


class OAuthClient:
    """
    OAuth client for sending signed requests.

    The client owns a default ``requests.Session`` unless one is given,
    in which case the caller stays responsible for closing it.
    """

    def __init__(self,
                 credentials: Optional[SigningCredentials] = None,
                 session: Optional[requests.Session] = None,
                 nonce_generator: Optional[NonceGenerator] = None,
                 **config):
        """
        Initialize OAuth client.

        Args:
            credentials: Credentials used by get()/post()/create_request()
            session: Externally owned requests session
            nonce_generator: Nonce source for requests created by the client
            **config: Configuration options (timeout)
        """
        self.credentials = credentials
        self.nonce_generator = nonce_generator

        # Merge default config with user overrides
        self.config = {**DEFAULT_CONFIG, **config}

        # Validate configuration
        self._validate_config()

        self.session: Optional[requests.Session] = None
        self._owns_session = False
        if session is not None:
            self.set_session(session)
        else:
            self.session = requests.Session()
            self._owns_session = True

    def _validate_config(self):
        """Validate client configuration."""
        timeout = self.config['timeout']
        if not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ConfigurationError("timeout must be a positive number")

    @property
    def owns_session(self) -> bool:
        return self._owns_session

    def set_session(self, session: requests.Session):
        """
        Use an externally owned session for network requests.

        A previously owned session is closed. A borrowed one is left
        to its owner.
        """
        if session is None:
            raise ConfigurationError("session cannot be None")

        if self._owns_session and self.session is not None:
            self.session.close()

        self.session = session
        self._owns_session = False

    def create_request(self,
                       endpoint: str,
                       method: str = HTTP_POST,
                       params: Optional[ParameterSource] = None,
                       content_type: str = FORM_URLENCODED,
                       raw_data: Optional[bytes] = None,
                       timeout: Optional[float] = None) -> OAuthRequest:
        """
        Create an initialized request carrying the client credentials.

        Raises:
            ConfigurationError: If the client has no credentials
            RequestEndpointError: If the endpoint is not valid
        """
        if self.credentials is None:
            raise ConfigurationError("client has no signing credentials")

        request = OAuthRequest(self.nonce_generator)
        request.init_request(endpoint)
        request.set_credentials(self.credentials)
        request.http_method = method
        request.content_type = content_type
        if raw_data is not None:
            request.raw_data = raw_data
        if params:
            request.set_additional_parameters(params)
        if timeout is not None:
            request.timeout = timeout
        return request

    def execute_request(self, request: OAuthRequest) -> requests.Response:
        """
        Sign and send a request.

        Args:
            request: Initialized request with credentials

        Returns:
            requests.Response object

        Raises:
            RequestError: If no request is given
            RequestEndpointError: If the request endpoint is not valid
            RequestValidationError: If the request is missing credentials
            RequestTimeoutError: If the request times out
            HTTPError: If request fails
        """
        if request is None:
            logger.warning("Request is None, cannot proceed")
            raise RequestError("no request given")

        if not valid_endpoint(request.endpoint):
            logger.warning("Request endpoint URL is not valid, cannot proceed")
            raise RequestEndpointError(f"Invalid request endpoint: {request.endpoint!r}")

        if not request.is_valid():
            logger.warning("Request is not valid, cannot proceed")
            raise RequestValidationError(
                f"Request is missing required fields: {', '.join(request.missing_fields())}"
            )

        signed = request.sign()
        timeout = signed.timeout or self.config['timeout']

        kwargs = {'headers': signed.headers, 'timeout': timeout}
        if signed.method == HTTP_POST:
            kwargs['data'] = signed.body

        logger.debug("Sending %s %s", signed.method, signed.url)

        request.request_timer_start()
        try:
            response = self.session.request(signed.method, signed.url, **kwargs)
        except requests.Timeout as e:
            raise RequestTimeoutError(f"HTTP request timed out: {e}")
        except requests.RequestException as e:
            raise HTTPError(f"HTTP request failed: {e}")
        finally:
            request.request_timer_stop()

        if request.timed_out:
            raise RequestTimeoutError(f"HTTP request timed out after {signed.timeout} seconds")

        return response

    def get(self, url: str, params: Optional[ParameterSource] = None, **kwargs) -> requests.Response:
        """Make signed GET request."""
        request = self.create_request(url, HTTP_GET, params=params, **kwargs)
        return self.execute_request(request)

    def post(self, url: str, data: Optional[ParameterSource] = None, raw_data: Optional[bytes] = None,
             content_type: Optional[str] = None, **kwargs) -> requests.Response:
        """
        Make signed POST request.

        Form parameters go to ``data``. A raw body needs a content type
        other than form-urlencoded.
        """
        if content_type is None:
            content_type = FORM_URLENCODED if raw_data is None else 'application/octet-stream'
        request = self.create_request(url, HTTP_POST, params=data, content_type=content_type,
                                      raw_data=raw_data, **kwargs)
        return self.execute_request(request)

    def close(self):
        """Close HTTP session if the client owns it."""
        if self.session and self._owns_session:
            self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
