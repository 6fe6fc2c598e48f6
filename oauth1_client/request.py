"""
OAuth 1.0 signing request.

An ``OAuthRequest`` moves through four states::

    EMPTY -> INITIALIZED -> PREPARED -> SIGNED

``init_request`` sets the endpoint and seeds nonce and timestamp.
Building the header entries validates the request, prepares the
protocol parameters once and signs it once. Later calls reuse the stored
signature.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional
from urllib.parse import urlsplit

from .constants import (
    AUTHORIZATION_SCHEME,
    FORM_URLENCODED,
    HEADER_AUTHORIZATION,
    HEADER_CONTENT_TYPE,
    HTTP_GET,
    HTTP_POST,
    OAUTH_KEY_CONSUMER_KEY,
    OAUTH_KEY_NONCE,
    OAUTH_KEY_SIGNATURE,
    OAUTH_KEY_SIGNATURE_METHOD,
    OAUTH_KEY_TIMESTAMP,
    OAUTH_KEY_TOKEN,
    OAUTH_KEY_VERIFIER,
    OAUTH_KEY_VERSION,
    OAUTH_VERSION,
    SIGNATURE_METHOD,
    SUPPORTED_METHODS,
)
from .encoding import ParameterList, form_encode, percent_encode
from .exceptions import (
    RequestEndpointError,
    RequestValidationError,
    SigningPreconditionError,
)
from .nonce import DEFAULT_NONCE_GENERATOR, NonceGenerator
from .parameters import ParameterSource, ParameterStore
from .signature import base_string, oauth_signature, strip_query
from .timer import RequestTimer

logger = logging.getLogger(__name__)


class RequestState(Enum):
    EMPTY = "empty"
    INITIALIZED = "initialized"
    PREPARED = "prepared"
    SIGNED = "signed"


@dataclass
class SigningCredentials:
    """Consumer and token credentials used to sign a request."""
    consumer_key: str = ''
    consumer_secret: str = ''
    token: str = ''
    token_secret: str = ''
    verifier: str = ''


@dataclass
class SignedRequest:
    """
    Signed request ready to hand to a transport.

    Attributes:
        method: HTTP method
        url: Target URL, including the query string for GET
        headers: Authorization header, plus Content-Type for POST
        body: Request body bytes (empty for GET)
        header_entries: ``name="value"`` entries of the Authorization header
        signature: Percent-encoded oauth_signature value
        timeout: Request timeout in seconds, 0 when disabled
    """
    method: str
    url: str
    headers: Dict[str, str]
    body: bytes
    header_entries: List[str] = field(default_factory=list)
    signature: str = ''
    timeout: float = 0


def valid_endpoint(endpoint) -> bool:
    if not isinstance(endpoint, str) or not endpoint.strip():
        return False
    try:
        parts = urlsplit(endpoint)
    except ValueError:
        return False
    return parts.scheme in ('http', 'https') and bool(parts.netloc)


class OAuthRequest:
    """
    A request signed with OAuth 1.0 HMAC-SHA1.

    Example:
        request = OAuthRequest()
        request.init_request("https://api.example.com/resource")
        request.set_credentials(credentials)
        request.add_additional_parameter("q", "1")
        signed = request.sign()
    """

    def __init__(self, nonce_generator: Optional[NonceGenerator] = None):
        self.nonce_generator = nonce_generator or DEFAULT_NONCE_GENERATOR
        self.state = RequestState.EMPTY

        self._consumer_key = ''
        self._consumer_secret = ''
        self._token = ''
        self._token_secret = ''
        self._verifier = ''

        self._endpoint = ''
        self._http_method = ''
        self._content_type = FORM_URLENCODED
        self._raw_data = b''
        self._timeout = 0
        self._nonce = ''
        self._timestamp = ''
        self._parameters = ParameterStore()

        self._timer: Optional[RequestTimer] = None
        self._timeout_callbacks: List[Callable[[], None]] = []

    # Lifecycle

    def init_request(self, endpoint: str) -> None:
        """
        Initialize the request for an endpoint.

        Clears credentials and parameters, seeds a fresh nonce and
        timestamp, and defaults to a form-encoded POST.

        Raises:
            RequestEndpointError: If the endpoint is empty or not an HTTP URL
        """
        if not valid_endpoint(endpoint):
            logger.warning("Endpoint URL %r is not valid, request not initialized", endpoint)
            raise RequestEndpointError(f"Invalid request endpoint: {endpoint!r}")

        self.clear_request()

        self._endpoint = endpoint
        self._http_method = HTTP_POST
        self._content_type = FORM_URLENCODED
        self.state = RequestState.INITIALIZED

    def clear_request(self) -> None:
        """Drop credentials and reset everything else."""
        self._consumer_key = ''
        self._consumer_secret = ''
        self._token = ''
        self._token_secret = ''
        self.reset_request()

    def reset_request(self) -> None:
        """Reset the request to EMPTY, keeping consumer and token credentials."""
        self.request_timer_stop()

        self._endpoint = ''
        self._http_method = ''
        self._verifier = ''
        self._content_type = FORM_URLENCODED
        self._raw_data = b''
        self._timeout = 0
        self._timestamp = self.nonce_generator.timestamp()
        self._nonce = self.nonce_generator.nonce()
        self._parameters.clear()
        self._timer = None
        self.state = RequestState.EMPTY

    def _check_mutable(self, what: str):
        if self.state in (RequestState.PREPARED, RequestState.SIGNED):
            raise SigningPreconditionError(f"Cannot change {what} after signing has started")

    # Credentials

    @property
    def consumer_key(self) -> str:
        return self._consumer_key

    @consumer_key.setter
    def consumer_key(self, value: str):
        self._check_mutable("consumer key")
        self._consumer_key = value or ''

    @property
    def consumer_secret(self) -> str:
        return self._consumer_secret

    @consumer_secret.setter
    def consumer_secret(self, value: str):
        self._check_mutable("consumer secret")
        self._consumer_secret = value or ''

    @property
    def token(self) -> str:
        return self._token

    @token.setter
    def token(self, value: str):
        self._check_mutable("token")
        self._token = value or ''

    @property
    def token_secret(self) -> str:
        return self._token_secret

    @token_secret.setter
    def token_secret(self, value: str):
        self._check_mutable("token secret")
        self._token_secret = value or ''

    @property
    def verifier(self) -> str:
        return self._verifier

    @verifier.setter
    def verifier(self, value: str):
        self._check_mutable("verifier")
        self._verifier = value or ''

    def set_credentials(self, credentials: SigningCredentials) -> None:
        self.consumer_key = credentials.consumer_key
        self.consumer_secret = credentials.consumer_secret
        self.token = credentials.token
        self.token_secret = credentials.token_secret
        self.verifier = credentials.verifier

    # Request fields

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def http_method(self) -> str:
        return self._http_method

    @http_method.setter
    def http_method(self, method: str):
        method = (method or '').upper()
        if method not in SUPPORTED_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method!r}")
        self._check_mutable("HTTP method")
        self._http_method = method

    @property
    def content_type(self) -> str:
        return self._content_type

    @content_type.setter
    def content_type(self, value: str):
        self._check_mutable("content type")
        self._content_type = value

    @property
    def raw_data(self) -> bytes:
        return self._raw_data

    @raw_data.setter
    def raw_data(self, value):
        # Not part of the signature, may change after signing.
        if isinstance(value, str):
            value = value.encode('utf-8')
        self._raw_data = value or b''

    @property
    def timeout(self) -> float:
        """Timeout in seconds, 0 disables the request timer."""
        return self._timeout

    @timeout.setter
    def timeout(self, seconds: float):
        # Not part of the signature, may change after signing.
        if seconds < 0:
            raise ValueError("timeout cannot be negative")
        self._timeout = seconds

    @property
    def nonce(self) -> str:
        return self._nonce

    @nonce.setter
    def nonce(self, value: str):
        self._check_mutable("nonce")
        self._nonce = value or ''

    @property
    def timestamp(self) -> str:
        return self._timestamp

    @timestamp.setter
    def timestamp(self, value):
        self._check_mutable("timestamp")
        self._timestamp = '' if value is None else str(value)

    # Parameters

    def add_additional_parameter(self, name: str, value) -> None:
        self._check_mutable("additional parameters")
        self._parameters.add_additional(name, value)

    def set_additional_parameters(self, params: ParameterSource) -> None:
        """
        Add parameters sent as query (GET) or form body (POST).

        Accepts a mapping, whose list values repeat the name, or an
        iterable of (name, value) pairs.
        """
        self._check_mutable("additional parameters")
        self._parameters.set_additional(params)

    def additional_parameters(self) -> Dict[str, List[str]]:
        return self._parameters.additional_multi()

    def additional_parameter_list(self) -> ParameterList:
        return self._parameters.additional()

    def protocol_parameters(self) -> ParameterList:
        return self._parameters.protocol()

    def _is_form_body(self) -> bool:
        return self._content_type == FORM_URLENCODED

    def _signed_additional(self) -> ParameterList:
        # Non-form POST bodies are sent verbatim, so additional parameters
        # go nowhere on the wire and must not be signed either.
        if self._http_method == HTTP_POST and not self._is_form_body():
            return []
        return self._parameters.additional()

    # Signing

    def prepare_request(self) -> None:
        """Populate protocol parameters, once."""
        if self.state == RequestState.EMPTY:
            raise SigningPreconditionError("Request has not been initialized with an endpoint")

        if self._parameters.has_protocol():
            return

        self._parameters.set_protocol(OAUTH_KEY_SIGNATURE_METHOD, SIGNATURE_METHOD)
        self._parameters.set_protocol(OAUTH_KEY_CONSUMER_KEY, self._consumer_key)
        self._parameters.set_protocol(OAUTH_KEY_VERSION, OAUTH_VERSION)
        self._parameters.set_protocol(OAUTH_KEY_TIMESTAMP, self._timestamp)
        self._parameters.set_protocol(OAUTH_KEY_NONCE, self._nonce)
        self._parameters.set_protocol(OAUTH_KEY_TOKEN, self._token)
        if self._verifier:
            self._parameters.set_protocol(OAUTH_KEY_VERIFIER, self._verifier)

        self.state = RequestState.PREPARED

        if (self._http_method == HTTP_POST and not self._is_form_body()
                and self._parameters.additional()):
            logger.warning(
                "Additional parameters are ignored for POST with content type %s",
                self._content_type
            )

    def request_base_string(self) -> bytes:
        """
        Signature base string of this request.

        Raises:
            SigningPreconditionError: If the request was never initialized
        """
        self.prepare_request()

        protocol = [
            parameter for parameter in self._parameters.protocol()
            if parameter[0] != OAUTH_KEY_SIGNATURE
        ]
        return base_string(self._http_method, self._endpoint, protocol, self._signed_additional())

    def missing_fields(self) -> List[str]:
        """Names of required fields that are still empty."""
        required = [
            ('endpoint', self._endpoint),
            ('consumer_key', self._consumer_key),
            ('nonce', self._nonce),
            ('timestamp', self._timestamp),
            ('token', self._token),
            ('token_secret', self._token_secret),
        ]
        return [name for name, value in required if not value]

    def is_valid(self) -> bool:
        return not self.missing_fields()

    def _sign(self):
        if self.state == RequestState.SIGNED:
            return

        signature = oauth_signature(
            self.request_base_string(),
            self._consumer_secret,
            self._token_secret
        )
        self._parameters.set_protocol(OAUTH_KEY_SIGNATURE, signature)
        self.state = RequestState.SIGNED
        logger.debug("Signed %s request to %s", self._http_method, self._endpoint)

    @property
    def signature(self) -> Optional[str]:
        return self._parameters.protocol_value(OAUTH_KEY_SIGNATURE)

    def request_parameters(self) -> List[str]:
        """
        Authorization header entries as ``name="value"`` strings.

        Raises:
            SigningPreconditionError: If the request was never initialized
            RequestValidationError: If a required field is empty; the
                request is left unsigned
        """
        if self.state == RequestState.EMPTY:
            raise SigningPreconditionError("Request has not been initialized with an endpoint")

        # A request that fails validation stays INITIALIZED.
        missing = self.missing_fields()
        if missing:
            logger.warning("Request is not valid, missing: %s", ', '.join(missing))
            raise RequestValidationError(f"Request is missing required fields: {', '.join(missing)}")

        self.prepare_request()

        self._sign()

        entries = []
        for name, value in self._parameters.protocol():
            if name != OAUTH_KEY_SIGNATURE:
                value = percent_encode(value)
            entries.append(f'{name}="{value}"')
        return entries

    def authorization_header(self) -> str:
        return AUTHORIZATION_SCHEME + ' ' + ', '.join(self.request_parameters())

    def request_url(self) -> str:
        """
        Endpoint without its own query string, which is never signed.

        For GET the additional parameters become the query string.
        """
        url = strip_query(self._endpoint)
        additional = self._parameters.additional()
        if self._http_method == HTTP_GET and additional:
            return url + '?' + form_encode(additional)
        return url

    def request_body(self) -> bytes:
        if self._http_method != HTTP_POST:
            return b''
        if self._is_form_body():
            return form_encode(self._parameters.additional()).encode('ascii')
        return self._raw_data

    def sign(self) -> SignedRequest:
        """Validate, sign and materialize the request for a transport."""
        entries = self.request_parameters()

        headers = {HEADER_AUTHORIZATION: AUTHORIZATION_SCHEME + ' ' + ', '.join(entries)}
        if self._http_method == HTTP_POST:
            headers[HEADER_CONTENT_TYPE] = self._content_type

        return SignedRequest(
            method=self._http_method,
            url=self.request_url(),
            headers=headers,
            body=self.request_body(),
            header_entries=entries,
            signature=self.signature,
            timeout=self._timeout
        )

    # Timeout

    def on_timeout(self, callback: Callable[[], None]) -> None:
        """Register a callback invoked when the request timer expires."""
        self._timeout_callbacks.append(callback)

    @property
    def timed_out(self) -> bool:
        return self._timer is not None and self._timer.expired

    @property
    def timer(self) -> Optional[RequestTimer]:
        return self._timer

    def request_timer_start(self) -> None:
        """Start the countdown when a nonzero timeout is configured."""
        if self._timeout <= 0:
            return

        self.request_timer_stop()
        self._timer = RequestTimer(self._timeout, self._notify_timeout)
        self._timer.start()

    def request_timer_stop(self) -> None:
        if self._timer is not None:
            self._timer.stop()

    def _notify_timeout(self):
        logger.warning("Request to %s timed out after %s seconds", self._endpoint, self._timeout)
        for callback in list(self._timeout_callbacks):
            callback()
