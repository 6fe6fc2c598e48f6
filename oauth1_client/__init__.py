"""
OAuth 1.0 Client Library

A Python client library that signs HTTP requests with OAuth 1.0
HMAC-SHA1 (RFC 5849) and sends them with requests.

Example usage:
    from oauth1_client import OAuthClient, SigningCredentials

    credentials = SigningCredentials("consumer-key", "consumer-secret",
                                     "token", "token-secret")
    with OAuthClient(credentials) as client:
        response = client.get("https://api.example.com/resource", params={"q": "1"})
"""

from .client import OAuthClient
from .request import OAuthRequest, RequestState, SignedRequest, SigningCredentials
from .nonce import NonceCounter, NonceGenerator, generate_timestamp
from .timer import RequestTimer
from .encoding import percent_encode, normalize_parameters
from .signature import base_string, hmac_sha1, oauth_signature
from .exceptions import (
    OAuthClientError,
    RequestEndpointError,
    RequestValidationError,
    SigningPreconditionError,
    RequestError,
    ConfigurationError,
    HTTPError,
    RequestTimeoutError
)
from .constants import (
    HEADER_AUTHORIZATION,
    FORM_URLENCODED,
    SIGNATURE_METHOD,
    OAUTH_VERSION,
    DEFAULT_CONFIG
)

__version__ = "1.0.0"
__all__ = [
    "OAuthClient",
    "OAuthRequest",
    "RequestState",
    "SignedRequest",
    "SigningCredentials",
    "NonceCounter",
    "NonceGenerator",
    "generate_timestamp",
    "RequestTimer",
    "percent_encode",
    "normalize_parameters",
    "base_string",
    "hmac_sha1",
    "oauth_signature",
    "OAuthClientError",
    "RequestEndpointError",
    "RequestValidationError",
    "SigningPreconditionError",
    "RequestError",
    "ConfigurationError",
    "HTTPError",
    "RequestTimeoutError",
    "HEADER_AUTHORIZATION",
    "FORM_URLENCODED",
    "SIGNATURE_METHOD",
    "OAUTH_VERSION",
    "DEFAULT_CONFIG"
]
