"""
Custom exceptions for OAuth 1.0 client library.
"""


class OAuthClientError(Exception):
    """Base exception for OAuth client errors."""
    pass


class RequestEndpointError(OAuthClientError):
    """Raised when a request endpoint URL is empty or malformed."""
    pass


class RequestValidationError(OAuthClientError):
    """Raised when a request is missing a required credential or parameter."""
    pass


class SigningPreconditionError(OAuthClientError):
    """Raised when a signing step runs in the wrong request state."""
    pass


class RequestError(OAuthClientError):
    """Raised when no usable request is handed to the client."""
    pass


class ConfigurationError(OAuthClientError):
    """Raised when client configuration is invalid."""
    pass


class HTTPError(OAuthClientError):
    """Raised when HTTP request fails."""
    pass


class RequestTimeoutError(HTTPError):
    """Raised when a request does not complete within its timeout."""
    pass
