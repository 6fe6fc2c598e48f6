"""
Constants for OAuth 1.0 client library.
Protocol names follow RFC 5849.
"""

# HTTP Headers
HEADER_AUTHORIZATION = "Authorization"
HEADER_CONTENT_TYPE = "Content-Type"

# Authorization header scheme prefix
AUTHORIZATION_SCHEME = "OAuth"

# Protocol parameter names (RFC 5849 section 3.1)
OAUTH_KEY_CONSUMER_KEY = "oauth_consumer_key"
OAUTH_KEY_NONCE = "oauth_nonce"
OAUTH_KEY_SIGNATURE = "oauth_signature"
OAUTH_KEY_SIGNATURE_METHOD = "oauth_signature_method"
OAUTH_KEY_TIMESTAMP = "oauth_timestamp"
OAUTH_KEY_TOKEN = "oauth_token"
OAUTH_KEY_VERIFIER = "oauth_verifier"
OAUTH_KEY_VERSION = "oauth_version"

SIGNATURE_METHOD = "HMAC-SHA1"
OAUTH_VERSION = "1.0"

# Content types
FORM_URLENCODED = "application/x-www-form-urlencoded"

# Supported HTTP methods
HTTP_GET = "GET"
HTTP_POST = "POST"
SUPPORTED_METHODS = (HTTP_GET, HTTP_POST)

# SHA-1 block size in bytes (RFC 2104 "B")
HMAC_BLOCK_SIZE = 64

# Default configuration values
DEFAULT_TIMEOUT = 30            # HTTP timeout in seconds

DEFAULT_CONFIG = {
    'timeout': DEFAULT_TIMEOUT,
}
