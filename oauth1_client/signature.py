"""
HMAC-SHA1 signing and signature base string construction.

``hmac_sha1`` is a plain RFC 2104 implementation with no OAuth knowledge.
``base_string`` and ``oauth_signature`` apply it to RFC 5849 requests.
"""

import base64
import hashlib
from typing import Iterable, Union
from urllib.parse import urlsplit, urlunsplit

from .constants import HMAC_BLOCK_SIZE
from .encoding import (
    Parameter,
    encode_parameters,
    normalize_parameters,
    percent_encode,
)

_INNER_PAD = bytes((x ^ 0x36) for x in range(256))
_OUTER_PAD = bytes((x ^ 0x5C) for x in range(256))


def hmac_sha1(message: bytes, key: bytes) -> bytes:
    """
    Compute HMAC-SHA1 as defined in RFC 2104.

    Args:
        message: Data to authenticate
        key: Secret key of any length

    Returns:
        20-byte digest
    """
    if len(key) > HMAC_BLOCK_SIZE:
        key = hashlib.sha1(key).digest()
    key = key.ljust(HMAC_BLOCK_SIZE, b'\x00')

    inner = hashlib.sha1(key.translate(_INNER_PAD))
    inner.update(message)

    outer = hashlib.sha1(key.translate(_OUTER_PAD))
    outer.update(inner.digest())
    return outer.digest()


def strip_query(url: str) -> str:
    """Remove query string and fragment from a URL before signing."""
    scheme, netloc, path, _query, _fragment = urlsplit(url)
    return urlunsplit((scheme, netloc, path, '', ''))


def base_string(method: str,
                endpoint: str,
                protocol_params: Iterable[Parameter],
                additional_params: Iterable[Parameter]) -> bytes:
    """
    Build the OAuth signature base string.

    Format: METHOD&encoded-endpoint&encoded-normalized-parameters

    Args:
        method: HTTP method, uppercased here
        endpoint: Request URL, its query string is ignored
        protocol_params: oauth_* parameters, without the signature
        additional_params: Caller-supplied query or form parameters

    Returns:
        Base string as ASCII bytes
    """
    parameters = list(protocol_params) + list(additional_params)
    parts = [
        method.upper(),
        percent_encode(strip_query(endpoint)),
        encode_parameters(normalize_parameters(parameters)),
    ]
    return '&'.join(parts).encode('ascii')


def signing_key(consumer_secret: str, token_secret: str) -> bytes:
    """Consumer secret and token secret, each encoded, joined by '&'."""
    key = percent_encode(consumer_secret or '') + '&' + percent_encode(token_secret or '')
    return key.encode('ascii')


def oauth_signature(request_base_string: Union[str, bytes],
                    consumer_secret: str,
                    token_secret: str) -> str:
    """
    Sign a base string with HMAC-SHA1.

    Returns:
        Base64 digest, percent-encoded, ready for the Authorization header
    """
    if isinstance(request_base_string, str):
        request_base_string = request_base_string.encode('utf-8')

    digest = hmac_sha1(request_base_string, signing_key(consumer_secret, token_secret))
    return percent_encode(base64.b64encode(digest))
