"""
Percent-encoding and parameter normalization for OAuth 1.0.

Encoding follows RFC 5849 section 3.6: every octet of the UTF-8
representation is escaped as uppercase ``%XX`` except the unreserved
characters ``A-Z a-z 0-9 - . _ ~``.
"""

from typing import Iterable, List, Tuple, Union
from urllib.parse import quote

Parameter = Tuple[str, str]
ParameterList = List[Parameter]


def percent_encode(value: Union[str, bytes]) -> str:
    """
    Percent-encode a value according to OAuth rules.

    Args:
        value: Text or raw bytes to encode. Text is encoded as UTF-8 first.

    Returns:
        ASCII string with every reserved octet escaped
    """
    if isinstance(value, bytes):
        return quote(value, safe=b'~')
    return quote(str(value).encode('utf-8'), safe=b'~')


def normalize_parameters(parameters: Iterable[Parameter]) -> ParameterList:
    """
    Sort parameters by name, then by value.

    Comparison uses the unencoded strings. The sort is stable, so equal
    pairs keep their relative input order.
    """
    return sorted(parameters, key=lambda parameter: (parameter[0], parameter[1]))


def form_encode(parameters: Iterable[Parameter]) -> str:
    """Join parameters as ``key=value`` pairs with ``&``, each side encoded once."""
    return '&'.join(
        percent_encode(key) + '=' + percent_encode(value)
        for key, value in parameters
    )


def encode_parameters(parameters: Iterable[Parameter]) -> str:
    """
    Encode a normalized parameter list for the signature base string.

    Each key and value is encoded, pairs are joined, and the joined
    string is encoded again as a whole.
    """
    return percent_encode(form_encode(parameters))
