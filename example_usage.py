#!/usr/bin/env python3
"""
Basic usage examples for OAuth Python client library.

This script demonstrates how to sign requests with OAuth 1.0 HMAC-SHA1,
inspect the signed output, and send requests to a server.
"""

import logging
import sys

from oauth1_client import (
    OAuthClient,
    OAuthClientError,
    OAuthRequest,
    SigningCredentials,
    hmac_sha1,
)


def main():
    """Run basic usage examples."""
    logging.basicConfig(level=logging.DEBUG if "-v" in sys.argv else logging.WARNING)

    # Credentials from the OAuth Core 1.0 specification example
    credentials = SigningCredentials(
        consumer_key="dpf43f3p2l4k3l03",
        consumer_secret="kd94hf93k423kf44",
        token="nnch734d00sl2jdk",
        token_secret="pfkkdhi9sl3r4s00"
    )

    print("=== OAuth Python Client Basic Usage Examples ===\n")

    # Example 1: Raw HMAC-SHA1
    print("1. Testing HMAC-SHA1 primitive...")
    digest = hmac_sha1(b"what do ya want for nothing?", b"Jefe")
    print(f"   Digest: {digest.hex()}")
    print()

    # Example 2: Sign a GET request without sending it
    print("2. Signing a GET request...")
    request = OAuthRequest()
    request.init_request("http://photos.example.net/photos")
    request.set_credentials(credentials)
    request.http_method = "GET"
    request.nonce = "kllo9940pd9333jh"
    request.timestamp = "1191242096"
    request.set_additional_parameters([("file", "vacation.jpg"), ("size", "original")])

    try:
        signed = request.sign()
    except OAuthClientError as e:
        print(f"   ✗ Signing failed: {e}")
        return 1

    print(f"   Base string: {request.request_base_string().decode('ascii')}")
    print(f"   URL: {signed.url}")
    print(f"   Authorization: {signed.headers['Authorization']}")
    print(f"   Signature: {signed.signature}")
    print()

    # Example 3: Sign a form POST
    print("3. Signing a form POST request...")
    request = OAuthRequest()
    request.init_request("https://api.example.com/statuses/update")
    request.set_credentials(credentials)
    request.add_additional_parameter("status", "Hello, OAuth world!")
    signed = request.sign()
    print(f"   Body: {signed.body.decode('ascii')}")
    print(f"   Content-Type: {signed.headers['Content-Type']}")
    print()

    # Example 4: Missing credentials are caught before signing
    print("4. Validating an incomplete request...")
    request = OAuthRequest()
    request.init_request("https://api.example.com/resource")
    request.consumer_key = credentials.consumer_key
    print(f"   Missing fields: {', '.join(request.missing_fields())}")
    print()

    # Example 5: Send a request, if a server URL is given
    if len(sys.argv) > 1 and not sys.argv[1].startswith("-"):
        server_url = sys.argv[1]
        print(f"5. Sending signed GET to {server_url}...")
        with OAuthClient(credentials, timeout=10) as client:
            try:
                response = client.get(server_url, params={"q": "1"})
                print(f"   Status: {response.status_code}")
            except OAuthClientError as e:
                print(f"   ✗ Request failed: {e}")
                return 1

    print("=== Examples completed ===")
    return 0


if __name__ == "__main__":
    sys.exit(main())
