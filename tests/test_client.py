"""
Unit tests for OAuth client library.
"""

from unittest.mock import Mock, patch

import pytest
import requests

from oauth1_client import (
    OAuthClient,
    OAuthRequest,
    SigningCredentials,
    ConfigurationError,
    HTTPError,
    RequestEndpointError,
    RequestError,
    RequestTimeoutError,
    RequestValidationError
)
from oauth1_client.constants import (
    FORM_URLENCODED,
    HEADER_AUTHORIZATION,
    HEADER_CONTENT_TYPE
)

ENDPOINT = "https://api.example.com/resource"


class TestOAuthClient:
    """Test OAuth client functionality."""

    @pytest.fixture
    def credentials(self):
        """Create test credentials."""
        return SigningCredentials("ck", "cs", "tok", "ts")

    @pytest.fixture
    def client(self, credentials):
        """Create test client."""
        return OAuthClient(credentials)

    def test_init_default_config(self):
        """Test client initialization with default config."""
        client = OAuthClient()

        assert client.config['timeout'] == 30
        assert client.credentials is None
        assert isinstance(client.session, requests.Session)
        assert client.owns_session is True

    def test_init_custom_config(self, credentials):
        """Test client initialization with custom config."""
        client = OAuthClient(credentials, timeout=60)

        assert client.config['timeout'] == 60
        assert client.credentials is credentials

    def test_init_invalid_config(self):
        """Test client initialization with invalid config."""
        with pytest.raises(ConfigurationError):
            OAuthClient(timeout=0)

        with pytest.raises(ConfigurationError):
            OAuthClient(timeout="soon")

    def test_borrowed_session_not_closed(self, credentials):
        """Test an externally owned session is left open."""
        session = Mock(spec=requests.Session)
        client = OAuthClient(credentials, session=session)

        assert client.owns_session is False
        client.close()
        session.close.assert_not_called()

    def test_set_session_closes_owned_session(self, client):
        """Test switching sessions closes the default one."""
        owned = Mock(spec=requests.Session)
        client.session = owned
        borrowed = Mock(spec=requests.Session)

        client.set_session(borrowed)

        owned.close.assert_called_once()
        assert client.session is borrowed
        assert client.owns_session is False

    def test_set_session_none(self, client):
        """Test a None session is rejected."""
        with pytest.raises(ConfigurationError):
            client.set_session(None)

    def test_context_manager_closes_owned_session(self, credentials):
        """Test client as context manager."""
        with OAuthClient(credentials) as client:
            session = Mock(spec=requests.Session)
            client.session = session

        session.close.assert_called_once()

    def test_create_request(self, client):
        """Test created requests carry client credentials."""
        request = client.create_request(ENDPOINT, "GET", params={"q": "1"}, timeout=3)

        assert request.endpoint == ENDPOINT
        assert request.http_method == "GET"
        assert request.consumer_key == "ck"
        assert request.token_secret == "ts"
        assert request.additional_parameter_list() == [("q", "1")]
        assert request.timeout == 3

    def test_create_request_without_credentials(self):
        """Test request creation requires credentials."""
        with pytest.raises(ConfigurationError):
            OAuthClient().create_request(ENDPOINT)

    def test_create_request_invalid_endpoint(self, client):
        """Test invalid endpoints are rejected."""
        with pytest.raises(RequestEndpointError):
            client.create_request("not a url")

    def test_execute_none(self, client):
        """Test executing no request."""
        with pytest.raises(RequestError):
            client.execute_request(None)

    def test_execute_uninitialized(self, client):
        """Test executing a request without endpoint."""
        with pytest.raises(RequestEndpointError):
            client.execute_request(OAuthRequest())

    @patch('oauth1_client.client.requests.Session.request')
    def test_execute_invalid(self, mock_request, client):
        """Test executing a request missing credentials."""
        request = client.create_request(ENDPOINT)
        request.token_secret = ""

        with pytest.raises(RequestValidationError):
            client.execute_request(request)

        mock_request.assert_not_called()
        assert request.signature is None

    @patch('oauth1_client.client.requests.Session.request')
    def test_get_request(self, mock_request, client):
        """Test GET sends parameters in the query string."""
        mock_response = Mock()
        mock_request.return_value = mock_response

        response = client.get(ENDPOINT, params={"q": "1"})

        assert response is mock_response
        mock_request.assert_called_once()
        args, kwargs = mock_request.call_args

        assert args == ("GET", ENDPOINT + "?q=1")
        assert 'data' not in kwargs
        assert kwargs['timeout'] == 30
        assert kwargs['headers'][HEADER_AUTHORIZATION].startswith('OAuth oauth_signature_method="HMAC-SHA1"')
        assert 'oauth_signature="' in kwargs['headers'][HEADER_AUTHORIZATION]

    @patch('oauth1_client.client.requests.Session.request')
    def test_post_request(self, mock_request, client):
        """Test POST sends parameters in a form body."""
        client.post(ENDPOINT, data={"q": "1"})

        args, kwargs = mock_request.call_args

        assert args == ("POST", ENDPOINT)
        assert kwargs['data'] == b"q=1"
        assert kwargs['headers'][HEADER_CONTENT_TYPE] == FORM_URLENCODED

    @patch('oauth1_client.client.requests.Session.request')
    def test_post_raw_data(self, mock_request, client):
        """Test POST with raw body and custom content type."""
        client.post(ENDPOINT, raw_data=b'{"a":1}', content_type="application/json")

        args, kwargs = mock_request.call_args

        assert kwargs['data'] == b'{"a":1}'
        assert kwargs['headers'][HEADER_CONTENT_TYPE] == "application/json"

    @patch('oauth1_client.client.requests.Session.request')
    def test_post_raw_data_default_content_type(self, mock_request, client):
        """Test raw body without content type is sent as octet stream."""
        client.post(ENDPOINT, raw_data=b"\x00\x01")

        _, kwargs = mock_request.call_args
        assert kwargs['headers'][HEADER_CONTENT_TYPE] == "application/octet-stream"

    @patch('oauth1_client.client.requests.Session.request')
    def test_request_timeout_overrides_config(self, mock_request, client):
        """Test per-request timeout is passed to requests."""
        client.get(ENDPOINT, timeout=2)

        _, kwargs = mock_request.call_args
        assert kwargs['timeout'] == 2

    @patch('oauth1_client.client.requests.Session.request')
    def test_http_error(self, mock_request, client):
        """Test transport failures are wrapped."""
        mock_request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(HTTPError) as exc_info:
            client.get(ENDPOINT)

        assert not isinstance(exc_info.value, RequestTimeoutError)

    @patch('oauth1_client.client.requests.Session.request')
    def test_timeout_error(self, mock_request, client):
        """Test transport timeouts raise RequestTimeoutError."""
        mock_request.side_effect = requests.Timeout("slow")

        with pytest.raises(RequestTimeoutError):
            client.get(ENDPOINT)

    @patch('oauth1_client.client.requests.Session.request')
    def test_request_timer_stopped(self, mock_request, client):
        """Test the request timer is stopped after the response."""
        request = client.create_request(ENDPOINT, timeout=10)

        client.execute_request(request)

        assert request.timer is not None
        assert request.timer.active is False
        assert request.timed_out is False

    @patch('oauth1_client.client.requests.Session.request')
    def test_request_timer_expired(self, mock_request, client):
        """Test an expired request timer is reported as timeout."""
        request = client.create_request(ENDPOINT, timeout=0.01)

        def slow_request(*args, **kwargs):
            request.timer.wait(5)
            return Mock()

        mock_request.side_effect = slow_request

        with pytest.raises(RequestTimeoutError):
            client.execute_request(request)

    @patch('oauth1_client.client.requests.Session.request')
    def test_no_retry(self, mock_request, client):
        """Test failed requests are not retried."""
        mock_request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(HTTPError):
            client.post(ENDPOINT, data={"q": "1"})

        assert mock_request.call_count == 1
