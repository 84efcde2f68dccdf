"""Unit tests for the TwitterClient module."""

import json
import logging

import pytest
import requests
from unittest.mock import Mock

from adapter.models import GeoQuery, Post
from adapter.twitter import (
    TwitterClient,
    TwitterClientError,
    TransportError,
    MalformedResponseError,
    DEFAULT_BASE_URL,
    _log_exchange,
)
from adapter.twitter.credentials import encode_secrets
from adapter.twitter.mocks import mock_search_payload, sample_posts


def create_mock_response(status_code=200, json_data=None, text=None):
    """Helper to create mock response with a raw text body."""
    mock_response = Mock()
    mock_response.status_code = status_code
    if text is None:
        text = json.dumps(json_data) if json_data is not None else ""
    mock_response.text = text
    return mock_response


def create_client(response=None, side_effect=None):
    """Helper to create a client over a stub session."""
    session = Mock()
    session.request.return_value = response
    session.request.side_effect = side_effect
    return TwitterClient(session=session), session


STATUS = {
    "text": "hi",
    "user": {"name": "A", "screen_name": "@a", "profile_image_url_https": "http://x"},
}


class TestTwitterClientInit:
    """Test TwitterClient initialization."""

    def test_defaults(self):
        """Test default base URL, timeouts and owned session."""
        client = TwitterClient()

        assert client.base_url == DEFAULT_BASE_URL
        assert client.timeout == (15, 15)
        assert isinstance(client.session, requests.Session)
        assert _log_exchange in client.session.hooks["response"]
        client.close()

    def test_custom_base_url(self):
        """Test base URL override and trailing slash handling."""
        client = TwitterClient(session=Mock(), base_url="http://localhost:9000/")

        assert client.token_url == "http://localhost:9000/oauth2/token"
        assert client.search_url == "http://localhost:9000/1.1/search/tweets.json"

    def test_timeout_tuple(self):
        """Test explicit (connect, read) timeouts are kept."""
        client = TwitterClient(session=Mock(), timeout=(3, 7))

        assert client.timeout == (3, 7)

    def test_context_manager_closes_session(self):
        """Test leaving the context closes the session."""
        session = Mock()
        with TwitterClient(session=session) as client:
            assert client.session is session

        session.close.assert_called_once()

    def test_error_hierarchy(self):
        """Test both error types derive from the base error."""
        assert issubclass(TransportError, TwitterClientError)
        assert issubclass(MalformedResponseError, TwitterClientError)


class TestAcquireToken:
    """Test TwitterClient.acquire_token."""

    def test_success(self):
        """Test 200 with an access_token returns it."""
        client, _ = create_client(create_mock_response(200, {"token_type": "bearer", "access_token": "T1"}))

        assert client.acquire_token("key", "secret") == "T1"

    def test_request_shape(self):
        """Test the POST carries the form body and Basic credentials."""
        client, session = create_client(create_mock_response(200, {"access_token": "T1"}))

        client.acquire_token("key", "secret")

        args, kwargs = session.request.call_args
        assert args == ("POST", "https://api.twitter.com/oauth2/token")
        assert kwargs["data"] == "grant_type=client_credentials"
        assert kwargs["headers"]["Authorization"] == f"Basic {encode_secrets('key', 'secret')}"
        assert kwargs["headers"]["Content-Type"].startswith("application/x-www-form-urlencoded")
        assert kwargs["timeout"] == (15, 15)

    def test_unauthorized_empty_body_is_soft_failure(self):
        """Test 401 with empty body returns an empty token, not an error."""
        client, _ = create_client(create_mock_response(401, text=""))

        assert client.acquire_token("key", "bad") == ""

    def test_error_status_with_body_is_soft_failure(self):
        """Test a non-2xx status with a JSON body still returns an empty token."""
        client, _ = create_client(create_mock_response(403, {"errors": [{"code": 99, "message": "denied"}]}))

        assert client.acquire_token("key", "secret") == ""

    def test_empty_body_on_success_is_soft_failure(self):
        """Test 200 with empty body returns an empty token."""
        client, _ = create_client(create_mock_response(200, text=""))

        assert client.acquire_token("key", "secret") == ""

    def test_missing_access_token(self):
        """Test 200 with `{}` raises MalformedResponseError."""
        client, _ = create_client(create_mock_response(200, {}))

        with pytest.raises(MalformedResponseError) as exc_info:
            client.acquire_token("key", "secret")

        assert exc_info.value.status_code == 200
        assert exc_info.value.response_text == "{}"

    def test_invalid_json(self):
        """Test 200 with a non-JSON body raises MalformedResponseError."""
        client, _ = create_client(create_mock_response(200, text="<html>oops</html>"))

        with pytest.raises(MalformedResponseError):
            client.acquire_token("key", "secret")

    def test_timeout(self):
        """Test a timeout surfaces as TransportError."""
        client, _ = create_client(side_effect=requests.exceptions.Timeout())

        with pytest.raises(TransportError) as exc_info:
            client.acquire_token("key", "secret")

        assert "timed out" in str(exc_info.value).lower()
        assert isinstance(exc_info.value.__cause__, requests.exceptions.Timeout)


class TestSearchByLocation:
    """Test TwitterClient.search_by_location."""

    def test_single_status(self):
        """Test one status maps onto one Post."""
        client, _ = create_client(create_mock_response(200, {"statuses": [STATUS]}))

        posts = client.search_by_location("T1", 38.9, -77.0)

        assert posts == [Post(author="A", handle="@a", body="hi", avatar_url="http://x")]

    def test_request_shape(self):
        """Test the GET carries the bearer token and geocode query."""
        client, session = create_client(create_mock_response(200, {"statuses": []}))

        client.search_by_location("T1", 38.9072, -77.0369)

        args, kwargs = session.request.call_args
        assert args == ("GET", "https://api.twitter.com/1.1/search/tweets.json")
        assert kwargs["headers"] == {"Authorization": "Bearer T1"}
        assert kwargs["params"] == {"q": "Android", "geocode": "38.9072,-77.0369,30mi"}

    def test_token_forwarded_verbatim(self):
        """Test the token is not parsed or altered."""
        client, session = create_client(create_mock_response(200, {"statuses": []}))

        client.search_by_location("AAAA%2FBBBB==", 0.0, 0.0)

        assert session.request.call_args[1]["headers"]["Authorization"] == "Bearer AAAA%2FBBBB=="

    def test_empty_statuses(self):
        """Test an empty statuses array returns an empty list."""
        client, _ = create_client(create_mock_response(200, {"statuses": []}))

        assert client.search_by_location("T1", 38.9, -77.0) == []

    def test_order_and_duplicates_preserved(self):
        """Test posts come back in API order without de-duplication."""
        posts = sample_posts()[:3]
        posts = posts + [posts[0]]
        client, _ = create_client(create_mock_response(200, mock_search_payload(posts)))

        result = client.search_by_location("T1", 38.9, -77.0)

        assert result == posts

    def test_error_status_is_soft_failure(self):
        """Test a 401 returns no posts and no error."""
        client, _ = create_client(create_mock_response(401, {"errors": [{"code": 89}]}))

        assert client.search_by_location("", 38.9, -77.0) == []

    def test_empty_body_is_soft_failure(self):
        """Test 200 with empty body returns no posts."""
        client, _ = create_client(create_mock_response(200, text=""))

        assert client.search_by_location("T1", 38.9, -77.0) == []

    def test_missing_statuses(self):
        """Test a body without statuses raises MalformedResponseError."""
        client, _ = create_client(create_mock_response(200, {"search_metadata": {}}))

        with pytest.raises(MalformedResponseError):
            client.search_by_location("T1", 38.9, -77.0)

    def test_entry_missing_field_fails_whole_call(self):
        """Test one bad entry fails the call instead of returning partial results."""
        bad = {"text": "no handle", "user": {"name": "B", "profile_image_url_https": "http://y"}}
        client, _ = create_client(create_mock_response(200, {"statuses": [STATUS, bad]}))

        with pytest.raises(MalformedResponseError):
            client.search_by_location("T1", 38.9, -77.0)

    def test_entry_missing_user(self):
        """Test an entry without a user object raises MalformedResponseError."""
        client, _ = create_client(create_mock_response(200, {"statuses": [{"text": "orphan"}]}))

        with pytest.raises(MalformedResponseError):
            client.search_by_location("T1", 38.9, -77.0)

    def test_connection_failure(self):
        """Test a connection failure raises TransportError."""
        client, _ = create_client(side_effect=requests.exceptions.ConnectionError("refused"))

        with pytest.raises(TransportError):
            client.search_by_location("T1", 38.9, -77.0)

    def test_generic_request_failure(self):
        """Test other requests failures also raise TransportError."""
        client, _ = create_client(side_effect=requests.exceptions.ChunkedEncodingError("cut"))

        with pytest.raises(TransportError):
            client.search_by_location("T1", 38.9, -77.0)


class TestGeoQuery:
    """Test the GeoQuery model."""

    def test_defaults(self):
        """Test default term and radius."""
        query = GeoQuery(latitude=1.5, longitude=-2.25)

        assert query.term == "Android"
        assert query.radius_miles == 30
        assert query.geocode == "1.5,-2.25,30mi"

    def test_to_params(self):
        """Test query parameters."""
        query = GeoQuery(term="Kotlin", latitude=51.5074, longitude=-0.1278, radius_miles=5)

        assert query.to_params() == {"q": "Kotlin", "geocode": "51.5074,-0.1278,5mi"}


class TestTransportLogging:
    """Test the session response hook."""

    def test_logs_exchange_at_debug(self, caplog):
        """Test request and response lines are logged."""
        response = Mock()
        response.request.method = "GET"
        response.request.url = "https://api.twitter.com/1.1/search/tweets.json?q=Android"
        response.status_code = 200
        response.url = response.request.url
        response.content = b'{"statuses": []}'
        response.text = '{"statuses": []}'

        with caplog.at_level(logging.DEBUG, logger="adapter.twitter"):
            _log_exchange(response)

        messages = [record.getMessage() for record in caplog.records]
        assert any(m.startswith("--> GET") for m in messages)
        assert any(m.startswith("<-- 200") for m in messages)
        assert '{"statuses": []}' in messages
