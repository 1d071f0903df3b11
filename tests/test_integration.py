"""
Integration tests for signing HTTP requests with requests

These tests drive the auth handler and launch helper through real
``requests`` objects; the transport is mocked so no network is used.
"""

from unittest.mock import Mock, patch
from urllib.parse import parse_qsl

import pytest
import requests

from lti_sdk.exceptions import ServerCommunicationError
from lti_sdk.signing import (
    HMACSHA1Signer,
    OAuth1Auth,
    SigningProtocol,
    create_signing_session,
    parse_authorization_header,
    submit_launch,
)
from lti_sdk.signing.integration import split_signing_url


@pytest.fixture
def signer():
    return HMACSHA1Signer("secret")


def _received_parameters(prepared):
    """Parameters a tool would collect from a prepared request"""
    _, parameters = split_signing_url(prepared.url)
    params = parse_authorization_header(prepared.headers["Authorization"])
    for key, value in parameters:
        params.add(key, value)
    if prepared.body:
        for key, value in parse_qsl(prepared.body, keep_blank_values=True):
            params.add(key, value)
    return params


class TestSplitSigningUrl:
    """Test separation of the signed URL and query parameters"""
    
    def test_query_and_fragment_removed(self):
        """Test query parameters are returned separately"""
        url, params = split_signing_url("https://example.com/launch?a=1&b=&a=2#frag")
        assert url == "https://example.com/launch"
        assert params == [("a", "1"), ("b", ""), ("a", "2")]
    
    def test_plain_url(self):
        """Test a URL without a query is unchanged"""
        assert split_signing_url("http://example.com/") == ("http://example.com/", [])


class TestOAuth1Auth:
    """Test the requests auth handler"""
    
    def test_form_post(self, signer):
        """Test form bodies are signed and verifiable"""
        prepared = requests.Request(
            "POST",
            "http://example.com/launch?context_id=2",
            data={"resource_link_id": "1086", "lis_person_name_full": "Jane Q. Public"},
        ).prepare()
        
        OAuth1Auth("key", signer)(prepared)
        
        assert prepared.headers["Authorization"].startswith("OAuth ")
        received = _received_parameters(prepared)
        assert SigningProtocol().verify(received, "POST", "http://example.com/launch", "key", signer)
    
    def test_get_query(self, signer):
        """Test query parameters of a GET are signed"""
        prepared = requests.Request("GET", "http://example.com/outcome?sourcedid=abc").prepare()
        OAuth1Auth("key", signer)(prepared)
        
        received = _received_parameters(prepared)
        assert SigningProtocol().verify(received, "GET", "http://example.com/outcome", "key", signer)
    
    def test_json_body_not_signed(self, signer):
        """Test non-form bodies do not contribute parameters"""
        prepared = requests.Request("POST", "http://example.com/api", json={"a": "1"}).prepare()
        OAuth1Auth("key", signer)(prepared)
        
        params = parse_authorization_header(prepared.headers["Authorization"])
        assert SigningProtocol().verify(params, "POST", "http://example.com/api", "key", signer)
    
    def test_realm(self, signer):
        """Test the realm is placed in the header"""
        prepared = requests.Request("GET", "http://example.com/").prepare()
        OAuth1Auth("key", signer, realm="Tools")(prepared)
        assert prepared.headers["Authorization"].startswith('OAuth realm="Tools", ')
    
    def test_session(self, signer):
        """Test sessions created for signing carry the auth handler"""
        session = create_signing_session("key", signer)
        assert isinstance(session.auth, OAuth1Auth)
        assert session.auth.consumer_key == "key"
        
        existing = requests.Session()
        assert create_signing_session("key", signer, existing) is existing


class TestSubmitLaunch:
    """Test posting signed launch forms"""
    
    def test_posts_signed_form(self, signer):
        """Test the launch is posted with its signature in the body"""
        session = Mock()
        session.post.return_value = Mock(status_code=200)
        
        response = submit_launch(
            "http://tool.example.com/launch",
            {"resource_link_id": "1086", "roles": "Instructor"},
            "12345",
            signer,
            session=session,
        )
        
        assert response.status_code == 200
        args, kwargs = session.post.call_args
        assert args == ("http://tool.example.com/launch",)
        assert kwargs["timeout"] == 30.0
        
        form = dict(kwargs["data"])
        assert form["oauth_consumer_key"] == "12345"
        assert SigningProtocol().verify(form, "POST", "http://tool.example.com/launch", "12345", signer)
    
    @pytest.mark.parametrize("error,message", [
        (requests.exceptions.Timeout("slow"), "timeout"),
        (requests.exceptions.ConnectionError("refused"), "Connection error"),
        (requests.exceptions.RequestException("bad"), "Request failed"),
    ])
    def test_transport_errors(self, signer, error, message):
        """Test transport failures are raised as ServerCommunicationError"""
        session = Mock()
        session.post.side_effect = error
        
        with pytest.raises(ServerCommunicationError) as exc_info:
            submit_launch("http://tool.example.com/", {}, "key", signer, session=session, timeout=5)
        
        assert message in str(exc_info.value)
    
    def test_owned_session_closed(self, signer):
        """Test a session created for the launch is closed afterwards"""
        with patch("lti_sdk.signing.integration.requests.Session") as session_class:
            session = session_class.return_value
            session.post.return_value = Mock(status_code=200)
            
            submit_launch("http://tool.example.com/", {"a": "1"}, "key", signer)
        
        session.post.assert_called_once()
        session.close.assert_called_once_with()
    
    def test_owned_session_closed_on_error(self, signer):
        """Test the created session is closed when the request fails"""
        with patch("lti_sdk.signing.integration.requests.Session") as session_class:
            session = session_class.return_value
            session.post.side_effect = requests.exceptions.ConnectionError("refused")
            
            with pytest.raises(ServerCommunicationError):
                submit_launch("http://tool.example.com/", {}, "key", signer)
        
        session.close.assert_called_once_with()
    
    def test_caller_session_left_open(self, signer):
        """Test a session passed in by the caller is not closed"""
        session = Mock()
        session.post.return_value = Mock(status_code=200)
        
        submit_launch("http://tool.example.com/", {}, "key", signer, session=session)
        session.close.assert_not_called()
