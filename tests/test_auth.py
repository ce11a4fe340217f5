"""
Tests for the OAuth password grant and token attachment.
"""

from unittest.mock import MagicMock
from urllib.parse import parse_qs

import pytest
import requests

from qtest.auth import QTestAuthClient, TokenAuth, parse_token_response, site_auth
from qtest.config import QTestConfig
from qtest.exceptions import AuthenticationError, TransportError
from qtest.models import SessionToken

from .conftest import TOKEN_PAYLOAD, make_response


# base64 of "mysite:"
SITE_HEADER = "Basic bXlzaXRlOg=="


@pytest.fixture
def config():
    return QTestConfig(subdomain="mysite")


def auth_client_with(config, response):
    session = MagicMock()
    session.post.return_value = response
    return QTestAuthClient(config, session), session


class TestSiteAuth:
    """Tests for the Basic site credentials."""
    
    def test_subdomain_with_empty_password(self):
        """The site name is the username and the password is empty."""
        request = requests.Request("POST", "https://mysite.qtestnet.com/oauth/token").prepare()
        site_auth("mysite")(request)
        assert request.headers["Authorization"] == SITE_HEADER


class TestParseTokenResponse:
    """Tests for parse_token_response."""
    
    def test_full_payload(self):
        """Test every field of a complete token response."""
        token = parse_token_response(TOKEN_PAYLOAD)
        assert token.access_token == "abc"
        assert token.token_type == "Bearer"
        assert token.refresh_token == "r"
        assert token.scope == frozenset({"read", "write"})
        assert token.agent == "x"
    
    def test_null_string_fields(self):
        """The service sends "null" strings for absent values; they decode to None."""
        token = parse_token_response(dict(TOKEN_PAYLOAD, refresh_token="null", agent="null"))
        assert token.refresh_token is None
        assert token.agent is None
    
    def test_null_scope_is_empty(self):
        """Test a "null" scope gives no scopes."""
        assert parse_token_response(dict(TOKEN_PAYLOAD, scope="null")).scope == frozenset()
    
    def test_missing_scope_is_empty(self):
        """Test a missing scope gives no scopes."""
        assert parse_token_response({"access_token": "abc"}).scope == frozenset()


class TestTokenAuth:
    """Tests for TokenAuth."""
    
    def test_attaches_bearer_header(self):
        """Test the bearer token is set on a prepared request."""
        request = requests.Request("GET", "https://mysite.qtestnet.com/api/v3/projects").prepare()
        TokenAuth(parse_token_response(TOKEN_PAYLOAD))(request)
        assert request.headers["Authorization"] == "Bearer abc"
    
    def test_uses_returned_token_type(self):
        """Test the token type is used as sent by the service."""
        request = requests.Request("GET", "https://mysite.qtestnet.com/").prepare()
        TokenAuth(SessionToken(access_token="abc", token_type="bearer"))(request)
        assert request.headers["Authorization"] == "bearer abc"
    
    def test_defaults_to_bearer(self):
        """Test a missing token type falls back to Bearer."""
        assert SessionToken(access_token="abc").authorization == "Bearer abc"
    
    def test_repr_hides_secrets(self):
        """Test the access token is not shown in repr."""
        assert "abc" not in repr(parse_token_response(TOKEN_PAYLOAD))


class TestAuthenticate:
    """Tests for QTestAuthClient.authenticate."""
    
    def test_password_grant_request(self, config):
        """Test the token request URL, form fields and site auth."""
        auth, session = auth_client_with(config, make_response(200, TOKEN_PAYLOAD))
        
        auth.authenticate("user@example.com", "secret")
        
        args, kwargs = session.post.call_args
        assert args[0] == "https://mysite.qtestnet.com/oauth/token"
        assert kwargs["data"] == {
            "grant_type": "password",
            "username": "user@example.com",
            "password": "secret",
        }
        assert kwargs["auth"] == site_auth("mysite")
    
    def test_form_encoded_body(self, session, transport):
        """The grant is sent as a form body through the real session."""
        QTestAuthClient(QTestConfig(subdomain="mysite"), session).authenticate("user@example.com", "secret")
        
        sent = transport.last
        assert sent.method == "POST"
        assert parse_qs(sent.body) == {
            "grant_type": ["password"],
            "username": ["user@example.com"],
            "password": ["secret"],
        }
        assert sent.headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert sent.headers["Authorization"] == SITE_HEADER
    
    def test_netrc_does_not_replace_site_auth(self, session, transport, tmp_path, monkeypatch):
        """A matching .netrc entry must not override the site credentials."""
        netrc = tmp_path / "netrc"
        netrc.write_text("machine mysite.qtestnet.com login other password pw\n")
        netrc.chmod(0o600)
        monkeypatch.setenv("NETRC", str(netrc))
        
        QTestAuthClient(QTestConfig(subdomain="mysite"), session).authenticate("user@example.com", "secret")
        
        assert transport.last.headers["Authorization"] == SITE_HEADER
    
    def test_returns_token(self, config):
        """Test a successful exchange returns the parsed token."""
        auth, _ = auth_client_with(config, make_response(200, TOKEN_PAYLOAD))
        token = auth.authenticate("user@example.com", "secret")
        assert token.authorization == "Bearer abc"
    
    def test_rejected_credentials(self, config):
        """Test a 401 raises AuthenticationError with the service message."""
        auth, _ = auth_client_with(
            config,
            make_response(401, {"error": "invalid_grant", "error_description": "Bad credentials"})
        )
        with pytest.raises(AuthenticationError) as exc_info:
            auth.authenticate("user@example.com", "wrong")
        
        assert exc_info.value.status_code == 401
        assert "Bad credentials" in str(exc_info.value)
    
    def test_server_error_is_authentication_error(self, config):
        """Test any non-2xx status fails authentication."""
        auth, _ = auth_client_with(config, make_response(500, text="boom"))
        with pytest.raises(AuthenticationError):
            auth.authenticate("user@example.com", "secret")
    
    def test_malformed_body(self, config):
        """Test a non-JSON body fails authentication."""
        auth, _ = auth_client_with(config, make_response(200, text="<html>"))
        with pytest.raises(AuthenticationError) as exc_info:
            auth.authenticate("user@example.com", "secret")
        assert "Invalid response format" in str(exc_info.value)
    
    def test_non_object_body(self, config):
        """Test a JSON array fails authentication."""
        auth, _ = auth_client_with(config, make_response(200, ["abc"]))
        with pytest.raises(AuthenticationError):
            auth.authenticate("user@example.com", "secret")
    
    def test_missing_access_token(self, config):
        """Test a "null" access token fails authentication."""
        auth, _ = auth_client_with(config, make_response(200, dict(TOKEN_PAYLOAD, access_token="null")))
        with pytest.raises(AuthenticationError):
            auth.authenticate("user@example.com", "secret")
    
    def test_connection_failure(self, config):
        """Test network failures raise TransportError."""
        session = MagicMock()
        session.post.side_effect = requests.exceptions.ConnectionError("refused")
        with pytest.raises(TransportError):
            QTestAuthClient(config, session).authenticate("user@example.com", "secret")
