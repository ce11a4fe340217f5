"""
Authentication against the qTest OAuth token endpoint.

Exchanges a username and password for a session token once, and provides a
``requests`` auth hook that attaches the token to every later request.
"""

import logging
from typing import Any, Dict, Optional

import requests
from requests.auth import AuthBase, HTTPBasicAuth

from . import __version__
from .codec import as_nullable, parse_scope
from .config import QTestConfig
from .exceptions import AuthenticationError, TransportError
from .models import SessionToken

logger = logging.getLogger(__name__)

TOKEN_ENDPOINT = "/oauth/token"


def site_auth(subdomain: str) -> HTTPBasicAuth:
    """Basic auth carrying the site name with an empty password."""
    return HTTPBasicAuth(subdomain, "")


def parse_token_response(data: Dict[str, Any]) -> SessionToken:
    """Build a SessionToken from the token endpoint's JSON object."""
    return SessionToken(
        access_token=as_nullable(data.get("access_token")),
        token_type=as_nullable(data.get("token_type")),
        refresh_token=as_nullable(data.get("refresh_token")),
        scope=parse_scope(as_nullable(data.get("scope"))),
        agent=as_nullable(data.get("agent")),
    )


class TokenAuth(AuthBase):
    """Attach ``Authorization: <token_type> <access_token>`` to each request."""
    
    def __init__(self, token: SessionToken):
        self.token = token
    
    def __call__(self, request: requests.PreparedRequest) -> requests.PreparedRequest:
        request.headers["Authorization"] = self.token.authorization
        return request


class QTestAuthClient:
    """
    Client for the OAuth password grant.
    
    The exchange is performed once per top-level client; the refresh token is
    kept on the SessionToken but never used.
    """
    
    def __init__(self, config: QTestConfig, session: Optional[requests.Session] = None):
        """
        Initialize authentication client.
        
        Args:
            config: qTest configuration (subdomain, host, timeout)
            session: Optional session to send the token request through
        """
        self.config = config
        self._session = session
    
    @property
    def session(self) -> requests.Session:
        """Get or create HTTP session."""
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update({
                "User-Agent": f"qtest-client/{__version__}",
                "Accept": "application/json",
            })
        return self._session
    
    @property
    def token_url(self) -> str:
        return f"{self.config.server_url}{TOKEN_ENDPOINT}"
    
    def authenticate(self, username: str, password: str) -> SessionToken:
        """
        Exchange credentials for a session token.
        
        Args:
            username: qTest user name (usually an email address)
            password: qTest password
        
        Returns:
            SessionToken parsed from the response
        
        Raises:
            AuthenticationError: Non-2xx status or malformed response
            TransportError: The request could not be sent
        """
        logger.debug(f"Requesting token from {self.token_url}")
        
        try:
            response = self.session.post(
                self.token_url,
                data={
                    "grant_type": "password",
                    "username": username,
                    "password": password,
                },
                headers={"Content-Type": "application/x-www-form-urlencoded"},
                auth=site_auth(self.config.subdomain),
                timeout=self.config.timeout,
                verify=self.config.verify_ssl,
            )
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Connection failed: {e}")
        
        return self._handle_auth_response(response)
    
    def _handle_auth_response(self, response: requests.Response) -> SessionToken:
        """Turn the token endpoint response into a SessionToken."""
        if not 200 <= response.status_code < 300:
            try:
                error_data = response.json()
                msg = (
                    error_data.get("error_description") or
                    error_data.get("message") or
                    error_data.get("error") or
                    f"HTTP {response.status_code}"
                )
            except (ValueError, AttributeError):
                error_data = {}
                msg = response.text or f"HTTP {response.status_code}"
            
            raise AuthenticationError(
                f"Authentication failed: {msg}",
                status_code=response.status_code,
                response_data=error_data if isinstance(error_data, dict) else {},
            )
        
        try:
            data = response.json()
        except ValueError as e:
            raise AuthenticationError(f"Invalid response format: {e}", status_code=response.status_code)
        
        if not isinstance(data, dict):
            raise AuthenticationError(
                "Invalid response format: expected a JSON object",
                status_code=response.status_code,
            )
        
        token = parse_token_response(data)
        if not token.access_token:
            raise AuthenticationError(
                "Authentication succeeded but no token in response",
                status_code=response.status_code,
            )
        
        logger.info(f"Authenticated against {self.config.server_url} (scope: {' '.join(sorted(token.scope)) or '-'})")
        return token
    
    def close(self) -> None:
        """Close the HTTP session."""
        if self._session:
            self._session.close()
            self._session = None
    
    def __enter__(self) -> "QTestAuthClient":
        return self
    
    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
