"""
Base HTTP client for the qTest API.

Holds the shared authenticated session and maps error responses to exceptions.
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import urljoin

import requests

from .. import __version__
from ..auth import TokenAuth
from ..codec import load_json
from ..config import QTestConfig, get_config
from ..exceptions import (
    APIError,
    AuthenticationError,
    NotFoundError,
    TransportError,
    ValidationError,
)
from ..models import SessionToken

logger = logging.getLogger(__name__)


class HTTPClient:
    """
    Base HTTP client for the qTest API.
    
    Handles:
    - One requests session shared by every resource client
    - Bearer token attachment
    - Error response handling
    
    Requests are never retried.
    """
    
    API_VERSION = "v3"
    
    def __init__(self, config: Optional[QTestConfig] = None, session: Optional[requests.Session] = None):
        """
        Initialize the HTTP client.
        
        Args:
            config: Optional configuration. Uses environment config if not provided.
            session: Optional session to use instead of creating one.
        """
        self.config = config or get_config()
        self._session = session
    
    @property
    def session(self) -> requests.Session:
        """Get or create the HTTP session."""
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update({
                "User-Agent": f"qtest-client/{__version__}",
                "Accept": "application/json",
            })
        return self._session
    
    @property
    def base_url(self) -> str:
        """Get the base URL for API requests."""
        return urljoin(self.config.server_url + "/", f"api/{self.API_VERSION}/")
    
    def authorize(self, token: SessionToken) -> None:
        """Attach a session token to every request sent through this client."""
        self.session.auth = TokenAuth(token)
    
    def url_for(self, endpoint: str) -> str:
        return urljoin(self.base_url, endpoint.lstrip("/"))
    
    def _send(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        body: Optional[str] = None,
    ) -> requests.Response:
        """Send one request, wrapping network failures in TransportError."""
        url = self.url_for(endpoint)
        headers = {"Content-Type": "application/json"} if body is not None else None
        
        try:
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                data=body,
                headers=headers,
                timeout=self.config.timeout,
                verify=self.config.verify_ssl,
            )
        except requests.exceptions.ConnectionError as e:
            raise TransportError(f"Connection failed: {e}")
        except requests.exceptions.Timeout as e:
            raise TransportError(f"Request timed out: {e}")
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Request failed: {e}")
        
        logger.debug(f"Request: {method} {url}")
        logger.debug(f"Response: {response.status_code}")
        return response
    
    def _extract_error_message(self, error_data: Any) -> str:
        """Extract error message from an API error body."""
        if isinstance(error_data, dict):
            for key in ("message", "error_description", "error"):
                if error_data.get(key):
                    return str(error_data[key])
        return str(error_data)
    
    def _raise_for_status(self, response: requests.Response, mutating: bool = False) -> None:
        """Raise the exception matching a non-2xx response."""
        if 200 <= response.status_code < 300:
            return
        
        try:
            error_data = response.json()
            error_msg = self._extract_error_message(error_data)
        except ValueError:
            error_data = {}
            error_msg = response.text or f"HTTP {response.status_code}"
        if not isinstance(error_data, dict):
            error_data = {"data": error_data}
        
        if response.status_code == 404:
            raise NotFoundError(
                "Resource not found: " + (error_msg or "The requested resource does not exist."),
                status_code=response.status_code,
                response_data=error_data
            )
        elif response.status_code in (401, 403):
            raise AuthenticationError(
                "Not authorized: " + error_msg,
                status_code=response.status_code,
                response_data=error_data
            )
        elif mutating:
            raise ValidationError(
                f"Request rejected: {error_msg}",
                status_code=response.status_code,
                response_data=error_data
            )
        else:
            raise APIError(
                f"API request failed: {error_msg}",
                status_code=response.status_code,
                response_data=error_data
            )
    
    def request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        body: Optional[str] = None,
    ) -> Any:
        """
        Make an API request and decode its JSON body.
        
        Args:
            method: HTTP method
            endpoint: API endpoint (relative to base URL)
            params: Query parameters
            body: Serialized JSON body
        
        Returns:
            Decoded JSON value
        """
        response = self._send(method, endpoint, params=params, body=body)
        self._raise_for_status(response, mutating=method.upper() != "GET")
        return load_json(response.text)
    
    def delete(self, endpoint: str) -> bool:
        """Send a DELETE and report whether the status was 2xx."""
        response = self._send("DELETE", endpoint)
        if not 200 <= response.status_code < 300:
            logger.debug(f"DELETE {endpoint} returned {response.status_code}")
            return False
        return True
    
    def close(self) -> None:
        """Close the HTTP session."""
        if self._session:
            self._session.close()
            self._session = None
    
    def __enter__(self) -> "HTTPClient":
        return self
    
    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
