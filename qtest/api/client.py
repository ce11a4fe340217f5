"""
qTest API Client - main entry point for all API operations.

One client owns one authenticated session; every resource client it hands out
shares that session and the site's host.
"""

import logging
from dataclasses import replace
from typing import Optional, Tuple

import requests

from ..auth import QTestAuthClient
from ..config import QTestConfig, get_config
from ..exceptions import AuthenticationError
from ..models import SessionToken
from ._http import HTTPClient
from .projects import ProjectsAPI
from .releases import ReleasesAPI
from .test_cycles import TestCyclesAPI
from .users import UsersAPI

logger = logging.getLogger(__name__)


class QTestClient:
    """
    Client for interacting with the qTest API.
    
    Constructing the client authenticates immediately; failures raise
    AuthenticationError and nothing is retried.
    
    Usage:
        with QTestClient("mysite", ("me@example.com", "secret")) as client:
            projects = client.project_client().list()
            cycles = client.test_cycle_client(projects[0].id).list()
    """
    
    def __init__(
        self,
        subdomain: str,
        credentials: Tuple[str, str],
        config: Optional[QTestConfig] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize the API client and authenticate.
        
        Args:
            subdomain: qTest site name, as in https://<subdomain>.qtestnet.com
            credentials: (username, password) pair; not retained
            config: Optional configuration for host, timeout and SSL settings
            session: Optional requests session to send everything through
        """
        config = replace(config or QTestConfig(), subdomain=subdomain, username="", password="")
        
        self._http = HTTPClient(config, session)
        
        username, password = credentials
        logger.debug(f"Authenticating {username} against {config.server_url}")
        auth_client = QTestAuthClient(config, self._http.session)
        self._token = auth_client.authenticate(username, password)
        self._http.authorize(self._token)
    
    @classmethod
    def from_config(cls, config: QTestConfig, session: Optional[requests.Session] = None) -> "QTestClient":
        """Create a client from a configuration carrying credentials."""
        if not config.is_configured():
            raise AuthenticationError(
                "qTest is not configured: subdomain, username and password are required"
            )
        return cls(config.subdomain, (config.username, config.password), config, session)
    
    @property
    def config(self) -> QTestConfig:
        """Get the configuration."""
        return self._http.config
    
    @property
    def host(self) -> str:
        return self._http.config.server_url
    
    @property
    def token(self) -> SessionToken:
        """Session token obtained at construction."""
        return self._token
    
    def project_client(self) -> ProjectsAPI:
        return ProjectsAPI(self._http)
    
    def release_client(self, project_id: int) -> ReleasesAPI:
        return ReleasesAPI(self._http, project_id)
    
    def test_cycle_client(self, project_id: int) -> TestCyclesAPI:
        return TestCyclesAPI(self._http, project_id)
    
    def user_client(self) -> UsersAPI:
        return UsersAPI(self._http)
    
    # ========== Context Manager ==========
    
    def close(self) -> None:
        """Close the HTTP session."""
        self._http.close()
    
    def __enter__(self) -> "QTestClient":
        return self
    
    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def get_client(config: Optional[QTestConfig] = None) -> QTestClient:
    """
    Get an authenticated API client.
    
    Args:
        config: Optional configuration; read from the environment if omitted
    
    Returns:
        QTestClient instance
    """
    return QTestClient.from_config(config or get_config())
