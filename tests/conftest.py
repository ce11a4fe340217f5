"""
Shared fixtures: a real requests.Session whose ``send`` is replaced by a recorder.
"""

import json
from typing import Any, List, Optional
from unittest.mock import MagicMock

import pytest
import requests

from qtest.api import QTestClient


TOKEN_PAYLOAD = {
    "access_token": "abc",
    "token_type": "Bearer",
    "refresh_token": "r",
    "scope": "read write",
    "agent": "x",
}


def make_response(status_code: int = 200, payload: Any = None, text: Optional[str] = None) -> MagicMock:
    """Build a fake requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    if payload is not None:
        response.text = json.dumps(payload)
        response.json.return_value = payload
    else:
        response.text = text or ""
        response.json.side_effect = ValueError("No JSON object could be decoded")
    return response


class RecordingTransport:
    """Stands in for Session.send; answers the token endpoint, queues the rest."""
    
    def __init__(self, token_response: Optional[MagicMock] = None):
        self.token_response = token_response or make_response(200, TOKEN_PAYLOAD)
        self.requests: List[requests.PreparedRequest] = []
        self.responses: List[Any] = []
    
    def queue(self, response: Any) -> None:
        self.responses.append(response)
    
    @property
    def last(self) -> requests.PreparedRequest:
        return self.requests[-1]
    
    def __call__(self, request: requests.PreparedRequest, **kwargs) -> Any:
        self.requests.append(request)
        if request.url.endswith("/oauth/token"):
            return self.token_response
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def transport():
    """Recorder for every request sent through the session."""
    return RecordingTransport()


@pytest.fixture
def session(transport):
    """A real requests session that never touches the network."""
    session = requests.Session()
    session.send = transport
    yield session
    session.close()


@pytest.fixture
def client(session):
    """Client authenticated against the recorded token endpoint."""
    return QTestClient("mysite", ("user@example.com", "secret"), session=session)
