"""
qTest API Client Package.

Structure:
    - client.py: QTestClient entry point (authenticates on construction)
    - _http.py: Base HTTP client with shared session and error handling
    - projects.py: Projects
    - releases.py: Releases of a project
    - test_cycles.py: Test cycles of a project
    - users.py: Users

Usage:
    from qtest.api import QTestClient
    
    client = QTestClient("mysite", ("me@example.com", "secret"))
    projects = client.project_client().list()
    release = client.release_client(projects[0].id).create("R1")
"""

from .client import QTestClient, get_client
from ._http import HTTPClient
from .projects import ProjectsAPI
from .releases import ReleasesAPI
from .test_cycles import TestCyclesAPI
from .users import UsersAPI

__all__ = [
    # Main client
    "QTestClient",
    "get_client",
    # HTTP layer
    "HTTPClient",
    # Resource APIs
    "ProjectsAPI",
    "ReleasesAPI",
    "TestCyclesAPI",
    "UsersAPI",
]
