"""
qtest-client - Python client for the qTest test-management service.
"""

__version__ = "1.0.0"

from .api import (
    QTestClient,
    get_client,
    ProjectsAPI,
    ReleasesAPI,
    TestCyclesAPI,
    UsersAPI,
)
from .config import QTestConfig, get_config
from .exceptions import (
    QTestError,
    APIError,
    AuthenticationError,
    NotFoundError,
    ValidationError,
    TransportError,
    DecodeError,
)
from .models import (
    SessionToken,
    Project,
    Release,
    TestCycle,
    TestCycleParent,
    User,
)

__all__ = [
    "__version__",
    "QTestClient",
    "get_client",
    "ProjectsAPI",
    "ReleasesAPI",
    "TestCyclesAPI",
    "UsersAPI",
    "QTestConfig",
    "get_config",
    "QTestError",
    "APIError",
    "AuthenticationError",
    "NotFoundError",
    "ValidationError",
    "TransportError",
    "DecodeError",
    "SessionToken",
    "Project",
    "Release",
    "TestCycle",
    "TestCycleParent",
    "User",
]
