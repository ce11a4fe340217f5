"""
Typed records returned by the qTest API.

Records are only ever built by decoding a service response; identifiers are
assigned server-side.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Dict, FrozenSet, Optional, Tuple


DEFAULT_TOKEN_TYPE = "Bearer"


@dataclass(frozen=True)
class SessionToken:
    """Token obtained from the OAuth password grant."""
    
    access_token: Optional[str] = None
    token_type: Optional[str] = None
    refresh_token: Optional[str] = None
    scope: FrozenSet[str] = frozenset()
    agent: Optional[str] = None
    
    @property
    def authorization(self) -> str:
        """Value for the ``Authorization`` header, e.g. ``Bearer abc``."""
        return f"{self.token_type or DEFAULT_TOKEN_TYPE} {self.access_token}"
    
    def __repr__(self) -> str:
        return (
            f"SessionToken(token_type={self.token_type!r}, "
            f"scope={sorted(self.scope)!r}, agent={self.agent!r})"
        )


class TestCycleParent(Enum):
    """Container a new test cycle is created under."""
    
    __test__ = False
    
    ROOT = "ROOT"
    RELEASE = "RELEASE"
    TEST_CYCLE = "TEST_CYCLE"


@dataclass(frozen=True)
class Record:
    """Base for decoded resources; ``raw`` keeps the full JSON object."""
    
    DATE_FIELDS: ClassVar[Tuple[str, ...]] = ()
    
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)


@dataclass(frozen=True)
class Project(Record):
    DATE_FIELDS: ClassVar[Tuple[str, ...]] = ("start_date", "end_date")
    
    id: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
    status_id: Optional[int] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    sample: Optional[bool] = None
    automation: Optional[bool] = None
    x_explorer_access_level: Optional[int] = None
    date_format: Optional[str] = None
    template_id: Optional[int] = None
    uuid: Optional[str] = None
    web_url: Optional[str] = None


@dataclass(frozen=True)
class Release(Record):
    DATE_FIELDS: ClassVar[Tuple[str, ...]] = (
        "start_date", "end_date", "created_date", "last_modified_date",
    )
    
    id: Optional[int] = None
    name: Optional[str] = None
    order: Optional[int] = None
    pid: Optional[str] = None
    description: Optional[str] = None
    note: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    created_date: Optional[datetime] = None
    last_modified_date: Optional[datetime] = None
    web_url: Optional[str] = None


@dataclass(frozen=True)
class TestCycle(Record):
    __test__ = False
    
    DATE_FIELDS: ClassVar[Tuple[str, ...]] = ("created_date", "last_modified_date")
    
    id: Optional[int] = None
    name: Optional[str] = None
    order: Optional[int] = None
    pid: Optional[str] = None
    description: Optional[str] = None
    created_date: Optional[datetime] = None
    last_modified_date: Optional[datetime] = None
    target_release_id: Optional[int] = None
    target_build_id: Optional[int] = None
    web_url: Optional[str] = None


@dataclass(frozen=True)
class User(Record):
    id: Optional[int] = None
    username: Optional[str] = None
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    status: Optional[int] = None
    avatar: Optional[str] = None
    ldap_username: Optional[str] = None
    external_auth_config_id: Optional[int] = None
