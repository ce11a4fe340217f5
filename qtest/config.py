"""
Configuration for the qTest client.

Values come from explicit arguments or from ``QTEST_*`` environment variables.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

DEFAULT_TIMEOUT = 30
HOST_TEMPLATE = "https://{subdomain}.qtestnet.com"

_FALSE_VALUES = ("0", "false", "no", "off")


@dataclass
class QTestConfig:
    """Connection settings for one qTest site."""
    
    subdomain: str = ""
    username: str = ""
    password: str = field(default="", repr=False)
    host: Optional[str] = None
    timeout: int = DEFAULT_TIMEOUT
    verify_ssl: bool = True
    
    @property
    def server_url(self) -> str:
        """Base URL of the qTest site, without a trailing slash."""
        if self.host:
            return self.host.rstrip("/")
        return HOST_TEMPLATE.format(subdomain=self.subdomain)
    
    def is_configured(self) -> bool:
        """Check whether enough settings are present to authenticate."""
        return bool(self.subdomain and self.username and self.password)
    
    @classmethod
    def from_env(cls) -> "QTestConfig":
        """Build a configuration from ``QTEST_*`` environment variables."""
        timeout = os.environ.get("QTEST_TIMEOUT")
        verify_ssl = os.environ.get("QTEST_VERIFY_SSL", "true")
        
        return cls(
            subdomain=os.environ.get("QTEST_SUBDOMAIN", ""),
            username=os.environ.get("QTEST_USERNAME", ""),
            password=os.environ.get("QTEST_PASSWORD", ""),
            host=os.environ.get("QTEST_HOST") or None,
            timeout=int(timeout) if timeout else DEFAULT_TIMEOUT,
            verify_ssl=verify_ssl.strip().lower() not in _FALSE_VALUES,
        )


def get_config() -> QTestConfig:
    """Get the configuration derived from the environment."""
    return QTestConfig.from_env()
