"""
Releases API - releases of a single project.
"""

from typing import List

from ._http import HTTPClient
from ..codec import Item, decode_record, decode_records, json_of
from ..models import Release


class ReleasesAPI:
    """API for the releases of one project."""
    
    def __init__(self, http: HTTPClient, project_id: int):
        """
        Initialize Releases API.
        
        Args:
            http: HTTP client instance
            project_id: Project the releases belong to
        """
        self._http = http
        self.project_id = project_id
    
    @property
    def _path(self) -> str:
        return f"projects/{self.project_id}/releases"
    
    def get(self, release_id: int) -> Release:
        """Get a release by ID."""
        return decode_record(self._http.request("GET", f"{self._path}/{release_id}"), Release)
    
    def list(self) -> List[Release]:
        """List the project's releases."""
        return decode_records(self._http.request("GET", self._path), Release)
    
    def create(self, name: str) -> Release:
        """Create a release named ``name``."""
        content = json_of(Item("name", name))
        return decode_record(self._http.request("POST", self._path, body=content), Release)
    
    def delete(self, release_id: int) -> bool:
        """Delete a release; returns False if the service refused."""
        return self._http.delete(f"{self._path}/{release_id}")
