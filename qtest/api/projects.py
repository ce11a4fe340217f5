"""
Projects API - project lookup and creation.
"""

from typing import List

from ._http import HTTPClient
from ..codec import Item, decode_record, decode_records, format_timestamp, json_of
from ..models import Project, User


class ProjectsAPI:
    """
    API for project operations.
    
    Handles:
    - Project lookup and listing
    - Project creation
    - Project members
    """
    
    def __init__(self, http: HTTPClient):
        """
        Initialize Projects API.
        
        Args:
            http: HTTP client instance
        """
        self._http = http
    
    def get(self, project_id: int) -> Project:
        """Get a project by ID."""
        return decode_record(self._http.request("GET", f"projects/{project_id}"), Project)
    
    def list(self) -> List[Project]:
        """List every project visible to the authenticated user."""
        return decode_records(self._http.request("GET", "projects"), Project)
    
    def create(self, name: str, description: str = "") -> Project:
        """
        Create a project starting now.
        
        Args:
            name: Project name
            description: Project description (empty by default)
        
        Returns:
            The created project as returned by the service
        """
        content = json_of(
            Item("name", name),
            Item("start_date", format_timestamp()),
            Item("description", description),
        )
        return decode_record(self._http.request("POST", "projects", body=content), Project)
    
    def users(self, project_id: int) -> List[User]:
        """List the users assigned to a project."""
        return decode_records(self._http.request("GET", f"projects/{project_id}/users"), User)
