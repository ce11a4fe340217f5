"""
Users API - user lookup.
"""

from ._http import HTTPClient
from ..codec import decode_record
from ..models import User


class UsersAPI:
    """API for user operations."""
    
    def __init__(self, http: HTTPClient):
        """
        Initialize Users API.
        
        Args:
            http: HTTP client instance
        """
        self._http = http
    
    def get(self, user_id: int) -> User:
        """Get user by ID."""
        return decode_record(self._http.request("GET", f"users/{user_id}"), User)
