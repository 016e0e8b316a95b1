"""Client Package - HTTP client for the DriveMe API"""

from app.client.api_client import DriveMeClient, BearerTokenAuth
from app.client.token_store import TokenStore, MemoryTokenStore, FileTokenStore

__all__ = [
    "DriveMeClient",
    "BearerTokenAuth",
    "TokenStore",
    "MemoryTokenStore",
    "FileTokenStore",
]
