"""
Client for the remote Structures server.
"""

from .exceptions import (
    RemoteSyncError,
    StructuresAuthError,
    StructuresClientError,
    StructuresConnectionError,
    StructuresTimeoutError,
)
from .http_client import HTTPStructureService
from .structure_service import StructureService

__all__ = [
    "HTTPStructureService",
    "RemoteSyncError",
    "StructureService",
    "StructuresAuthError",
    "StructuresClientError",
    "StructuresConnectionError",
    "StructuresTimeoutError",
]
