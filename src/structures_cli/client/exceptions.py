"""
Custom exceptions for the Structures server client.
"""
from typing import Optional

class StructuresClientError(Exception):
    """Base class for all Structures client errors."""
    pass

class RemoteSyncError(StructuresClientError):
    """Raised when a call to the Structures server fails.

    Aborts the remaining synchronization steps of the affected entity only.
    """
    def __init__(self, message: str, structure_id: Optional[str] = None, status: Optional[int] = None):
        super().__init__(message)
        self.structure_id = structure_id
        self.status = status

class StructuresConnectionError(RemoteSyncError):
    """Raised when the Structures server cannot be reached."""
    pass

class StructuresTimeoutError(StructuresConnectionError):
    """Raised when a connection or request times out."""
    pass

class StructuresAuthError(RemoteSyncError):
    """Raised when the server rejects the configured credentials (401/403)."""
    pass
