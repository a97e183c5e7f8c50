"""
Synchronization of converted entities with a Structures server.
"""

from .synchronizer import (
    EntitySynchronizer,
    EntitySyncResult,
    SynchronizationReport,
    SyncOutcome,
)

__all__ = [
    "EntitySyncResult",
    "EntitySynchronizer",
    "SyncOutcome",
    "SynchronizationReport",
]
