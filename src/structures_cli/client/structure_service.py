"""
Interface of the remote Structures schema service.
"""
import abc
from typing import Optional

from ..models.structure import Structure


class StructureService(abc.ABC):
    """
    Stores, versions and publishes Structures.
    Structures are keyed by their lowercase ``namespace.name`` id.
    Every method raises ``RemoteSyncError`` when the server call fails.
    """

    @abc.abstractmethod
    async def find_by_id(self, structure_id: str) -> Optional[Structure]:
        """Returns the structure, or None when the server does not know it."""

    @abc.abstractmethod
    async def create(self, structure: Structure) -> Structure:
        pass

    @abc.abstractmethod
    async def save(self, structure: Structure) -> Structure:
        """Updates an existing, unpublished structure."""

    @abc.abstractmethod
    async def publish(self, structure_id: str) -> None:
        """Makes the structure available for item storage, creating its index."""

    @abc.abstractmethod
    async def un_publish(self, structure_id: str) -> None:
        """Withdraws a published structure. Deletes all of its items."""

    @abc.abstractmethod
    async def delete_by_id(self, structure_id: str) -> None:
        pass

    async def close(self) -> None:
        """Releases transport resources. No-op by default."""

    async def __aenter__(self) -> "StructureService":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
