"""
Keeps the entity definitions on a Structures server in line with local declarations.
"""
from enum import Enum
from typing import Callable, List, Optional, Sequence

import structlog
from pydantic import Field

from ..client.exceptions import RemoteSyncError
from ..client.structure_service import StructureService
from ..models.common import BasePydanticModel
from ..models.idl import ObjectC3Type, to_wire
from ..models.structure import Structure, structure_id

logger = structlog.get_logger(__name__)

ConfirmCallback = Callable[[str], bool]


class SyncOutcome(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    PUBLISHED = "published"
    REPUBLISHED = "republished"
    UNCHANGED = "unchanged"
    SKIPPED = "skipped"
    FAILED = "failed"


class EntitySyncResult(BasePydanticModel):
    structure_id: str
    outcome: SyncOutcome
    error: Optional[str] = None


class SynchronizationReport(BasePydanticModel):
    namespace: str
    results: List[EntitySyncResult] = Field(default_factory=list)

    @property
    def failed(self) -> List[EntitySyncResult]:
        return [r for r in self.results if r.outcome == SyncOutcome.FAILED]

    @property
    def succeeded(self) -> bool:
        return not self.failed


def _decline(message: str) -> bool:
    return False


class EntitySynchronizer:
    """
    Creates, updates and publishes Structures for converted entities.

    Changing a published structure requires unpublishing it first, which
    deletes all of its items on the server. ``confirm`` is asked before that
    happens; without a confirm callback such entities are skipped.
    """

    def __init__(self, service: StructureService, confirm: ConfirmCallback = _decline):
        self.service = service
        self.confirm = confirm
        self.logger = logger.bind(service="EntitySynchronizer")

    async def synchronize(self, namespace: str, entities: Sequence[ObjectC3Type], publish: bool = False) -> SynchronizationReport:
        report = SynchronizationReport(namespace=namespace)
        for entity in entities:
            entity_id = structure_id(entity.namespace or namespace, entity.name or "")
            log = self.logger.bind(structure_id=entity_id)
            try:
                outcome = await self._synchronize_entity(entity_id, namespace, entity, publish)
            except RemoteSyncError as e:
                log.error("Failed to synchronize entity", error=str(e), status=e.status)
                report.results.append(EntitySyncResult(structure_id=entity_id, outcome=SyncOutcome.FAILED, error=str(e)))
                continue
            except ValueError as e: # entity cannot become a Structure, e.g. it has no name
                log.error("Entity is not a valid structure", error=str(e))
                report.results.append(EntitySyncResult(structure_id=entity_id, outcome=SyncOutcome.FAILED, error=str(e)))
                continue
            log.info("Entity synchronized", outcome=outcome.value)
            report.results.append(EntitySyncResult(structure_id=entity_id, outcome=outcome))
        return report

    async def _synchronize_entity(self, entity_id: str, namespace: str, entity: ObjectC3Type, publish: bool) -> SyncOutcome:
        if entity.namespace is None:
            entity = entity.model_copy(update={"namespace": namespace})
        existing = await self.service.find_by_id(entity_id)

        if existing is None:
            await self.service.create(Structure.from_entity(entity))
            if publish:
                await self.service.publish(entity_id)
            return SyncOutcome.CREATED

        changed = to_wire(existing.entity_definition) != to_wire(entity)

        if not existing.published:
            outcome = SyncOutcome.UNCHANGED
            if changed:
                await self.service.save(existing.model_copy(update={"entity_definition": entity}))
                outcome = SyncOutcome.UPDATED
            if publish:
                await self.service.publish(entity_id)
                outcome = SyncOutcome.PUBLISHED
            return outcome

        if not changed:
            return SyncOutcome.UNCHANGED

        if not self.confirm(f"Structure {entity_id} is published and its definition changed. "
                            "Unpublishing deletes all of its data. Continue?"):
            self.logger.warning("Skipping changed published structure", structure_id=entity_id)
            return SyncOutcome.SKIPPED

        await self.service.un_publish(entity_id)
        await self.service.save(existing.model_copy(update={"entity_definition": entity, "published": False}))
        await self.service.publish(entity_id)
        return SyncOutcome.REPUBLISHED
