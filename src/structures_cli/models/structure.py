"""Model of a Structure as stored by the remote Structures server."""
from typing import Any, Optional

from pydantic import Field, field_validator

from .common import BasePydanticModel
from .idl import ObjectC3Type, to_wire


def structure_id(namespace: str, name: str) -> str:
    """Structures are keyed by the lowercase ``namespace.name``."""
    return f"{namespace}.{name}".lower()


class Structure(BasePydanticModel):
    id: Optional[str] = None
    namespace: str
    name: str
    description: Optional[str] = None
    created: int = 0 # system managed
    updated: int = 0 # system managed
    published: bool = False
    published_timestamp: int = Field(default=0, alias="publishedTimestamp")
    item_index: Optional[str] = Field(default=None, alias="itemIndex")
    entity_definition: ObjectC3Type = Field(..., alias="entityDefinition")

    model_config = {
        "extra": "ignore", # the server may add fields we do not model
        "populate_by_name": True,
        "use_enum_values": True,
    }

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Structure name must not be blank")
        return v

    @classmethod
    def from_entity(cls, entity: ObjectC3Type, description: Optional[str] = None) -> "Structure":
        if not entity.namespace or not entity.name:
            raise ValueError("Only entity roots with a namespace and name can become a Structure")
        return cls(
            id=structure_id(entity.namespace, entity.name),
            namespace=entity.namespace,
            name=entity.name,
            description=description,
            entity_definition=entity,
        )

    def to_wire(self) -> dict[str, Any]:
        data = self.model_dump(mode="json", by_alias=True, exclude_none=True, exclude={"entity_definition"})
        data["entityDefinition"] = to_wire(self.entity_definition)
        return data
