"""
Pydantic models for the Structures CLI.
"""
from .common import (
    AUTO_GENERATED_ID_TAG,
    ENTITY_TAG,
    NOT_INDEXED_TAG,
    BasePydanticModel,
    MultiTenancyType,
    PrimitiveKind,
)
from .idl import (
    PRIMITIVE_TYPE_NAMES,
    AnyC3Decorator,
    AnyC3Type,
    ArrayC3Type,
    AutoGeneratedIdDecorator,
    C3Decorator,
    C3Type,
    EntityDecorator,
    EnumC3Type,
    NotIndexedDecorator,
    ObjectC3Type,
    PrimitiveC3Type,
    UnionC3Type,
    from_wire,
    to_wire,
)
from .structure import Structure, structure_id

__all__ = [
    "AUTO_GENERATED_ID_TAG",
    "AnyC3Decorator",
    "AnyC3Type",
    "ArrayC3Type",
    "AutoGeneratedIdDecorator",
    "BasePydanticModel",
    "C3Decorator",
    "C3Type",
    "ENTITY_TAG",
    "EntityDecorator",
    "EnumC3Type",
    "MultiTenancyType",
    "NOT_INDEXED_TAG",
    "NotIndexedDecorator",
    "ObjectC3Type",
    "PRIMITIVE_TYPE_NAMES",
    "PrimitiveC3Type",
    "PrimitiveKind",
    "Structure",
    "UnionC3Type",
    "from_wire",
    "structure_id",
    "to_wire",
]
