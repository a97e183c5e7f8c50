"""
IDL tree produced by the conversion engine and consumed by the Structures
server. Every node is a pydantic model discriminated on ``type`` so a whole
tree can be dumped to, and validated back from, the JSON wire document.
"""
from typing import Annotated, Any, Literal, Optional, Union, get_args

from pydantic import Field, TypeAdapter

from .common import (
    AUTO_GENERATED_ID_TAG,
    ENTITY_TAG,
    NOT_INDEXED_TAG,
    BasePydanticModel,
    MultiTenancyType,
)

PrimitiveTypeName = Literal[
    "string", "int", "long", "short", "float", "double", "boolean", "byte", "char", "date"
]

PRIMITIVE_TYPE_NAMES: tuple[str, ...] = get_args(PrimitiveTypeName)


# --- Decorators ---

class C3Decorator(BasePydanticModel):
    """Typed metadata attached to an IDL node. Interpreted by the server, only transported here."""
    type: str

class AutoGeneratedIdDecorator(C3Decorator):
    """Signifies the ID field of an entity. The ID will be auto generated."""
    type: Literal["AutoGeneratedId"] = AUTO_GENERATED_ID_TAG

class EntityDecorator(C3Decorator):
    """Marks an object node as an entity that the server should store."""
    type: Literal["Entity"] = ENTITY_TAG
    multi_tenancy_type: MultiTenancyType = Field(default=MultiTenancyType.NONE, alias="multiTenancyType")

class NotIndexedDecorator(C3Decorator):
    """The property is stored but never indexed for search."""
    type: Literal["NotIndexed"] = NOT_INDEXED_TAG

AnyC3Decorator = Annotated[
    Union[AutoGeneratedIdDecorator, EntityDecorator, NotIndexedDecorator],
    Field(discriminator="type"),
]


# --- Types ---

class C3Type(BasePydanticModel):
    type: str
    decorators: list[AnyC3Decorator] = Field(default_factory=list)

    def add_decorator(self, decorator: C3Decorator) -> "C3Type":
        self.decorators.append(decorator)
        return self

    def find_decorator(self, decorator_type: str) -> Optional[C3Decorator]:
        for decorator in self.decorators:
            if decorator.type == decorator_type:
                return decorator
        return None

    @property
    def has_decorators(self) -> bool:
        return len(self.decorators) > 0

class PrimitiveC3Type(C3Type):
    type: PrimitiveTypeName

class ArrayC3Type(C3Type):
    type: Literal["array"] = "array"
    contains: "AnyC3Type"

class EnumC3Type(C3Type):
    type: Literal["enum"] = "enum"
    values: list[str] = Field(default_factory=list)

class UnionC3Type(C3Type):
    type: Literal["union"] = "union"
    of: list["AnyC3Type"] = Field(default_factory=list)

class ObjectC3Type(C3Type):
    type: Literal["object"] = "object"
    namespace: Optional[str] = None
    name: Optional[str] = None
    properties: dict[str, "AnyC3Type"] = Field(default_factory=dict)

    def add_property(self, name: str, c3_type: C3Type) -> "ObjectC3Type":
        if name in self.properties:
            raise ValueError(f"Property '{name}' is already defined on object {self.name or '<anonymous>'}")
        self.properties[name] = c3_type
        return self

    @property
    def qualified_name(self) -> Optional[str]:
        """``namespace.name`` for entity roots, None for nested objects."""
        if self.namespace and self.name:
            return f"{self.namespace}.{self.name}"
        return None

AnyC3Type = Annotated[
    Union[PrimitiveC3Type, ArrayC3Type, EnumC3Type, UnionC3Type, ObjectC3Type],
    Field(discriminator="type"),
]

ArrayC3Type.model_rebuild()
UnionC3Type.model_rebuild()
ObjectC3Type.model_rebuild()

_c3_type_adapter: TypeAdapter = TypeAdapter(AnyC3Type)


def to_wire(c3_type: C3Type) -> dict[str, Any]:
    """Serializes an IDL tree to the JSON wire document."""
    return c3_type.model_dump(mode="json", by_alias=True, exclude_none=True)


def from_wire(data: dict[str, Any]) -> C3Type:
    """Parses a wire document back into an IDL tree."""
    return _c3_type_adapter.validate_python(data)
