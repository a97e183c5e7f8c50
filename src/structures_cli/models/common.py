from enum import Enum

from pydantic import BaseModel


class BasePydanticModel(BaseModel):
    model_config = {
        "extra": "forbid",
        "populate_by_name": True,
        "use_enum_values": True,
    }

class MultiTenancyType(str, Enum):
    """Whether an entity's storage is shared across tenants."""
    SHARED = "SHARED"
    NONE = "NONE"

class PrimitiveKind(str, Enum):
    STRING = "string"
    INT = "int"
    LONG = "long"
    SHORT = "short"
    FLOAT = "float"
    DOUBLE = "double"
    BOOLEAN = "boolean"
    BYTE = "byte"
    CHAR = "char"
    DATE = "date"

# Names of the tags recognised on source declarations
ENTITY_TAG = "Entity"
AUTO_GENERATED_ID_TAG = "AutoGeneratedId"
NOT_INDEXED_TAG = "NotIndexed"
