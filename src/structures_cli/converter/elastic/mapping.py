"""
IDL to Elasticsearch mapping.

Produces the ``mappings`` body for the index that stores an entity's items.
Elasticsearch has no array type, any field may hold many values, so arrays
map to their element's mapping. A not indexed array disables indexing of its
elements.
"""
import re
from typing import Any, Dict, List, Optional, Sequence

from ...models.common import ENTITY_TAG, NOT_INDEXED_TAG, MultiTenancyType
from ...models.idl import ArrayC3Type, C3Type, EnumC3Type, ObjectC3Type, PrimitiveC3Type, UnionC3Type
from ..base import ConverterStrategy, LoggerOrFactory, StateOrFactory, TypeConverter
from ..context import ConversionContext, create_conversion_context
from ..exceptions import ConversionError
from ..json_path import JsonPathState

EsProperty = Dict[str, Any]

ES_PRIMITIVE_TYPES: Dict[str, str] = {
    "boolean": "boolean",
    "byte": "byte",
    "char": "keyword",
    "date": "date",
    "double": "double",
    "float": "float",
    "int": "integer",
    "long": "long",
    "short": "short",
    "string": "keyword",
}

_INVALID_FIELD_NAME = re.compile(r"[.#*,\s\"\\/]")


def validate_field_name(name: str) -> None:
    """Rejects property names Elasticsearch cannot store as a field."""
    if not name:
        raise ConversionError("Field names must not be empty")
    if name.startswith("_"):
        raise ConversionError(f"Field name '{name}' must not start with '_'")
    if _INVALID_FIELD_NAME.search(name):
        raise ConversionError(f"Field name '{name}' contains invalid characters")


class DecoratedProperty:
    """A property carrying decorators, with the json path it was found at."""

    def __init__(self, json_path: str, c3_type: C3Type):
        self.json_path = json_path
        self.c3_type = c3_type

    def __repr__(self) -> str:
        return f"<DecoratedProperty json_path='{self.json_path}' decorators={[d.type for d in self.c3_type.decorators]}>"


class ElasticConversionState(JsonPathState):

    def __init__(self) -> None:
        super().__init__()
        self.decorated_properties: List[DecoratedProperty] = []
        self.contains_decorator_for_object = False


class PrimitiveC3TypeToEsProperty(TypeConverter[C3Type, EsProperty, ElasticConversionState]):

    def supports(self, value: C3Type, state: ElasticConversionState) -> bool:
        return isinstance(value, (PrimitiveC3Type, EnumC3Type))

    def convert(self, value: C3Type, context: ConversionContext) -> EsProperty:
        es_type = "keyword" if isinstance(value, EnumC3Type) else ES_PRIMITIVE_TYPES[value.type]
        ret: EsProperty = {"type": es_type}
        if value.find_decorator(NOT_INDEXED_TAG) is not None:
            ret["index"] = False
        return ret


class ArrayC3TypeToEsProperty(TypeConverter[C3Type, EsProperty, ElasticConversionState]):

    def supports(self, value: C3Type, state: ElasticConversionState) -> bool:
        return isinstance(value, ArrayC3Type)

    def convert(self, value: C3Type, context: ConversionContext) -> EsProperty:
        element = context.convert(value.contains)
        if value.find_decorator(NOT_INDEXED_TAG) is None:
            return element
        if element.get("type") == "object":
            return {"type": "object", "enabled": False}
        return {**element, "index": False}


class ObjectC3TypeToEsProperty(TypeConverter[C3Type, EsProperty, ElasticConversionState]):

    def supports(self, value: C3Type, state: ElasticConversionState) -> bool:
        return isinstance(value, ObjectC3Type)

    def convert(self, value: C3Type, context: ConversionContext) -> EsProperty:
        if value.find_decorator(NOT_INDEXED_TAG) is not None:
            return {"type": "object", "enabled": False}

        state: ElasticConversionState = context.state
        properties: Dict[str, EsProperty] = {}
        for name, property_type in value.properties.items():
            validate_field_name(name)
            with state.push_path(name) as json_path:
                if property_type.has_decorators:
                    state.decorated_properties.append(DecoratedProperty(json_path, property_type))
                    if isinstance(property_type, (ObjectC3Type, ArrayC3Type)):
                        state.contains_decorator_for_object = True
                properties[name] = context.convert(property_type)
        return {"type": "object", "properties": properties}


class UnionC3TypeToEsProperty(TypeConverter[C3Type, EsProperty, ElasticConversionState]):
    """Alternatives can disagree on field types, so union values are stored flattened."""

    def supports(self, value: C3Type, state: ElasticConversionState) -> bool:
        return isinstance(value, UnionC3Type)

    def convert(self, value: C3Type, context: ConversionContext) -> EsProperty:
        return {"type": "flattened"}


class ElasticConverterStrategy(ConverterStrategy[C3Type, EsProperty, ElasticConversionState]):

    def __init__(self, initial_state: StateOrFactory = ElasticConversionState, logger: Optional[LoggerOrFactory] = None):
        self._initial_state = initial_state
        self._logger = logger
        self._type_converters = (
            PrimitiveC3TypeToEsProperty(),
            ArrayC3TypeToEsProperty(),
            ObjectC3TypeToEsProperty(),
            UnionC3TypeToEsProperty(),
        )

    def type_converters(self) -> Sequence[TypeConverter[C3Type, EsProperty, ElasticConversionState]]:
        return self._type_converters

    def initial_state(self) -> StateOrFactory:
        return self._initial_state

    def logger(self) -> LoggerOrFactory:
        if self._logger is None:
            return super().logger()
        return self._logger

    def value_to_string(self, value: C3Type) -> str:
        return value.type


class IndexMapping:
    """An index ``mappings`` body plus the decorated properties found while building it."""

    def __init__(self, mapping: EsProperty, decorated_properties: List[DecoratedProperty],
                 contains_decorator_for_object: bool):
        self.mapping = mapping
        self.decorated_properties = decorated_properties
        self.contains_decorator_for_object = contains_decorator_for_object

    @property
    def properties(self) -> Dict[str, EsProperty]:
        return self.mapping["properties"]


def build_index_mapping(entity: ObjectC3Type, tenant_id_field_name: str = "structuresTenantId",
                        logger: Optional[LoggerOrFactory] = None) -> IndexMapping:
    """Builds the mapping for the index holding ``entity`` items."""
    context = create_conversion_context(ElasticConverterStrategy(logger=logger))
    root = context.convert(entity)
    mapping: EsProperty = {"properties": root.get("properties", {})}

    entity_decorator = entity.find_decorator(ENTITY_TAG)
    if entity_decorator is not None and entity_decorator.multi_tenancy_type == MultiTenancyType.SHARED:
        mapping["properties"][tenant_id_field_name] = {"type": "keyword"}

    state: ElasticConversionState = context.state
    return IndexMapping(mapping, state.decorated_properties, state.contains_decorator_for_object)
