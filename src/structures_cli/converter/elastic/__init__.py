"""Conversion of IDL trees to Elasticsearch mappings."""

from .mapping import (
    ES_PRIMITIVE_TYPES,
    DecoratedProperty,
    ElasticConversionState,
    ElasticConverterStrategy,
    IndexMapping,
    build_index_mapping,
    validate_field_name,
)

__all__ = [
    "DecoratedProperty",
    "ES_PRIMITIVE_TYPES",
    "ElasticConversionState",
    "ElasticConverterStrategy",
    "IndexMapping",
    "build_index_mapping",
    "validate_field_name",
]
