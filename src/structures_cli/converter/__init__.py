"""
Type conversion engine.

A pluggable, recursive framework that converts a source type representation
into an IDL tree, and that walks IDL trees to produce other targets such as
data-mapping statements or Elasticsearch mappings.
"""

from .base import ConverterStrategy, TypeConverter
from .context import DEFAULT_MAX_DEPTH, ConversionContext, create_conversion_context
from .exceptions import BatchItemError, ConversionError, UnsupportedTypeError

__all__ = [
    "BatchItemError",
    "ConversionContext",
    "ConversionError",
    "ConverterStrategy",
    "DEFAULT_MAX_DEPTH",
    "TypeConverter",
    "UnsupportedTypeError",
    "create_conversion_context",
]
