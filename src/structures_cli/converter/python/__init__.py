"""Conversion of Python declarations (annotated classes and type hints) to IDL."""

from .converters import DECORATOR_FACTORIES, build_entity_decorator, decorators_for
from .state import PythonConversionState
from .strategy import PythonConverterStrategy

__all__ = [
    "DECORATOR_FACTORIES",
    "PythonConversionState",
    "PythonConverterStrategy",
    "build_entity_decorator",
    "decorators_for",
]
