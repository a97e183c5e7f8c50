from typing import Any, Optional, Sequence

from ...models.idl import C3Type
from ..base import ConverterStrategy, LoggerOrFactory, StateOrFactory, TypeConverter
from .converters import (
    AnnotatedToC3Type,
    ArrayToC3Type,
    ClassToC3Type,
    EnumToC3Type,
    LiteralToC3Type,
    OptionalToC3Type,
    PrimitiveToC3Type,
    UnionToC3Type,
)
from .state import PythonConversionState


class PythonConverterStrategy(ConverterStrategy[Any, C3Type, PythonConversionState]):
    """Converts Python type annotations and annotated classes to IDL."""

    def __init__(self, initial_state: StateOrFactory, logger: Optional[LoggerOrFactory] = None):
        self._initial_state = initial_state
        self._logger = logger
        # Order matters: Optional before the generic union, Literal before union,
        # arrays and enums before the catch-all class converter.
        self._type_converters: Sequence[TypeConverter[Any, C3Type, PythonConversionState]] = (
            PrimitiveToC3Type(),
            AnnotatedToC3Type(),
            OptionalToC3Type(),
            ArrayToC3Type(),
            EnumToC3Type(),
            LiteralToC3Type(),
            UnionToC3Type(),
            ClassToC3Type(),
        )

    def type_converters(self) -> Sequence[TypeConverter[Any, C3Type, PythonConversionState]]:
        return self._type_converters

    def initial_state(self) -> StateOrFactory:
        return self._initial_state

    def logger(self) -> LoggerOrFactory:
        if self._logger is None:
            return super().logger()
        return self._logger

    def value_to_string(self, value: Any) -> str:
        if isinstance(value, type):
            return value.__qualname__
        return repr(value)
