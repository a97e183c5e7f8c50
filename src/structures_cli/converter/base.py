"""
Abstract building blocks of the conversion engine.

A ``ConverterStrategy`` fixes one conversion domain (for example Python
annotations to IDL, or IDL to assignment statements) by supplying an ordered
list of ``TypeConverter`` instances, the initial run state and a logger.
The ``ConversionContext`` drives the recursion and is the same for every
domain.
"""
import abc
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Generic, TypeVar, Union

import structlog

if TYPE_CHECKING:
    from .context import ConversionContext

V = TypeVar("V") # source value type
T = TypeVar("T") # target type
S = TypeVar("S") # run state type

StateOrFactory = Union[S, Callable[[], S]]
LoggerOrFactory = Union[structlog.typing.BindableLogger, Callable[[], structlog.typing.BindableLogger]]


class TypeConverter(abc.ABC, Generic[V, T, S]):
    """
    Converts one category of source value into one target node.
    Performs exactly one level of structural conversion and hands every
    nested value back to ``context.convert``.
    """

    @abc.abstractmethod
    def supports(self, value: V, state: S) -> bool:
        """True if this converter can convert ``value``."""

    @abc.abstractmethod
    def convert(self, value: V, context: "ConversionContext[V, T, S]") -> T:
        """Converts ``value``. Errors raised by nested conversions must propagate."""


class ConverterStrategy(abc.ABC, Generic[V, T, S]):
    """
    Supplies the converters, initial state and logger for one conversion domain.

    The order of ``type_converters()`` is part of the contract: converters whose
    applicability overlaps must be listed most specific first, the context
    always picks the first one that supports a value.
    """

    @abc.abstractmethod
    def type_converters(self) -> Sequence[TypeConverter[V, T, S]]:
        pass

    @abc.abstractmethod
    def initial_state(self) -> StateOrFactory:
        """The run state, or a zero argument callable creating it."""

    def logger(self) -> LoggerOrFactory:
        """The logger used to report conversion errors, or a factory for it."""
        return structlog.get_logger(self.__class__.__module__)

    def value_to_string(self, value: V) -> str:
        """Renders a value for diagnostic messages."""
        return repr(value)

    @property
    def name(self) -> str:
        return self.__class__.__name__
