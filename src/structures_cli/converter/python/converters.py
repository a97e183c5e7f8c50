"""
Type converters turning Python type annotations into IDL nodes.
"""
import collections.abc
import datetime
import enum
import inspect
import types
from typing import Annotated, Any, Callable, ClassVar, Dict, Iterable, List, Literal, Union, get_args, get_origin, get_type_hints

import structlog

from ...declarations import PrimitiveOverride, Tag, get_tags, is_entity
from ...models.common import AUTO_GENERATED_ID_TAG, ENTITY_TAG, NOT_INDEXED_TAG, MultiTenancyType
from ...models.idl import (
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
)
from ..base import TypeConverter
from ..context import ConversionContext
from ..exceptions import ConversionError
from .state import PythonConversionState

logger = structlog.get_logger(__name__)

_PRIMITIVE_TYPES: Dict[type, str] = {
    str: "string",
    int: "int",
    float: "double", # Python floats are double precision
    bool: "boolean",
    bytes: "byte",
    datetime.date: "date",
    datetime.datetime: "date",
}

_SEQUENCE_ORIGINS = (
    list,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
)


def build_entity_decorator(tag: Tag) -> EntityDecorator:
    argument = tag.argument
    if argument is None:
        return EntityDecorator()
    if isinstance(argument, MultiTenancyType):
        return EntityDecorator(multi_tenancy_type=argument)
    if isinstance(argument, str):
        name = argument.removeprefix("MultiTenancyType.").upper()
        if name in MultiTenancyType.__members__:
            return EntityDecorator(multi_tenancy_type=MultiTenancyType[name])
    raise ConversionError(f"Unsupported MultiTenancyType {argument!r}")


DECORATOR_FACTORIES: Dict[str, Callable[[Tag], C3Decorator]] = {
    AUTO_GENERATED_ID_TAG: lambda tag: AutoGeneratedIdDecorator(),
    ENTITY_TAG: build_entity_decorator,
    NOT_INDEXED_TAG: lambda tag: NotIndexedDecorator(),
}


def decorators_for(tags: Iterable[Tag]) -> List[C3Decorator]:
    decorators = []
    for tag in tags:
        factory = DECORATOR_FACTORIES.get(tag.name)
        if factory is None:
            logger.debug("Ignoring unknown tag.", tag=tag.name)
            continue
        decorators.append(factory(tag))
    return decorators


def attach_decorators(c3_type: C3Type, decorators: Iterable[C3Decorator]) -> C3Type:
    """Adds each decorator unless one of the same type is already present."""
    for decorator in decorators:
        if c3_type.find_decorator(decorator.type) is None:
            c3_type.add_decorator(decorator)
    return c3_type


def _is_union(value: Any) -> bool:
    return get_origin(value) in (Union, types.UnionType)


def _non_none_args(value: Any) -> List[Any]:
    return [arg for arg in get_args(value) if arg is not type(None)]


class PrimitiveToC3Type(TypeConverter[Any, C3Type, PythonConversionState]):

    def supports(self, value: Any, state: PythonConversionState) -> bool:
        return isinstance(value, type) and value in _PRIMITIVE_TYPES

    def convert(self, value: Any, context: ConversionContext) -> C3Type:
        return PrimitiveC3Type(type=_PRIMITIVE_TYPES[value])


class AnnotatedToC3Type(TypeConverter[Any, C3Type, PythonConversionState]):
    """Unwraps ``Annotated[T, ...]``, honouring primitive overrides and member tags."""

    def supports(self, value: Any, state: PythonConversionState) -> bool:
        return get_origin(value) is Annotated

    def convert(self, value: Any, context: ConversionContext) -> C3Type:
        base, *metadata = get_args(value)
        overrides = [meta for meta in metadata if isinstance(meta, PrimitiveOverride)]
        if overrides:
            c3_type: C3Type = PrimitiveC3Type(type=overrides[-1].kind.value)
        else:
            c3_type = context.convert(base)

        return attach_decorators(c3_type, decorators_for(get_tags(value)))


class OptionalToC3Type(TypeConverter[Any, C3Type, PythonConversionState]):
    """``T | None`` converts as ``T``; nullability is not part of the IDL."""

    def supports(self, value: Any, state: PythonConversionState) -> bool:
        return _is_union(value) and len(_non_none_args(value)) == 1

    def convert(self, value: Any, context: ConversionContext) -> C3Type:
        return context.convert(_non_none_args(value)[0])


class ArrayToC3Type(TypeConverter[Any, C3Type, PythonConversionState]):

    def supports(self, value: Any, state: PythonConversionState) -> bool:
        origin = get_origin(value)
        args = get_args(value)
        if origin is tuple:
            return len(args) == 2 and args[1] is Ellipsis
        return origin in _SEQUENCE_ORIGINS and len(args) == 1

    def convert(self, value: Any, context: ConversionContext) -> C3Type:
        return ArrayC3Type(contains=context.convert(get_args(value)[0]))


class EnumToC3Type(TypeConverter[Any, C3Type, PythonConversionState]):

    def supports(self, value: Any, state: PythonConversionState) -> bool:
        return isinstance(value, type) and issubclass(value, enum.Enum)

    def convert(self, value: Any, context: ConversionContext) -> C3Type:
        return EnumC3Type(values=[member.name for member in value])


class LiteralToC3Type(TypeConverter[Any, C3Type, PythonConversionState]):
    """A ``Literal`` of strings is an enum-shaped union."""

    def supports(self, value: Any, state: PythonConversionState) -> bool:
        return get_origin(value) is Literal and all(isinstance(arg, str) for arg in get_args(value))

    def convert(self, value: Any, context: ConversionContext) -> C3Type:
        return EnumC3Type(values=list(get_args(value)))


class UnionToC3Type(TypeConverter[Any, C3Type, PythonConversionState]):

    def supports(self, value: Any, state: PythonConversionState) -> bool:
        return _is_union(value)

    def convert(self, value: Any, context: ConversionContext) -> C3Type:
        return UnionC3Type(of=[context.convert(arg) for arg in _non_none_args(value)])


class ClassToC3Type(TypeConverter[Any, C3Type, PythonConversionState]):
    """Converts an annotated class (plain, dataclass or pydantic model) to an object node."""

    def supports(self, value: Any, state: PythonConversionState) -> bool:
        if not isinstance(value, type) or value.__module__ == "builtins" or issubclass(value, enum.Enum):
            return False
        return any(inspect.get_annotations(klass) for klass in value.__mro__ if klass is not object)

    def convert(self, value: Any, context: ConversionContext) -> C3Type:
        state: PythonConversionState = context.state
        ret = ObjectC3Type()

        with state.converting_class(value):
            for name, hint in self._members(value).items():
                ret.add_property(name, context.convert(hint))

        # only the class being converted at the top is an entity root, nested entities are plain objects
        is_root = context.depth == 1
        tags = [tag for tag in get_tags(value) if is_root or tag.name != ENTITY_TAG]
        attach_decorators(ret, decorators_for(tags))

        if is_root and is_entity(value):
            ret.namespace = state.namespace
            ret.name = value.__name__
        return ret

    @staticmethod
    def _members(cls: type) -> Dict[str, Any]:
        model_fields = getattr(cls, "model_fields", None)
        if isinstance(model_fields, dict): # pydantic model, Annotated metadata is moved onto the field
            members = {}
            for name, field in model_fields.items():
                hint = field.annotation
                if field.metadata:
                    hint = Annotated[(hint, *field.metadata)]
                members[name] = hint
            return members

        return {
            name: hint
            for name, hint in get_type_hints(cls, include_extras=True).items()
            if not name.startswith("_") and hint is not ClassVar and get_origin(hint) is not ClassVar
        }
