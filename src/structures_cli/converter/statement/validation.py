"""
IDL to validation statements: one check per leaf field of an entity.
"""
from typing import Dict, List, Optional, Sequence, Tuple

from ...models.idl import ArrayC3Type, C3Type, EnumC3Type, ObjectC3Type, PrimitiveC3Type, UnionC3Type
from ..base import ConverterStrategy, LoggerOrFactory, StateOrFactory, TypeConverter
from ..context import ConversionContext, create_conversion_context
from ..json_path import JsonPathState
from .statements import CompositeStatement, MembershipCheckStatement, Statement, TypeCheckStatement

PYTHON_TYPE_NAMES: Dict[str, Tuple[str, ...]] = {
    "string": ("str",),
    "char": ("str",),
    "int": ("int",),
    "long": ("int",),
    "short": ("int",),
    "byte": ("int",),
    "float": ("float", "int"),
    "double": ("float", "int"),
    "boolean": ("bool",),
    "date": ("datetime.date",),
    "enum": ("str",),
    "array": ("list",),
    "object": ("dict",),
}


def python_type_names(c3_type: C3Type) -> Tuple[str, ...]:
    """Python types a value of ``c3_type`` may have at runtime."""
    if isinstance(c3_type, UnionC3Type):
        names: List[str] = []
        for alternative in c3_type.of:
            names.extend(name for name in python_type_names(alternative) if name not in names)
        return tuple(names)
    return PYTHON_TYPE_NAMES[c3_type.type]


class ValidationConversionState(JsonPathState):

    def __init__(self, source_name: str):
        super().__init__()
        self.source_name = source_name

    @property
    def path(self) -> str:
        return self.qualify(self.source_name)


class PrimitiveC3TypeToValidation(TypeConverter[C3Type, Statement, ValidationConversionState]):

    def supports(self, value: C3Type, state: ValidationConversionState) -> bool:
        return isinstance(value, PrimitiveC3Type)

    def convert(self, value: C3Type, context: ConversionContext) -> Statement:
        return TypeCheckStatement(path=context.state.path, type_names=python_type_names(value))


class EnumC3TypeToValidation(TypeConverter[C3Type, Statement, ValidationConversionState]):

    def supports(self, value: C3Type, state: ValidationConversionState) -> bool:
        return isinstance(value, EnumC3Type)

    def convert(self, value: C3Type, context: ConversionContext) -> Statement:
        return MembershipCheckStatement(path=context.state.path, values=tuple(value.values))


class ArrayC3TypeToValidation(TypeConverter[C3Type, Statement, ValidationConversionState]):

    def supports(self, value: C3Type, state: ValidationConversionState) -> bool:
        return isinstance(value, ArrayC3Type)

    def convert(self, value: C3Type, context: ConversionContext) -> Statement:
        return TypeCheckStatement(path=context.state.path, type_names=python_type_names(value))


class ObjectC3TypeToValidation(TypeConverter[C3Type, Statement, ValidationConversionState]):

    def supports(self, value: C3Type, state: ValidationConversionState) -> bool:
        return isinstance(value, ObjectC3Type)

    def convert(self, value: C3Type, context: ConversionContext) -> Statement:
        state: ValidationConversionState = context.state
        statements = []
        for name, property_type in value.properties.items():
            with state.push_path(name):
                statements.append(context.convert(property_type))
        return CompositeStatement(statements=statements)


class UnionC3TypeToValidation(TypeConverter[C3Type, Statement, ValidationConversionState]):

    def supports(self, value: C3Type, state: ValidationConversionState) -> bool:
        return isinstance(value, UnionC3Type)

    def convert(self, value: C3Type, context: ConversionContext) -> Statement:
        return TypeCheckStatement(path=context.state.path, type_names=python_type_names(value))


class ValidationConverterStrategy(ConverterStrategy[C3Type, Statement, ValidationConversionState]):

    def __init__(self, initial_state: StateOrFactory, logger: Optional[LoggerOrFactory] = None):
        self._initial_state = initial_state
        self._logger = logger
        self._type_converters = (
            PrimitiveC3TypeToValidation(),
            EnumC3TypeToValidation(),
            ArrayC3TypeToValidation(),
            ObjectC3TypeToValidation(),
            UnionC3TypeToValidation(),
        )

    def type_converters(self) -> Sequence[TypeConverter[C3Type, Statement, ValidationConversionState]]:
        return self._type_converters

    def initial_state(self) -> StateOrFactory:
        return self._initial_state

    def logger(self) -> LoggerOrFactory:
        if self._logger is None:
            return super().logger()
        return self._logger

    def value_to_string(self, value: C3Type) -> str:
        return value.type


def generate_validations(c3_type: C3Type, source_name: str, logger: Optional[LoggerOrFactory] = None) -> List[Statement]:
    """Checks validating every leaf of ``c3_type`` under ``source_name``, in order."""
    strategy = ValidationConverterStrategy(lambda: ValidationConversionState(source_name), logger)
    return create_conversion_context(strategy).convert(c3_type).flatten()
