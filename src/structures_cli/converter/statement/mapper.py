"""
IDL to data-mapper statements.

Walks an entity's IDL tree and emits the assignments that copy every field
from a source variable to a target variable, e.g.
``ret.address.street = entity.address.street``.
"""
from typing import List, Optional, Sequence

from ...models.idl import ArrayC3Type, C3Type, EnumC3Type, ObjectC3Type, PrimitiveC3Type, UnionC3Type
from ..base import ConverterStrategy, LoggerOrFactory, StateOrFactory, TypeConverter
from ..context import ConversionContext, create_conversion_context
from ..json_path import JsonPathState
from .statements import AssignmentStatement, CompositeStatement, Statement


class StatementMapperConversionState(JsonPathState):

    def __init__(self, source_name: str, target_name: str):
        super().__init__()
        self.source_name = source_name
        self.target_name = target_name

    def assignment(self) -> AssignmentStatement:
        return AssignmentStatement(lhs=self.qualify(self.target_name), rhs=self.qualify(self.source_name))


class PrimitiveC3TypeToStatementMapper(TypeConverter[C3Type, Statement, StatementMapperConversionState]):
    """Leaf values, enums included, are copied with a single assignment."""

    def supports(self, value: C3Type, state: StatementMapperConversionState) -> bool:
        return isinstance(value, (PrimitiveC3Type, EnumC3Type))

    def convert(self, value: C3Type, context: ConversionContext) -> Statement:
        return context.state.assignment()


class ArrayC3TypeToStatementMapper(TypeConverter[C3Type, Statement, StatementMapperConversionState]):

    def supports(self, value: C3Type, state: StatementMapperConversionState) -> bool:
        return isinstance(value, ArrayC3Type)

    def convert(self, value: C3Type, context: ConversionContext) -> Statement:
        return context.state.assignment()


class ObjectC3TypeToStatementMapper(TypeConverter[C3Type, Statement, StatementMapperConversionState]):

    def supports(self, value: C3Type, state: StatementMapperConversionState) -> bool:
        return isinstance(value, ObjectC3Type)

    def convert(self, value: C3Type, context: ConversionContext) -> Statement:
        state: StatementMapperConversionState = context.state
        statements = []
        for name, property_type in value.properties.items():
            with state.push_path(name):
                statements.append(context.convert(property_type))
        return CompositeStatement(statements=statements)


class UnionC3TypeToStatementMapper(TypeConverter[C3Type, Statement, StatementMapperConversionState]):
    """The runtime shape of a union is unknown, so the whole value is copied."""

    def supports(self, value: C3Type, state: StatementMapperConversionState) -> bool:
        return isinstance(value, UnionC3Type)

    def convert(self, value: C3Type, context: ConversionContext) -> Statement:
        return context.state.assignment()


class StatementMapperConverterStrategy(ConverterStrategy[C3Type, Statement, StatementMapperConversionState]):

    def __init__(self, initial_state: StateOrFactory, logger: Optional[LoggerOrFactory] = None):
        self._initial_state = initial_state
        self._logger = logger
        self._type_converters = (
            PrimitiveC3TypeToStatementMapper(),
            ArrayC3TypeToStatementMapper(),
            ObjectC3TypeToStatementMapper(),
            UnionC3TypeToStatementMapper(),
        )

    def type_converters(self) -> Sequence[TypeConverter[C3Type, Statement, StatementMapperConversionState]]:
        return self._type_converters

    def initial_state(self) -> StateOrFactory:
        return self._initial_state

    def logger(self) -> LoggerOrFactory:
        if self._logger is None:
            return super().logger()
        return self._logger

    def value_to_string(self, value: C3Type) -> str:
        return value.type


def generate_statements(c3_type: C3Type, source_name: str, target_name: str, logger: Optional[LoggerOrFactory] = None) -> List[Statement]:
    """Assignments copying every leaf of ``c3_type`` from ``source_name`` to ``target_name``, in order."""
    strategy = StatementMapperConverterStrategy(lambda: StatementMapperConversionState(source_name, target_name), logger)
    return create_conversion_context(strategy).convert(c3_type).flatten()
