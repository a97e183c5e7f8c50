"""Generation of data-mapper and validation statements from IDL trees."""

from .mapper import StatementMapperConversionState, StatementMapperConverterStrategy, generate_statements
from .statements import (
    AssignmentStatement,
    CompositeStatement,
    MembershipCheckStatement,
    Statement,
    TypeCheckStatement,
)
from .validation import ValidationConversionState, ValidationConverterStrategy, generate_validations

__all__ = [
    "AssignmentStatement",
    "CompositeStatement",
    "MembershipCheckStatement",
    "Statement",
    "StatementMapperConversionState",
    "StatementMapperConverterStrategy",
    "TypeCheckStatement",
    "ValidationConversionState",
    "ValidationConverterStrategy",
    "generate_statements",
    "generate_validations",
]
