"""
Tests for data-mapper and validation statement generation.
"""
import pytest

from structures_cli.converter import UnsupportedTypeError, create_conversion_context
from structures_cli.converter.python import PythonConversionState, PythonConverterStrategy
from structures_cli.converter.statement import (
    AssignmentStatement,
    CompositeStatement,
    MembershipCheckStatement,
    StatementMapperConversionState,
    StatementMapperConverterStrategy,
    TypeCheckStatement,
    generate_statements,
    generate_validations,
)
from structures_cli.converter.statement.validation import python_type_names
from structures_cli.models import (
    ArrayC3Type,
    C3Type,
    EnumC3Type,
    ObjectC3Type,
    PrimitiveC3Type,
    UnionC3Type,
)


@pytest.fixture
def person_type(person_declaration):
    context = create_conversion_context(PythonConverterStrategy(PythonConversionState("crm")))
    return context.convert(person_declaration)


def test_person_assignments(person_type):
    statements = generate_statements(person_type, "entity", "ret")

    assert [s.render() for s in statements] == [
        "ret.id = entity.id",
        "ret.firstName = entity.firstName",
        "ret.lastName = entity.lastName",
        "ret.age = entity.age",
        "ret.address.street = entity.address.street",
        "ret.address.city = entity.address.city",
        "ret.address.state = entity.address.state",
        "ret.address.zip = entity.address.zip",
    ]


def test_root_statement_has_one_child_per_property(person_type):
    strategy = StatementMapperConverterStrategy(lambda: StatementMapperConversionState("entity", "ret"))
    context = create_conversion_context(strategy)
    root = context.convert(person_type)

    assert isinstance(root, CompositeStatement)
    assert len(root.statements) == 5
    assert isinstance(root.statements[4], CompositeStatement)
    assert context.state.json_path == ""


def test_paths_do_not_leak_between_siblings():
    c3_type = (
        ObjectC3Type()
        .add_property("a", ObjectC3Type().add_property("x", PrimitiveC3Type(type="int")))
        .add_property("b", PrimitiveC3Type(type="string"))
        .add_property("c", ObjectC3Type().add_property("y", ObjectC3Type().add_property("z", PrimitiveC3Type(type="date"))))
        .add_property("d", PrimitiveC3Type(type="boolean"))
    )

    assert [s.render() for s in generate_statements(c3_type, "src", "dst")] == [
        "dst.a.x = src.a.x",
        "dst.b = src.b",
        "dst.c.y.z = src.c.y.z",
        "dst.d = src.d",
    ]


def test_arrays_unions_and_enums_are_copied_whole():
    c3_type = (
        ObjectC3Type()
        .add_property("tags", ArrayC3Type(contains=ObjectC3Type().add_property("label", PrimitiveC3Type(type="string"))))
        .add_property("value", UnionC3Type(of=[PrimitiveC3Type(type="int"), PrimitiveC3Type(type="string")]))
        .add_property("status", EnumC3Type(values=["ON", "OFF"]))
    )

    assert generate_statements(c3_type, "entity", "ret") == [
        AssignmentStatement(lhs="ret.tags", rhs="entity.tags"),
        AssignmentStatement(lhs="ret.value", rhs="entity.value"),
        AssignmentStatement(lhs="ret.status", rhs="entity.status"),
    ]


def test_primitive_root_assigns_whole_value():
    assert generate_statements(PrimitiveC3Type(type="int"), "a", "b") == [AssignmentStatement(lhs="b", rhs="a")]


def test_unknown_node_kind_is_unsupported():
    with pytest.raises(UnsupportedTypeError, match="No TypeConverter can be found for mystery"):
        generate_statements(C3Type(type="mystery"), "entity", "ret")


def test_composite_render_joins_lines():
    composite = CompositeStatement(statements=[
        AssignmentStatement(lhs="b.x", rhs="a.x"),
        CompositeStatement(statements=[AssignmentStatement(lhs="b.y.z", rhs="a.y.z")]),
    ])
    assert composite.render() == "b.x = a.x\nb.y.z = a.y.z"


def test_person_validations(person_type):
    statements = generate_validations(person_type, "entity")

    assert [s.render() for s in statements] == [
        "isinstance(entity.id, str)",
        "isinstance(entity.firstName, str)",
        "isinstance(entity.lastName, str)",
        "isinstance(entity.age, int)",
        "isinstance(entity.address.street, str)",
        "isinstance(entity.address.city, str)",
        "isinstance(entity.address.state, str)",
        "isinstance(entity.address.zip, str)",
    ]


def test_validation_statement_kinds():
    c3_type = (
        ObjectC3Type()
        .add_property("status", EnumC3Type(values=["ON", "OFF"]))
        .add_property("scores", ArrayC3Type(contains=PrimitiveC3Type(type="double")))
        .add_property("ratio", PrimitiveC3Type(type="float"))
        .add_property("value", UnionC3Type(of=[
            PrimitiveC3Type(type="long"),
            ObjectC3Type(),
            PrimitiveC3Type(type="int"),
        ]))
    )

    assert generate_validations(c3_type, "e") == [
        MembershipCheckStatement(path="e.status", values=("ON", "OFF")),
        TypeCheckStatement(path="e.scores", type_names=("list",)),
        TypeCheckStatement(path="e.ratio", type_names=("float", "int")),
        TypeCheckStatement(path="e.value", type_names=("int", "dict")),
    ]
    assert generate_validations(c3_type, "e")[0].render() == "e.status in ('ON', 'OFF')"
    assert generate_validations(c3_type, "e")[2].render() == "isinstance(e.ratio, (float, int))"


def test_python_type_names_of_nested_union():
    union = UnionC3Type(of=[
        PrimitiveC3Type(type="string"),
        UnionC3Type(of=[PrimitiveC3Type(type="char"), ArrayC3Type(contains=PrimitiveC3Type(type="int"))]),
    ])
    assert python_type_names(union) == ("str", "list")
