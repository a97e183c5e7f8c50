"""
Unit tests for Pydantic models in src/structures_cli/models/
"""
import pytest
from pydantic import ValidationError

from structures_cli.models import (
    ArrayC3Type,
    AutoGeneratedIdDecorator,
    EntityDecorator,
    EnumC3Type,
    MultiTenancyType,
    NotIndexedDecorator,
    ObjectC3Type,
    PrimitiveC3Type,
    Structure,
    UnionC3Type,
    from_wire,
    structure_id,
    to_wire,
)

# --- IDL Tests ---

def _sample_entity() -> ObjectC3Type:
    address = ObjectC3Type().add_property("street", PrimitiveC3Type(type="string"))
    entity = (
        ObjectC3Type(namespace="crm", name="Person")
        .add_property("id", PrimitiveC3Type(type="string").add_decorator(AutoGeneratedIdDecorator()))
        .add_property("address", address)
        .add_property("tags", ArrayC3Type(contains=PrimitiveC3Type(type="string")))
        .add_property("status", EnumC3Type(values=["ACTIVE", "INACTIVE"]))
        .add_property("value", UnionC3Type(of=[PrimitiveC3Type(type="int"), PrimitiveC3Type(type="date")]))
    )
    entity.add_decorator(EntityDecorator(multi_tenancy_type=MultiTenancyType.SHARED))
    return entity


def test_wire_document_shape():
    wire = to_wire(_sample_entity())

    assert wire["type"] == "object"
    assert wire["namespace"] == "crm"
    assert wire["name"] == "Person"
    assert wire["decorators"] == [{"type": "Entity", "multiTenancyType": "SHARED"}]
    assert wire["properties"]["id"] == {"type": "string", "decorators": [{"type": "AutoGeneratedId"}]}
    assert wire["properties"]["address"] == {
        "type": "object",
        "properties": {"street": {"type": "string", "decorators": []}},
        "decorators": [],
    }
    assert wire["properties"]["tags"]["contains"] == {"type": "string", "decorators": []}
    assert wire["properties"]["value"]["of"][1]["type"] == "date"


def test_wire_round_trip():
    entity = _sample_entity()
    restored = from_wire(to_wire(entity))

    assert restored == entity
    assert isinstance(restored.properties["id"].decorators[0], AutoGeneratedIdDecorator)
    assert isinstance(restored.properties["tags"], ArrayC3Type)


def test_from_wire_rejects_unknown_node_type():
    with pytest.raises(ValidationError):
        from_wire({"type": "map", "decorators": []})
    with pytest.raises(ValidationError):
        from_wire({"type": "string", "decorators": [{"type": "Unknown"}]})


def test_entity_decorator_defaults_and_alias():
    assert EntityDecorator().multi_tenancy_type == MultiTenancyType.NONE
    assert EntityDecorator.model_validate({"type": "Entity", "multiTenancyType": "SHARED"}).multi_tenancy_type == "SHARED"
    with pytest.raises(ValidationError):
        EntityDecorator.model_validate({"type": "Entity", "multiTenancyType": "PER_TENANT"})


def test_add_property_rejects_duplicates():
    entity = ObjectC3Type(name="Person").add_property("id", PrimitiveC3Type(type="string"))
    with pytest.raises(ValueError, match="Property 'id' is already defined on object Person"):
        entity.add_property("id", PrimitiveC3Type(type="int"))


def test_find_decorator():
    node = PrimitiveC3Type(type="string")
    assert not node.has_decorators
    assert node.find_decorator("NotIndexed") is None

    node.add_decorator(NotIndexedDecorator())
    assert node.has_decorators
    assert isinstance(node.find_decorator("NotIndexed"), NotIndexedDecorator)


def test_primitive_type_names_are_closed():
    with pytest.raises(ValidationError):
        PrimitiveC3Type(type="decimal")


def test_qualified_name():
    assert _sample_entity().qualified_name == "crm.Person"
    assert ObjectC3Type().qualified_name is None

# --- Structure Tests ---

def test_structure_id_is_lowercase():
    assert structure_id("CRM", "Person") == "crm.person"


def test_structure_from_entity_and_wire():
    structure = Structure.from_entity(_sample_entity(), description="People")

    assert structure.id == "crm.person"
    assert structure.published is False
    wire = structure.to_wire()
    assert wire["entityDefinition"]["name"] == "Person"
    assert wire["publishedTimestamp"] == 0
    assert "itemIndex" not in wire

    parsed = Structure.model_validate({**wire, "itemIndex": "crm-person-1", "serverOnly": True})
    assert parsed.item_index == "crm-person-1"
    assert parsed.entity_definition == structure.entity_definition


def test_structure_requires_entity_root():
    with pytest.raises(ValueError, match="Only entity roots"):
        Structure.from_entity(ObjectC3Type())


def test_structure_name_must_not_be_blank():
    with pytest.raises(ValidationError):
        Structure(namespace="crm", name=" ", entity_definition=ObjectC3Type())
