"""Tests for storage type classification."""
import pytest
from sqlalchemy import types as sa_types

from entitygen.core.errors import TypeLookupError
from entitygen.entity.definition import TypeTag
from entitygen.types.catalog import SimpleArray, TypeCatalog


@pytest.mark.parametrize("type_name,primitive,tag", [
    ("text", "string", TypeTag.STRING),
    ("string", "string", TypeTag.STRING),
    ("blob", "string", TypeTag.STRING),
    ("binary", "string", TypeTag.STRING),
    ("integer", "int", TypeTag.INT),
    ("bigint", "int", TypeTag.INT),
    ("smallint", "int", TypeTag.INT),
    ("float", "float", TypeTag.FLOAT),
    ("boolean", "bool", TypeTag.BOOL),
    ("json", "array", TypeTag.ARRAY),
    ("json_array", "array", TypeTag.ARRAY),
    ("simple_array", "array", TypeTag.ARRAY),
])
def test_classification_table(type_name, primitive, tag):
    """Every base storage type maps to its primitive and tag."""
    info = TypeCatalog.classify(type_name)
    assert info.primitive == primitive
    assert info.tag is tag
    assert TypeCatalog.is_base_type(type_name)


def test_unknown_type_is_not_classified():
    """Types outside the table raise a lookup error."""
    assert not TypeCatalog.is_base_type("datetime")
    with pytest.raises(TypeLookupError):
        TypeCatalog.classify("datetime")
    with pytest.raises(LookupError):
        TypeCatalog.implementation("datetime")


def test_implementations_cover_every_base_type():
    """Each base type has a SQLAlchemy column type."""
    assert set(TypeCatalog.IMPLEMENTATIONS) == set(TypeCatalog.base_type_names())
    assert TypeCatalog.implementation("integer") is sa_types.Integer
    assert TypeCatalog.implementation("simple_array") is SimpleArray


def test_annotations():
    assert TypeCatalog.annotation("string") == "str"
    assert TypeCatalog.annotation("array") == "Any"


def test_generated_namespace():
    assert TypeCatalog.is_generated("entitygen.generated_types.email_type.EmailType")
    assert not TypeCatalog.is_generated("sqlalchemy.sql.sqltypes.String")
    assert not TypeCatalog.is_generated("entitygen.generated_types_other.X")


def test_simple_array_round_trip_values():
    """SimpleArray joins on bind and splits on result."""
    simple_array = SimpleArray()
    assert simple_array.process_bind_param(["a", "b"], None) == "a,b"
    assert simple_array.process_bind_param(None, None) is None
    assert simple_array.process_result_value("a,b", None) == ["a", "b"]
    assert simple_array.process_result_value("", None) == []
