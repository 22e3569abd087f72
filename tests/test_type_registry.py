"""Tests for the explicit type registry."""
import pytest
from sqlalchemy import types as sa_types

from entitygen.core.errors import TypeLookupError, TypeRegistrationError
from entitygen.types.registry import TypeRegistry, qualified_name


def test_default_registry_holds_base_types():
    """The default registry knows every base type."""
    registry = TypeRegistry.default()
    assert registry.has("string")
    assert registry.get("integer") is sa_types.Integer
    assert registry.identity("string") == qualified_name(sa_types.String)
    assert registry.named_services() == {}


def test_register_is_idempotent_for_same_implementation():
    registry = TypeRegistry()
    assert registry.register("money", sa_types.Float) is True
    assert registry.register("money", sa_types.Float) is False
    assert registry.types_map() == {"money": qualified_name(sa_types.Float)}


def test_register_conflict_raises():
    """A name cannot be rebound to a different implementation."""
    registry = TypeRegistry()
    registry.register("money", sa_types.Float)
    with pytest.raises(TypeRegistrationError):
        registry.register("money", sa_types.Integer)
    assert registry.get("money") is sa_types.Float


def test_unknown_name_raises_lookup_error():
    registry = TypeRegistry()
    assert not registry.has("nope")
    with pytest.raises(TypeLookupError):
        registry.get("nope")


def test_unregister():
    registry = TypeRegistry({"money": sa_types.Float})
    registry.unregister("money")
    registry.unregister("money")
    assert not registry.has("money")


def test_types_map_preserves_registration_order():
    registry = TypeRegistry()
    registry.register("b", sa_types.Text)
    registry.register("a", sa_types.Integer)
    assert list(registry.types_map()) == ["b", "a"]
