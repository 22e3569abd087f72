"""Tests for settings, type configuration, logging and process bootstrap."""
import logging
import sys
import uuid

import pytest
from pydantic import ValidationError

from entitygen.bootstrap import bootstrap
from entitygen.core.config import Settings
from entitygen.core.errors import InvalidIdentifierError
from entitygen.core.logging import ContextFormatter
from entitygen.types.config import TypeConfig
from entitygen.types.generator import TypeGenerator
from entitygen.types.registry import TypeRegistry


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("ENTITYGEN_ENTITY_PACKAGE", "shop.entity")
    monkeypatch.setenv("ENTITYGEN_TEMP_DIR", "/var/tmp")
    settings = Settings()
    assert settings.entity_package == "shop.entity"
    assert settings.temp_dir == "/var/tmp"
    assert settings.type_config_path is None


def test_type_config_from_yaml(tmp_path):
    """Both a top-level 'types' key and a bare mapping are accepted, in order."""
    nested = tmp_path / "nested.yaml"
    nested.write_text("types:\n  zip: {baseType: string}\n  amount: {baseType: float, scale: 2}\n", encoding="utf-8")
    bare = tmp_path / "bare.yaml"
    bare.write_text("zip:\n  baseType: string\n", encoding="utf-8")

    types = TypeConfig.from_yaml(nested).get_types()
    assert list(types) == ["zip", "amount"]
    assert types["amount"].base_type == "float"
    assert TypeConfig.from_yaml(bare).get_types()["zip"].base_type == "string"


def test_type_config_validation():
    with pytest.raises(ValidationError):
        TypeConfig({"zip": {"base": "string"}})
    with pytest.raises(InvalidIdentifierError):
        TypeConfig({"e-mail": {"baseType": "string"}, "e_mail": {"baseType": "string"}})
    with pytest.raises(InvalidIdentifierError):
        TypeConfig({"--": {"baseType": "string"}})


def test_context_formatter_defaults():
    formatter = ContextFormatter("[entity=%(entity)s type=%(db_type)s] %(message)s")
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "hello", None, None)
    assert formatter.format(record) == "[entity=- type=-] hello"

    record = logging.LogRecord("x", logging.INFO, __file__, 1, "hello", None, None)
    record.entity = "Order"
    assert formatter.format(record) == "[entity=Order type=-] hello"


def test_bootstrap_without_types():
    registry = bootstrap(Settings())
    assert registry.has("integer")
    assert registry.named_services() == {}


def test_bootstrap_synthesizes_configured_types(tmp_path):
    """Configured custom types are registered before anything uses the registry."""
    type_name = f"zip_{uuid.uuid4().hex[:8]}"
    config_path = tmp_path / "types.yaml"
    config_path.write_text(f"types:\n  {type_name}:\n    baseType: string\n", encoding="utf-8")
    work_dir = tmp_path / "work"
    work_dir.mkdir()

    registry = TypeRegistry.default()
    try:
        result = bootstrap(
            Settings(type_config_path=str(config_path), temp_dir=str(work_dir)),
            registry=registry,
        )
        assert result is registry
        assert registry.has(type_name)
        assert list(work_dir.iterdir()) == []
    finally:
        sys.modules.pop(TypeGenerator().generate_module_name(type_name), None)
