"""Static knowledge about storage types.

A storage type is either a *base* type, which maps straight onto a Python
primitive and a SQLAlchemy column type, or a *generated* wrapper type that
lives in ``GENERATED_TYPES_NAMESPACE`` and delegates to a base type.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from sqlalchemy import types as sa_types

from entitygen.core.errors import TypeLookupError
from entitygen.entity.definition import TypeTag


GENERATED_TYPES_NAMESPACE = "entitygen.generated_types"


@dataclass(frozen=True)
class BaseTypeInfo:
    primitive: str
    tag: TypeTag


class SimpleArray(sa_types.TypeDecorator):
    """List of strings stored comma separated in a text column."""

    impl = sa_types.Text
    cache_ok = True

    def process_bind_param(self, value, dialect):  # IN
        if value is None:
            return None
        return ",".join(str(item) for item in value)

    def process_result_value(self, value, dialect):  # OUT
        if not value:
            return []
        return value.split(",")


class TypeCatalog:
    BASE_TYPES: Dict[str, BaseTypeInfo] = {
        "text": BaseTypeInfo("string", TypeTag.STRING),
        "string": BaseTypeInfo("string", TypeTag.STRING),
        "blob": BaseTypeInfo("string", TypeTag.STRING),
        "binary": BaseTypeInfo("string", TypeTag.STRING),
        "integer": BaseTypeInfo("int", TypeTag.INT),
        "bigint": BaseTypeInfo("int", TypeTag.INT),
        "smallint": BaseTypeInfo("int", TypeTag.INT),
        "float": BaseTypeInfo("float", TypeTag.FLOAT),
        "boolean": BaseTypeInfo("bool", TypeTag.BOOL),
        "json": BaseTypeInfo("array", TypeTag.ARRAY),
        "json_array": BaseTypeInfo("array", TypeTag.ARRAY),
        "simple_array": BaseTypeInfo("array", TypeTag.ARRAY),
    }

    IMPLEMENTATIONS: Dict[str, Any] = {
        "text": sa_types.Text,
        "string": sa_types.String,
        "blob": sa_types.LargeBinary,
        "binary": sa_types.LargeBinary,
        "integer": sa_types.Integer,
        "bigint": sa_types.BigInteger,
        "smallint": sa_types.SmallInteger,
        "float": sa_types.Float,
        "boolean": sa_types.Boolean,
        "json": sa_types.JSON,
        "json_array": sa_types.JSON,
        "simple_array": SimpleArray,
    }

    ANNOTATIONS: Dict[str, str] = {
        "string": "str",
        "int": "int",
        "float": "float",
        "bool": "bool",
        "array": "Any",
    }

    @classmethod
    def base_type_names(cls) -> List[str]:
        return list(cls.BASE_TYPES)

    @classmethod
    def is_base_type(cls, name: str) -> bool:
        return name in cls.BASE_TYPES

    @classmethod
    def classify(cls, name: str) -> BaseTypeInfo:
        info: Optional[BaseTypeInfo] = cls.BASE_TYPES.get(name)
        if info is None:
            raise TypeLookupError(f"Storage type '{name}' has no primitive classification")
        return info

    @classmethod
    def implementation(cls, name: str) -> Any:
        try:
            return cls.IMPLEMENTATIONS[name]
        except KeyError:
            raise TypeLookupError(f"Storage type '{name}' is not a base type") from None

    @classmethod
    def annotation(cls, primitive: str) -> str:
        return cls.ANNOTATIONS[primitive]

    @staticmethod
    def is_generated(identity: str) -> bool:
        """Whether a fully-qualified class name lies in the generated namespace."""
        return identity.startswith(GENERATED_TYPES_NAMESPACE + ".")
