"""Custom type configuration: declared type name -> base storage type."""
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml
from pydantic import BaseModel, ConfigDict, Field

from entitygen.core.errors import InvalidIdentifierError
from entitygen.generators.entity_gen.utils import to_pascal_case, to_snake_case


class TypeEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    base_type: str = Field(..., alias="baseType")


class TypeConfig:
    def __init__(self, types: Mapping[str, Any]):
        self._types: Dict[str, TypeEntry] = {}
        class_names: Dict[str, str] = {}
        for name, entry in types.items():
            class_name = to_pascal_case(name)
            key = to_snake_case(class_name)
            if not class_name:
                raise InvalidIdentifierError(f"Type name '{name}' has no usable characters")
            if key in class_names:
                raise InvalidIdentifierError(
                    f"Type names '{class_names[key]}' and '{name}' produce the same class"
                )
            class_names[key] = name
            self._types[name] = entry if isinstance(entry, TypeEntry) else TypeEntry.model_validate(entry)

    def get_types(self) -> Dict[str, TypeEntry]:
        return dict(self._types)

    def __len__(self) -> int:
        return len(self._types)

    @classmethod
    def from_yaml(cls, path: Path) -> "TypeConfig":
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return cls(data.get("types", data))
