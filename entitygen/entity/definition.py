"""Field definitions shared by generated entities."""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Tuple, Union


class TypeTag(str, Enum):
    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    ARRAY = "array"


_TAG_CHECKS: Dict[TypeTag, Tuple[type, ...]] = {
    TypeTag.STRING: (str, bytes),
    TypeTag.INT: (int,),
    TypeTag.FLOAT: (int, float),
    TypeTag.BOOL: (bool,),
    TypeTag.ARRAY: (list, dict),
}


@dataclass(frozen=True)
class Definition:
    """One entity field: its name, type tag or wrapper type, nullability and filter flag."""
    name: str
    type: Union[TypeTag, type]
    nullable: bool
    filterable: bool = True

    @property
    def tag(self) -> TypeTag:
        """Type tag of the value, resolved through the base type for wrapper types."""
        if isinstance(self.type, TypeTag):
            return self.type
        # imported here: the catalog imports TypeTag from this module
        from entitygen.types.catalog import TypeCatalog
        return TypeCatalog.classify(self.type.base_type).tag

    def check(self, value: Any) -> None:
        if value is None:
            if not self.nullable:
                raise ValueError(f"Field '{self.name}' is not nullable")
            return
        tag = self.tag
        allowed = _TAG_CHECKS[tag]
        if not isinstance(value, allowed) or (tag in (TypeTag.INT, TypeTag.FLOAT) and isinstance(value, bool)):
            raise TypeError(
                f"Field '{self.name}' expects {tag.value}, got {type(value).__name__}"
            )


class DefinitionCollection:
    """Ordered, immutable set of definitions keyed by name."""

    def __init__(self, definitions: Iterable[Definition]):
        items: List[Definition] = []
        seen = set()
        for definition in definitions:
            if definition.name in seen:
                raise ValueError(f"Duplicate definition '{definition.name}'")
            seen.add(definition.name)
            items.append(definition)
        self._definitions: Tuple[Definition, ...] = tuple(items)

    def __iter__(self) -> Iterator[Definition]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def __contains__(self, name: object) -> bool:
        return any(d.name == name for d in self._definitions)

    def names(self) -> List[str]:
        return [d.name for d in self._definitions]

    def get(self, name: str) -> Definition:
        for definition in self._definitions:
            if definition.name == name:
                return definition
        raise KeyError(name)
