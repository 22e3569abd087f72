"""Immutable behaviour shared by all generated entities."""
from typing import Any, Dict

from entitygen.entity.definition import DefinitionCollection


class EntityMixin:
    """Value holder whose fields come from the subclass's ``create_definitions``.

    Generated subclasses declare one ``_<column>`` slot per field and an
    accessor method per field. Instances are immutable; use ``with_`` to
    derive a changed copy.
    """
    __slots__ = ()

    def __init__(self, **values: Any):
        definitions = self.create_definitions()
        unknown = [name for name in values if name not in definitions]
        if unknown:
            raise TypeError(f"{type(self).__name__} has no fields {', '.join(sorted(unknown))}")
        for definition in definitions:
            value = values.get(definition.name)
            definition.check(value)
            object.__setattr__(self, f"_{definition.name}", value)

    @staticmethod
    def create_definitions() -> DefinitionCollection:
        raise NotImplementedError

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def with_(self, name: str, value: Any) -> "EntityMixin":
        values = self.to_dict()
        values[name] = value
        return type(self)(**values)

    def to_dict(self) -> Dict[str, Any]:
        return {name: getattr(self, f"_{name}") for name in self.create_definitions().names()}

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self.to_dict().items())
        return f"{type(self).__name__}({fields})"
