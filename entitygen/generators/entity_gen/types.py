"""Dataclasses for entity generation."""
from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional

from entitygen.entity.definition import TypeTag


@dataclass
class FieldMapping:
    """A persisted column of an entity as supplied by the schema."""
    field_name: str
    column_name: str
    type: str
    nullable: bool = False
    id: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FieldMapping":
        return cls(
            field_name=data["fieldName"],
            column_name=data.get("columnName", data["fieldName"]),
            type=data["type"],
            nullable=bool(data.get("nullable", False)),
            id=bool(data.get("id", False)),
        )


@dataclass
class JoinColumn:
    name: str
    referenced_column_name: str


@dataclass
class AssociationMapping:
    """A to-one association; the first join column becomes a field."""
    field_name: str
    target_entity: str
    join_columns: List[JoinColumn]
    nullable: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AssociationMapping":
        return cls(
            field_name=data["fieldName"],
            target_entity=data["targetEntity"],
            join_columns=[
                JoinColumn(name=jc["name"], referenced_column_name=jc.get("referencedColumnName", "id"))
                for jc in data.get("joinColumns", [])
            ],
            nullable=bool(data.get("nullable", True)),
        )


@dataclass
class ClassMetadata:
    """Schema description of one entity."""
    name: str
    table_name: str
    field_mappings: List[FieldMapping] = field(default_factory=list)
    association_mappings: List[AssociationMapping] = field(default_factory=list)
    explicit_identifier: Optional[List[str]] = None

    @property
    def identifier(self) -> List[str]:
        if self.explicit_identifier is not None:
            return list(self.explicit_identifier)
        return [f.column_name for f in self.field_mappings if f.id]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClassMetadata":
        return cls(
            name=data["name"],
            table_name=data["table"],
            field_mappings=[FieldMapping.from_dict(f) for f in data.get("fields", [])],
            association_mappings=[AssociationMapping.from_dict(a) for a in data.get("associations", [])],
            explicit_identifier=data.get("identifier"),
        )


@dataclass(frozen=True)
class FieldDescriptor:
    """Normalized per-column metadata used for rendering.

    Either ``is_base_type`` is set together with ``target_primitive`` and
    ``semantic_type_tag``, or it is unset and the wrapper class fields are set.
    """
    column_name: str
    field_name: str
    source_type: str
    is_base_type: bool
    nullable: bool
    is_primary_key: bool
    target_primitive: Optional[str] = None
    semantic_type_tag: Optional[TypeTag] = None
    wrapper_class_name: Optional[str] = None
    wrapper_fully_qualified_name: Optional[str] = None

    def __post_init__(self):
        base_set = self.target_primitive is not None and self.semantic_type_tag is not None
        wrapper_set = self.wrapper_class_name is not None and self.wrapper_fully_qualified_name is not None
        if self.is_base_type != base_set or self.is_base_type == wrapper_set:
            raise ValueError(f"Inconsistent type information for column '{self.column_name}'")

    @property
    def wrapper_module(self) -> Optional[str]:
        if self.wrapper_fully_qualified_name is None:
            return None
        return self.wrapper_fully_qualified_name.rpartition(".")[0]


@dataclass
class GeneratedFile:
    """Represents a generated file."""
    path: str  # Relative path from output directory
    content: str  # File contents
