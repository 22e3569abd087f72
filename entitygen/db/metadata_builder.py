"""SQLAlchemy table builder fed by generated ``load_metadata`` methods."""
from typing import Any, List, Optional

from sqlalchemy import Column, MetaData, Table

from entitygen.types.registry import TypeRegistry


class FieldBuilder:
    def __init__(self, builder: "MetadataBuilder", column_name: str, type_name: str):
        self.builder = builder
        self.column_name = column_name
        self.type_name = type_name
        self._primary_key = False
        self._nullable = True

    def make_primary_key(self) -> "FieldBuilder":
        self._primary_key = True
        self._nullable = False
        return self

    def nullable(self, flag: bool = True) -> "FieldBuilder":
        self._nullable = flag
        return self

    def build(self) -> "MetadataBuilder":
        column_type = self.builder.registry.get(self.type_name)
        self.builder.add_column(Column(
            self.column_name,
            column_type,
            primary_key=self._primary_key,
            nullable=self._nullable,
        ))
        return self.builder


class MetadataBuilder:
    """Collects the table name and columns declared by an entity."""

    def __init__(self, metadata: MetaData, registry: TypeRegistry):
        self.metadata = metadata
        self.registry = registry
        self.table_name: Optional[str] = None
        self.columns: List[Column] = []

    def set_table(self, name: str) -> "MetadataBuilder":
        self.table_name = name
        return self

    def create_field(self, column_name: str, type_name: str) -> FieldBuilder:
        return FieldBuilder(self, column_name, type_name)

    def add_column(self, column: Column) -> None:
        self.columns.append(column)

    def build(self) -> Table:
        if self.table_name is None:
            raise ValueError("No table name was set")
        return Table(self.table_name, self.metadata, *self.columns)

    @classmethod
    def for_entity(cls, entity_cls: Any, metadata: MetaData, registry: TypeRegistry) -> Table:
        builder = cls(metadata, registry)
        entity_cls.load_metadata(builder)
        return builder.build()
