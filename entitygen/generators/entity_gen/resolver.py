"""Resolution of schema metadata into field descriptors."""
import logging
from typing import Dict, Iterable, Mapping

from entitygen.core.errors import ColumnCollisionError, TypeLookupError
from entitygen.generators.entity_gen.types import (
    AssociationMapping,
    ClassMetadata,
    FieldDescriptor,
    FieldMapping,
)
from entitygen.types.catalog import TypeCatalog
from entitygen.types.registry import TypeRegistry

log = logging.getLogger(__name__)


class FieldResolver:
    """Turns field and association mappings into ordered field descriptors.

    ``types_map`` maps every storage type name to the fully-qualified name of
    its implementation. Types implemented inside the generated namespace are
    wrappers; their canonical identity is looked up in ``named_services``.
    """

    def __init__(self, types_map: Mapping[str, str], named_services: Mapping[str, str]):
        self.types_map = types_map
        self.named_services = named_services

    @classmethod
    def from_registry(cls, registry: TypeRegistry) -> "FieldResolver":
        return cls(registry.types_map(), registry.named_services())

    def describe(
        self,
        column_name: str,
        field_name: str,
        type_name: str,
        nullable: bool,
        is_primary_key: bool,
    ) -> FieldDescriptor:
        try:
            identity = self.types_map[type_name]
        except KeyError:
            raise TypeLookupError(f"Unknown storage type '{type_name}' for column '{column_name}'") from None

        if TypeCatalog.is_generated(identity):
            try:
                identity = self.named_services[type_name]
            except KeyError:
                raise TypeLookupError(f"Custom type '{type_name}' is not a named service") from None
            return FieldDescriptor(
                column_name=column_name,
                field_name=field_name,
                source_type=type_name,
                is_base_type=False,
                nullable=nullable,
                is_primary_key=is_primary_key,
                wrapper_class_name=identity.rpartition(".")[2],
                wrapper_fully_qualified_name=identity,
            )

        info = TypeCatalog.classify(type_name)
        return FieldDescriptor(
            column_name=column_name,
            field_name=field_name,
            source_type=type_name,
            is_base_type=True,
            nullable=nullable,
            is_primary_key=is_primary_key,
            target_primitive=info.primitive,
            semantic_type_tag=info.tag,
        )

    def resolve(
        self,
        field_mappings: Iterable[FieldMapping],
        association_mappings: Iterable[AssociationMapping],
        target_metadata: Mapping[str, ClassMetadata],
        identifier: Iterable[str] = (),
    ) -> Dict[str, FieldDescriptor]:
        """Resolve plain fields, then associations, keyed by column name in that order."""
        identifier = set(identifier)
        fields: Dict[str, FieldDescriptor] = {}

        for mapping in field_mappings:
            descriptor = self.describe(
                mapping.column_name,
                mapping.field_name,
                mapping.type,
                mapping.nullable,
                mapping.column_name in identifier,
            )
            self._add(fields, descriptor)

        for association in association_mappings:
            if not association.join_columns:
                raise TypeLookupError(f"Association '{association.field_name}' has no join column")
            join_column = association.join_columns[0]
            target = target_metadata.get(association.target_entity)
            if target is None:
                raise TypeLookupError(
                    f"No metadata for target entity '{association.target_entity}' "
                    f"of association '{association.field_name}'"
                )
            referenced = next(
                (f for f in target.field_mappings if f.column_name == join_column.referenced_column_name),
                None,
            )
            if referenced is None:
                raise TypeLookupError(
                    f"Entity '{association.target_entity}' has no column "
                    f"'{join_column.referenced_column_name}'"
                )
            # join columns are always required and never part of the key
            descriptor = self.describe(
                join_column.name,
                association.field_name,
                referenced.type,
                False,
                False,
            )
            self._add(fields, descriptor)

        return fields

    def resolve_metadata(
        self,
        metadata: ClassMetadata,
        full_metadata: Mapping[str, ClassMetadata],
    ) -> Dict[str, FieldDescriptor]:
        return self.resolve(
            metadata.field_mappings,
            metadata.association_mappings,
            full_metadata,
            metadata.identifier,
        )

    @staticmethod
    def _add(fields: Dict[str, FieldDescriptor], descriptor: FieldDescriptor) -> None:
        if descriptor.column_name in fields:
            log.error("Column collision on %s", descriptor.column_name)
            raise ColumnCollisionError(
                f"Column '{descriptor.column_name}' is mapped by both "
                f"'{fields[descriptor.column_name].field_name}' and '{descriptor.field_name}'"
            )
        fields[descriptor.column_name] = descriptor
