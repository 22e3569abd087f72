"""Orchestrator for entity code generation."""
import json
import logging
from pathlib import Path
from typing import Dict, List, Mapping, Optional

import yaml

from entitygen.core.config import Settings, settings as default_settings
from entitygen.generators.entity_gen.render import render_entity
from entitygen.generators.entity_gen.resolver import FieldResolver
from entitygen.generators.entity_gen.types import ClassMetadata, GeneratedFile
from entitygen.generators.entity_gen.utils import (
    entity_class_name,
    package_to_path,
    to_snake_case,
)
from entitygen.generators.entity_gen.writer import write_files
from entitygen.types.registry import TypeRegistry

log = logging.getLogger(__name__)


def load_schema(schema_path: Path) -> Dict[str, ClassMetadata]:
    """
    Read entity metadata from a JSON or YAML schema file.

    The file holds a top-level ``entities`` list; the result is keyed by
    entity name in file order.
    """
    with open(schema_path, "r", encoding="utf-8") as f:
        if schema_path.suffix in (".yml", ".yaml"):
            data = yaml.safe_load(f) or {}
        else:
            data = json.load(f)

    full_metadata = {}
    for entity_data in data.get("entities", []):
        metadata = ClassMetadata.from_dict(entity_data)
        full_metadata[metadata.name] = metadata
    return full_metadata


class EntityGenerator:
    def __init__(self, registry: TypeRegistry, settings: Settings = default_settings):
        self.registry = registry
        self.settings = settings

    def generate_code(
        self,
        name: str,
        metadata: ClassMetadata,
        full_metadata: Mapping[str, ClassMetadata],
    ) -> str:
        resolver = FieldResolver.from_registry(self.registry)
        fields = resolver.resolve_metadata(metadata, full_metadata)
        log.info("Rendering %d field(s)", len(fields), extra={"entity": name})
        return render_entity(
            entity_class_name(name),
            metadata.table_name,
            metadata.identifier,
            fields.values(),
            header=self.settings.file_header,
            namespace=self.settings.entity_package,
        )

    def generate_files(self, full_metadata: Mapping[str, ClassMetadata]) -> List[GeneratedFile]:
        package_path = package_to_path(self.settings.entity_package)
        files = []
        for name, metadata in full_metadata.items():
            module_name = to_snake_case(entity_class_name(name))
            files.append(GeneratedFile(
                path=f"{package_path}/{module_name}.py",
                content=self.generate_code(name, metadata, full_metadata),
            ))
        return files


def generate_entities(
    schema_path: Path,
    out_dir: Path,
    registry: Optional[TypeRegistry] = None,
    settings: Settings = default_settings,
) -> List[GeneratedFile]:
    """
    Generate one entity module per schema entity and write them to disk.

    Args:
        schema_path: Path to the JSON or YAML schema file
        out_dir: Output directory for generated files
        registry: Type registry holding every referenced storage type
        settings: Settings providing header and entity package

    Returns:
        List of GeneratedFile objects
    """
    full_metadata = load_schema(schema_path)
    generator = EntityGenerator(registry or TypeRegistry.default(), settings)
    files = generator.generate_files(full_metadata)
    write_files(files, out_dir)
    return files
