"""Naming and source rendering for wrapper types."""
import json
from typing import List

from entitygen.core.config import settings
from entitygen.generators.entity_gen.types import GeneratedFile
from entitygen.generators.entity_gen.utils import package_to_path, to_pascal_case, to_snake_case
from entitygen.types.catalog import GENERATED_TYPES_NAMESPACE
from entitygen.types.config import TypeConfig


class TypeGenerator:
    def __init__(self, header: str = settings.file_header):
        self.header = header

    def generate_class_name(self, type_name: str) -> str:
        return to_pascal_case(type_name) + "Type"

    def generate_module_name(self, type_name: str) -> str:
        return f"{GENERATED_TYPES_NAMESPACE}.{to_snake_case(self.generate_class_name(type_name))}"

    def generate_fully_qualified_name(self, type_name: str) -> str:
        return f"{self.generate_module_name(type_name)}.{self.generate_class_name(type_name)}"

    def generate(self, type_name: str, base_type: str) -> str:
        """Render the source unit of one wrapper type."""
        lines = [
            f"# {self.header}",
            "from entitygen.types.base import GeneratedType",
            "",
            "",
            f"class {self.generate_class_name(type_name)}(GeneratedType):",
            f"    base_type = {json.dumps(base_type)}",
            f"    type_name = {json.dumps(type_name)}",
            "",
        ]
        return "\n".join(lines)

    def generate_files(self, type_config: TypeConfig) -> List[GeneratedFile]:
        """Render every configured type as an ordinary module file."""
        files = []
        for type_name, entry in type_config.get_types().items():
            module_name = self.generate_module_name(type_name)
            files.append(GeneratedFile(
                path=f"{package_to_path(module_name)}.py",
                content=self.generate(type_name, entry.base_type),
            ))
        return files
