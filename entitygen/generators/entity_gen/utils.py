"""Naming helpers for entity and type generation."""
import keyword
import re
from typing import List

from entitygen.core.errors import InvalidIdentifierError


def to_snake_case(name: str) -> str:
    """Convert PascalCase or camelCase to snake_case."""
    s1 = re.sub('(.)([A-Z][a-z]+)', r'\1_\2', name)
    s2 = re.sub('([a-z0-9])([A-Z])', r'\1_\2', s1)
    return s2.lower()


def to_pascal_case(name: str) -> str:
    """Convert any name to PascalCase, splitting on non-alphanumerics."""
    parts: List[str] = [p for p in re.split(r'[^0-9a-zA-Z]+', name) if p]
    result = "".join(p[:1].upper() + p[1:] for p in parts)
    if result[:1].isdigit():
        result = "T" + result
    return result


def entity_class_name(entity_name: str) -> str:
    """Short class name of an entity given its possibly dotted name."""
    return entity_name.rpartition(".")[2]


def package_to_path(package: str) -> str:
    return package.replace(".", "/")


def check_identifier(name: str, what: str) -> str:
    if not name.isidentifier() or keyword.iskeyword(name):
        raise InvalidIdentifierError(f"{what} '{name}' is not a valid Python identifier")
    return name
