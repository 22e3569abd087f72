"""String templates for entity code generation (Jinja2-free)."""
import json
from typing import Iterable, Optional, Sequence

from entitygen.core.config import settings
from entitygen.core.errors import InvalidIdentifierError
from entitygen.entity.base import EntityMixin
from entitygen.generators.entity_gen.types import FieldDescriptor
from entitygen.generators.entity_gen.utils import check_identifier
from entitygen.types.catalog import TypeCatalog


ENTITY_IMPORTS = [
    "from entitygen.db.metadata_builder import MetadataBuilder",
    "from entitygen.entity.base import EntityMixin",
    "from entitygen.entity.definition import Definition, DefinitionCollection, TypeTag",
]

RESERVED_NAMES = {name for name in dir(EntityMixin) if not name.startswith("__")} | {"load_metadata"}


def _literal(value: str) -> str:
    """Double-quoted Python string literal."""
    return json.dumps(value)


def _bool(value: bool) -> str:
    return "True" if value else "False"


def render_method(
    name: str,
    args: Optional[Sequence[str]],
    return_type: Optional[str],
    optional: bool,
    body: str,
    static: bool = False,
) -> str:
    """Render one method of the entity class.

    Args:
        name: Method name
        args: Parameters after ``self`` (or all parameters for static methods)
        return_type: Annotation of the return value, empty for none
        optional: Wrap the return annotation in ``Optional``
        body: Method body, one statement per line, relative indentation
        static: Render as ``@staticmethod``
    """
    lines = []
    params = list(args or [])
    if static:
        lines.append("    @staticmethod")
    else:
        params.insert(0, "self")

    signature = f"    def {name}({', '.join(params)})"
    if return_type:
        signature += f" -> {f'Optional[{return_type}]' if optional else return_type}"
    lines.append(signature + ":")

    for line in body.split("\n"):
        lines.append(f"        {line}" if line else "")
    return "\n".join(lines)


def render_typing(fields: Iterable[FieldDescriptor]) -> str:
    """Names the module needs from ``typing``, empty if none."""
    names = []
    if any(f.is_base_type and f.target_primitive == "array" for f in fields):
        names.append("Any")
    if any(f.nullable for f in fields):
        names.append("Optional")
    return ", ".join(names)


def render_uses(fields: Iterable[FieldDescriptor]) -> str:
    """Import lines of the wrapper types, one per source type, sorted."""
    lines = {}
    for field in fields:
        if field.is_base_type:
            continue
        lines[field.source_type] = f"from {field.wrapper_module} import {field.wrapper_class_name}"
    return "\n".join(sorted(lines.values()))


def render_properties(fields: Iterable[FieldDescriptor]) -> str:
    lines = ["    __slots__ = ("]
    for field in fields:
        lines.append(f"        {_literal('_' + field.column_name)},")
    lines.append("    )")
    return "\n".join(lines)


def render_getters(fields: Iterable[FieldDescriptor]) -> str:
    methods = []
    for field in fields:
        if field.is_base_type:
            return_type = TypeCatalog.annotation(field.target_primitive)
        else:
            return_type = field.wrapper_class_name
        methods.append(render_method(
            field.column_name,
            None,
            return_type,
            field.nullable,
            f"return self._{field.column_name}",
        ))
    return "\n\n".join(methods)


def render_definition(fields: Iterable[FieldDescriptor]) -> str:
    lines = ["return DefinitionCollection(["]
    for field in fields:
        if field.is_base_type:
            type_ = f"TypeTag.{field.semantic_type_tag.name}"
        else:
            type_ = field.wrapper_class_name
        lines.append(
            f"    Definition({_literal(field.column_name)}, {type_}, {_bool(field.nullable)}, True),"
        )
    lines.append("])")
    return render_method("create_definitions", None, "DefinitionCollection", False, "\n".join(lines), static=True)


def render_metadata(table_name: str, identifier: Iterable[str], fields: Iterable[FieldDescriptor]) -> str:
    identifier = set(identifier)
    lines = [f"builder.set_table({_literal(table_name)})", ""]
    for field in fields:
        if field.is_base_type:
            type_ = _literal(field.source_type)
        else:
            type_ = f"{field.wrapper_class_name}.service_name()"

        line = f"builder.create_field({_literal(field.column_name)}, {type_})"
        if field.column_name in identifier:
            line += ".make_primary_key()"
        else:
            line += f".nullable({_bool(field.nullable)})"
        line += ".build()"
        lines.append(line)

    return render_method("load_metadata", ["builder: MetadataBuilder"], "", False, "\n".join(lines), static=True)


def render_entity(
    class_name: str,
    table_name: str,
    identifier: Iterable[str],
    fields: Iterable[FieldDescriptor],
    header: str = settings.file_header,
    namespace: str = settings.entity_package,
) -> str:
    """Generate the module source of one entity class.

    Fields are rendered in the order given; the output depends on nothing
    else, so identical input always gives identical text.
    """
    check_identifier(class_name, "Class name")
    for part in namespace.split("."):
        check_identifier(part, "Namespace")
    fields = list(fields)
    for field in fields:
        check_identifier(field.column_name, "Column name")
        if field.column_name.startswith("_"):
            raise InvalidIdentifierError(f"Column name '{field.column_name}' must not start with an underscore")
        if field.column_name in RESERVED_NAMES:
            raise InvalidIdentifierError(f"Column name '{field.column_name}' clashes with an entity method")

    lines = [
        "# " + header.replace("\n", "\n# "),
        f'"""Entity {class_name} of {namespace}."""',
    ]
    typing_names = render_typing(fields)
    if typing_names:
        lines.extend([f"from typing import {typing_names}", ""])
    lines.extend(ENTITY_IMPORTS)
    uses = render_uses(fields)
    if uses:
        lines.append(uses)
    lines.extend([
        "",
        "",
        f"class {class_name}(EntityMixin):",
        render_properties(fields),
        "",
    ])
    if fields:
        lines.extend([render_getters(fields), ""])
    lines.extend([
        render_definition(fields),
        "",
        render_metadata(table_name, identifier, fields),
        "",
    ])
    return "\n".join(lines)
