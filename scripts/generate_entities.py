"""Generate entity modules from a schema file.

Usage:
    python scripts/generate_entities.py schema.json out/ [--types types.yaml] [--write-types]
"""
import argparse
import sys
from pathlib import Path

from entitygen.bootstrap import bootstrap
from entitygen.core.config import Settings
from entitygen.core.errors import EntityGenError
from entitygen.generators.entity_gen.generator import generate_entities
from entitygen.generators.entity_gen.writer import write_files
from entitygen.types.config import TypeConfig
from entitygen.types.generator import TypeGenerator


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate entity modules from a schema file")
    parser.add_argument("schema", type=Path, help="JSON or YAML schema with an 'entities' list")
    parser.add_argument("out_dir", type=Path, help="Directory the modules are written to")
    parser.add_argument("--types", dest="type_config", help="YAML file of custom types")
    parser.add_argument("--package", help="Package of the generated entities")
    parser.add_argument(
        "--write-types",
        action="store_true",
        help="Also write the custom type modules instead of relying on runtime synthesis",
    )
    args = parser.parse_args()

    overrides = {}
    if args.type_config:
        overrides["type_config_path"] = args.type_config
    if args.package:
        overrides["entity_package"] = args.package
    settings = Settings(**overrides)

    try:
        registry = bootstrap(settings)
        files = generate_entities(args.schema, args.out_dir, registry=registry, settings=settings)
        if args.write_types and args.type_config:
            type_files = TypeGenerator(settings.file_header).generate_files(TypeConfig.from_yaml(Path(args.type_config)))
            write_files(type_files, args.out_dir)
            files.extend(type_files)
    except EntityGenError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    for f in files:
        print(f"  {f.path}")
    print(f"Generated {len(files)} file(s) in {args.out_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
