"""File writer for entity generation."""
import logging
from pathlib import Path
from typing import List
from entitygen.generators.entity_gen.types import GeneratedFile

log = logging.getLogger(__name__)


def write_files(files: List[GeneratedFile], out_dir: Path) -> List[Path]:
    """
    Write generated files below ``out_dir``, leaving unchanged files untouched.

    Args:
        files: List of GeneratedFile objects to write
        out_dir: Base output directory path

    Returns:
        Paths of the files that were created or rewritten
    """
    out_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for file in files:
        file_path = out_dir / file.path
        if file_path.is_file() and file_path.read_text(encoding="utf-8") == file.content:
            continue
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(file.content, encoding="utf-8")
        written.append(file_path)

    log.info("Wrote %d of %d generated file(s) to %s", len(written), len(files), out_dir)
    return written
