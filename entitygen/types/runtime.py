"""Runtime synthesis of wrapper types.

Each configured custom type gets a small module in the generated namespace.
The module source is written to a temporary file, executed into a fresh
module object registered in ``sys.modules`` and the file is removed again.
The class is then registered in the type registry under its declared name.
"""
import importlib.util
import logging
import os
import sys
import tempfile
import threading
from typing import Any, List, Optional

from entitygen.core.errors import FileSystemError, SynthesisError
from entitygen.types.config import TypeConfig
from entitygen.types.generator import TypeGenerator
from entitygen.types.registry import TypeRegistry

log = logging.getLogger(__name__)


def find_class(fully_qualified_name: str) -> Optional[Any]:
    """Return the class if its module is already loaded in this process."""
    module_name, _, class_name = fully_qualified_name.rpartition(".")
    module = sys.modules.get(module_name)
    if module is None:
        return None
    return getattr(module, class_name, None)


class RuntimeStrategy:
    # existence check, load and register must not interleave between callers
    _lock = threading.Lock()

    def __init__(
        self,
        registry: TypeRegistry,
        generator: Optional[TypeGenerator] = None,
        temp_dir: Optional[str] = None,
    ):
        self.registry = registry
        self.generator = generator or TypeGenerator()
        self.temp_dir = temp_dir

    def generate(self, type_config: TypeConfig) -> None:
        """Create missing wrapper types and register every configured name.

        Entries are handled one at a time in configuration order. If any entry
        fails, registrations and modules created by this call are rolled back
        before the error propagates; calling again after fixing the cause is safe.
        """
        with self._lock:
            registered: List[str] = []
            loaded: List[str] = []
            try:
                for type_name, entry in type_config.get_types().items():
                    fqn = self.generator.generate_fully_qualified_name(type_name)
                    cls = find_class(fqn)
                    if cls is None:
                        cls = self._load(type_name, entry.base_type)
                        loaded.append(self.generator.generate_module_name(type_name))
                    if self.registry.register(type_name, cls):
                        registered.append(type_name)
            except Exception:
                log.error("Type synthesis failed, rolling back %d type(s)", len(registered))
                for type_name in reversed(registered):
                    self.registry.unregister(type_name)
                for module_name in loaded:
                    sys.modules.pop(module_name, None)
                raise

    def _load(self, type_name: str, base_type: str) -> Any:
        class_name = self.generator.generate_class_name(type_name)
        module_name = self.generator.generate_module_name(type_name)
        source = self.generator.generate(type_name, base_type)
        if module_name in sys.modules:
            raise SynthesisError(
                f"Module {module_name} is already loaded without {class_name}; "
                f"type '{type_name}' clashes with a previously synthesized type"
            )

        path = self._write(class_name, source, type_name)
        try:
            module = self._exec(module_name, path, type_name)
        finally:
            self._remove(path, type_name)

        cls = getattr(module, class_name, None)
        if cls is None:
            sys.modules.pop(module_name, None)
            raise SynthesisError(f"Module {module_name} does not define {class_name}")
        log.info("Synthesized %s", class_name, extra={"db_type": type_name})
        return cls

    def _write(self, class_name: str, source: str, type_name: str) -> str:
        try:
            fd, path = tempfile.mkstemp(prefix=f"{class_name}.", suffix=".py", dir=self.temp_dir)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(source)
        except OSError as e:
            log.error("Cannot write temporary source: %s", e, extra={"db_type": type_name})
            raise FileSystemError(f"Cannot write temporary source for {class_name}: {e}") from e
        return path

    def _exec(self, module_name: str, path: str, type_name: str) -> Any:
        try:
            with open(path, "r", encoding="utf-8") as f:
                code = compile(f.read(), path, "exec")
        except OSError as e:
            raise FileSystemError(f"Cannot read temporary source {path}: {e}") from e
        except SyntaxError as e:
            log.error("Synthesized source does not compile: %s", e, extra={"db_type": type_name})
            raise SynthesisError(f"Source of {module_name} does not compile: {e}") from e

        spec = importlib.util.spec_from_loader(module_name, loader=None, origin=path)
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            exec(code, module.__dict__)
        except Exception as e:
            sys.modules.pop(module_name, None)
            log.error("Cannot load %s: %s", module_name, e, extra={"db_type": type_name})
            raise SynthesisError(f"Cannot load {module_name}: {e}") from e
        return module

    def _remove(self, path: str, type_name: str) -> None:
        try:
            os.unlink(path)
        except OSError as e:
            log.error("Cannot remove temporary source: %s", e, extra={"db_type": type_name})
            raise FileSystemError(f"Cannot remove temporary source {path}: {e}") from e
