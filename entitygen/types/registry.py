import logging
import threading
from typing import Any, Dict, Optional

from entitygen.core.errors import TypeLookupError, TypeRegistrationError
from entitygen.types.catalog import TypeCatalog

log = logging.getLogger(__name__)


def qualified_name(implementation: Any) -> str:
    return f"{implementation.__module__}.{implementation.__qualname__}"


class TypeRegistry:
    """Maps storage type names to their implementing column type classes.

    Owned by whoever runs process startup and passed explicitly to the
    generator, the synthesizer and the metadata builder.
    """

    def __init__(self, mapping: Optional[Dict[str, Any]] = None):
        self._types: Dict[str, Any] = dict(mapping or {})
        self._lock = threading.RLock()

    def has(self, name: str) -> bool:
        with self._lock:
            return name in self._types

    def register(self, name: str, implementation: Any) -> bool:
        """Register ``name``; returns False if it already maps to ``implementation``."""
        with self._lock:
            current = self._types.get(name)
            if current is implementation:
                return False
            if current is not None:
                raise TypeRegistrationError(
                    f"Type '{name}' is already registered to {qualified_name(current)}"
                )
            self._types[name] = implementation
        log.info("Registered type %s", qualified_name(implementation), extra={"db_type": name})
        return True

    def unregister(self, name: str) -> None:
        with self._lock:
            self._types.pop(name, None)

    def get(self, name: str) -> Any:
        with self._lock:
            try:
                return self._types[name]
            except KeyError:
                raise TypeLookupError(f"Unknown storage type '{name}'") from None

    def identity(self, name: str) -> str:
        return qualified_name(self.get(name))

    def types_map(self) -> Dict[str, str]:
        with self._lock:
            return {name: qualified_name(impl) for name, impl in self._types.items()}

    def named_services(self) -> Dict[str, str]:
        """Identities of the registered wrapper types, keyed by declared name."""
        return {
            name: identity
            for name, identity in self.types_map().items()
            if TypeCatalog.is_generated(identity)
        }

    @staticmethod
    def default() -> "TypeRegistry":
        return TypeRegistry(mapping=dict(TypeCatalog.IMPLEMENTATIONS))
