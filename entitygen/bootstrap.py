"""Process startup: logging, type registry and runtime wrapper types.

Call ``bootstrap`` once before generating entities or building metadata so
that every configured custom type exists and is registered.
"""
import logging
from pathlib import Path
from typing import Optional

from entitygen.core.config import Settings, settings as default_settings
from entitygen.core.logging import configure_logging
from entitygen.types.config import TypeConfig
from entitygen.types.registry import TypeRegistry
from entitygen.types.runtime import RuntimeStrategy

log = logging.getLogger(__name__)


def bootstrap(
    settings: Settings = default_settings,
    registry: Optional[TypeRegistry] = None,
) -> TypeRegistry:
    configure_logging(settings.log_level)
    registry = registry or TypeRegistry.default()

    if settings.type_config_path:
        type_config = TypeConfig.from_yaml(Path(settings.type_config_path))
        log.info("Synthesizing %d custom type(s)", len(type_config))
        RuntimeStrategy(registry, temp_dir=settings.temp_dir).generate(type_config)

    return registry
