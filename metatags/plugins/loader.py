"""
Plugin Loader

Reads the meta tags options from a JSON file and registers the plugin at
application startup.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from metatags.config import settings

if TYPE_CHECKING:
    from metatags.plugins.registry import PluginRegistry

logger = logging.getLogger(__name__)


def load_plugin_config(path: str | Path | None = None) -> dict[str, Any]:
    """
    Load the raw plugin options from disk.

    A missing file yields an empty dict, so every option takes its default.
    An unreadable file is logged and treated the same way.
    """
    config_file = Path(path or settings.metatags_config_file)
    if config_file.exists():
        try:
            return json.loads(config_file.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Failed to read meta tags config %s: %s", config_file, exc)
    return {}


async def initialize_plugins(registry: PluginRegistry, config_path: str | Path | None = None) -> None:
    """
    Load, configure and register the meta tags plugin.

    Raises:
        ConfigurationError: If the options do not validate
    """
    from metatags.extensions.registry import extension_registry, register_builtin_readers
    from metatags.plugins.metatags_plugin import MetaTagsPlugin

    if not extension_registry.extensions():
        register_builtin_readers(extension_registry)

    plugin = MetaTagsPlugin()
    await plugin.on_load(load_plugin_config(config_path))
    registry.register(plugin)

    logger.info("Plugin initialisation complete: %d plugins loaded", len(registry.all_plugins()))
