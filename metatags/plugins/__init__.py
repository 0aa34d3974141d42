"""
Plugin System

Public API:
    PluginMeta     : plugin metadata dataclass
    PluginBase     : abstract base class for plugins
    PluginRegistry : registry + hook dispatcher
    plugin_registry: global singleton registry instance
"""

from .base import PluginBase, PluginMeta
from .registry import PluginRegistry, plugin_registry

__all__ = ["PluginBase", "PluginMeta", "PluginRegistry", "plugin_registry"]
