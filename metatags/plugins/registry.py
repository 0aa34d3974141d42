"""
Plugin Registry

PluginRegistry: stores registered plugins and dispatches hook events to
subscribers. Each subscriber is awaited in turn; a failing subscriber is
logged and never reaches the caller, so a page response is never broken by
a plugin.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from metatags.plugins.base import PluginBase

logger = logging.getLogger(__name__)


class PluginRegistry:
    def __init__(self) -> None:
        self._plugins: dict[str, PluginBase] = {}
        self._hook_subscriptions: dict[str, list[PluginBase]] = defaultdict(list)

    def register(self, plugin: PluginBase) -> None:
        """Register a plugin and index its hook subscriptions."""
        if plugin.meta.name in self._plugins:
            self.unregister(plugin.meta.name)
        self._plugins[plugin.meta.name] = plugin
        for hook in plugin.meta.hooks:
            self._hook_subscriptions[hook].append(plugin)
        logger.info("Plugin registered: %s v%s", plugin.meta.name, plugin.meta.version)

    def unregister(self, name: str) -> PluginBase | None:
        """Remove a plugin and its hook subscriptions."""
        plugin = self._plugins.pop(name, None)
        if plugin is not None:
            for subscribers in self._hook_subscriptions.values():
                if plugin in subscribers:
                    subscribers.remove(plugin)
        return plugin

    def get(self, name: str) -> PluginBase | None:
        return self._plugins.get(name)

    def all_plugins(self) -> list[PluginBase]:
        return list(self._plugins.values())

    async def fire_hook(self, hook_name: str, payload: dict[str, Any]) -> list[Any]:
        """
        Fire a hook to all subscribing plugins.

        Returns:
            Return values of the subscribers that completed.
        """
        results: list[Any] = []
        for plugin in list(self._hook_subscriptions.get(hook_name, [])):
            try:
                results.append(await plugin.handle_hook(hook_name, payload))
            except Exception:
                logger.exception("Plugin %s failed on hook %s", plugin.meta.name, hook_name)
        return results

    async def shutdown(self) -> None:
        for plugin in self.all_plugins():
            await plugin.on_unload()


plugin_registry = PluginRegistry()
