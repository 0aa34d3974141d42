"""
Plugin Base Classes

PluginMeta: declarative metadata for a plugin (name, version, hooks, config model).
PluginBase: abstract base class host plugins subclass.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel


@dataclass
class PluginMeta:
    """
    Declarative metadata describing a plugin.

    Attributes:
        name:         Machine-readable slug, e.g. "metatags".
        version:      Semver string, e.g. "1.0.0".
        description:  Human-readable description.
        hooks:        Hook names this plugin subscribes to.
        config_model: Pydantic model the plugin's options are validated against.
    """

    name: str
    version: str
    description: str
    hooks: list[str] = field(default_factory=list)
    config_model: type[BaseModel] | None = None


class PluginBase(ABC):
    """
    Abstract base class for host plugins.

    Subclasses must implement `meta` and `handle_hook`.
    """

    @property
    @abstractmethod
    def meta(self) -> PluginMeta:
        """Return the plugin's metadata."""
        ...

    async def on_load(self, config: dict[str, Any]) -> None:  # noqa: B027
        """Called once at startup with the plugin's raw config dict."""

    async def on_unload(self) -> None:  # noqa: B027
        """Called when the application shuts down."""

    @abstractmethod
    async def handle_hook(self, hook_name: str, payload: dict[str, Any]) -> Any:
        """
        Receive and process a hook event.

        Args:
            hook_name: The hook constant, e.g. "page.after_dispatch".
            payload:   Data provided by the hook dispatcher.
        """
