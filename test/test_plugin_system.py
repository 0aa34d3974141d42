"""
Plugin System Tests

Test classes:
    TestPluginMeta      : PluginMeta dataclass
    TestPluginRegistry  : registration and fire_hook failure isolation
    TestMetaTagsPlugin  : option validation and hook handling
    TestPluginLoader    : initialize_plugins
"""

from __future__ import annotations

import dataclasses
import json
from unittest.mock import AsyncMock

import pytest
from conftest import make_context

from metatags.exceptions import ConfigurationError
from metatags.plugins.base import PluginBase, PluginMeta
from metatags.plugins.hooks import ALL_HOOKS, HOOK_AFTER_DISPATCH
from metatags.plugins.loader import initialize_plugins
from metatags.plugins.metatags_plugin import MetaTagsPlugin
from metatags.plugins.registry import PluginRegistry
from metatags.schemas.config import MetaTagsConfig
from metatags.services.metatags_service import MetaTagsService, PassResult


class RecordingPlugin(PluginBase):
    def __init__(self, name="recorder", hooks=None, fail=False):
        self._meta = PluginMeta(name=name, version="1.0.0", description="records hooks", hooks=hooks or [HOOK_AFTER_DISPATCH])
        self.fail = fail
        self.calls: list[tuple[str, dict]] = []
        self.unloaded = False

    @property
    def meta(self) -> PluginMeta:
        return self._meta

    async def handle_hook(self, hook_name, payload):
        self.calls.append((hook_name, payload))
        if self.fail:
            raise RuntimeError("boom")
        return self.meta.name

    async def on_unload(self) -> None:
        self.unloaded = True


class TestPluginMeta:
    def test_is_dataclass(self):
        assert dataclasses.is_dataclass(PluginMeta)

    def test_default_hooks_isolated(self):
        m1 = PluginMeta(name="a", version="1.0.0", description="d")
        m2 = PluginMeta(name="b", version="1.0.0", description="d")
        m1.hooks.append("x")

        assert m2.hooks == []

    def test_default_config_model(self):
        assert PluginMeta(name="a", version="1.0.0", description="d").config_model is None

    def test_hook_constants(self):
        assert HOOK_AFTER_DISPATCH == "page.after_dispatch"
        assert HOOK_AFTER_DISPATCH in ALL_HOOKS

    def test_plugin_base_is_abstract(self):
        with pytest.raises(TypeError):
            PluginBase()


class TestPluginRegistry:
    def test_register_and_get(self):
        registry = PluginRegistry()
        plugin = RecordingPlugin()

        registry.register(plugin)

        assert registry.get("recorder") is plugin
        assert registry.all_plugins() == [plugin]

    def test_reregister_replaces(self):
        registry = PluginRegistry()
        registry.register(RecordingPlugin())
        replacement = RecordingPlugin()

        registry.register(replacement)

        assert registry.all_plugins() == [replacement]

    async def test_reregister_does_not_double_subscribe(self):
        registry = PluginRegistry()
        registry.register(RecordingPlugin())
        replacement = RecordingPlugin()
        registry.register(replacement)

        await registry.fire_hook(HOOK_AFTER_DISPATCH, {})

        assert len(replacement.calls) == 1

    def test_unregister(self):
        registry = PluginRegistry()
        registry.register(RecordingPlugin())

        removed = registry.unregister("recorder")

        assert removed is not None
        assert registry.get("recorder") is None
        assert registry.unregister("recorder") is None

    async def test_fire_hook_delivers_payload(self):
        registry = PluginRegistry()
        plugin = RecordingPlugin()
        registry.register(plugin)

        results = await registry.fire_hook(HOOK_AFTER_DISPATCH, {"key": "value"})

        assert results == ["recorder"]
        assert plugin.calls == [(HOOK_AFTER_DISPATCH, {"key": "value"})]

    async def test_fire_hook_skips_non_subscribers(self):
        registry = PluginRegistry()
        plugin = RecordingPlugin(hooks=["page.before_render"])
        registry.register(plugin)

        assert await registry.fire_hook(HOOK_AFTER_DISPATCH, {}) == []
        assert plugin.calls == []

    async def test_failing_plugin_is_isolated(self, caplog):
        registry = PluginRegistry()
        failing = RecordingPlugin(name="failing", fail=True)
        healthy = RecordingPlugin(name="healthy")
        registry.register(failing)
        registry.register(healthy)

        results = await registry.fire_hook(HOOK_AFTER_DISPATCH, {})

        assert results == ["healthy"]
        assert len(failing.calls) == 1
        assert "Plugin failing failed on hook page.after_dispatch" in caplog.text

    async def test_shutdown_unloads_plugins(self):
        registry = PluginRegistry()
        plugin = RecordingPlugin()
        registry.register(plugin)

        await registry.shutdown()

        assert plugin.unloaded is True


class TestMetaTagsPlugin:
    def test_meta(self):
        meta = MetaTagsPlugin().meta

        assert meta.name == "metatags"
        assert meta.hooks == [HOOK_AFTER_DISPATCH]
        assert meta.config_model is MetaTagsConfig

    async def test_on_load_builds_service(self):
        plugin = MetaTagsPlugin()

        await plugin.on_load({"autoupdate_period": 3, "twitter_card": "twitter_card_summary"})

        assert isinstance(plugin.service, MetaTagsService)
        assert plugin.service.config.autoupdate_period == 3

    async def test_on_load_with_empty_config_uses_defaults(self):
        plugin = MetaTagsPlugin()

        await plugin.on_load({})

        assert plugin.service.config == MetaTagsConfig()

    async def test_invalid_config_raises(self):
        plugin = MetaTagsPlugin()

        with pytest.raises(ConfigurationError) as exc_info:
            await plugin.on_load({"autoupdate_period": -2, "unknown_option": True})

        errors = exc_info.value.details["errors"]
        assert {error["loc"][0] for error in errors} == {"autoupdate_period", "unknown_option"}
        assert plugin.service is None

    async def test_handle_hook_runs_pass(self):
        service = AsyncMock()
        service.process.return_value = PassResult(url_id=1, inserted=2)
        plugin = MetaTagsPlugin(service=service)
        context, db = make_context(), AsyncMock()

        result = await plugin.handle_hook(HOOK_AFTER_DISPATCH, {"context": context, "db": db})

        assert result.inserted == 2
        service.process.assert_awaited_once_with(context, db)

    async def test_other_hooks_ignored(self):
        service = AsyncMock()
        plugin = MetaTagsPlugin(service=service)

        assert await plugin.handle_hook("page.before_render", {}) is None
        service.process.assert_not_called()

    async def test_hook_before_load_is_ignored(self):
        assert await MetaTagsPlugin().handle_hook(HOOK_AFTER_DISPATCH, {}) is None


class TestPluginLoader:
    async def test_initialize_registers_plugin(self, tmp_path):
        config_path = tmp_path / "metatags.json"
        config_path.write_text(json.dumps({"autoupdate_period": 2}), encoding="utf-8")
        registry = PluginRegistry()

        await initialize_plugins(registry, config_path)

        plugin = registry.get("metatags")
        assert isinstance(plugin, MetaTagsPlugin)
        assert plugin.service.config.autoupdate_period == 2

    async def test_initialize_registers_builtin_readers(self, tmp_path):
        from metatags.extensions.registry import extension_registry

        await initialize_plugins(PluginRegistry(), tmp_path / "missing.json")

        assert extension_registry.is_registered("content")
        assert extension_registry.is_registered("eshop")

    async def test_initialize_with_invalid_config_fails(self, tmp_path):
        config_path = tmp_path / "metatags.json"
        config_path.write_text(json.dumps({"twitter_card": "big"}), encoding="utf-8")
        registry = PluginRegistry()

        with pytest.raises(ConfigurationError):
            await initialize_plugins(registry, config_path)

        assert registry.get("metatags") is None
