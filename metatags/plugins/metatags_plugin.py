"""
Meta Tags Plugin

Subscribes to page.after_dispatch and runs a meta tag pass for every
dispatched page.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from metatags.exceptions import ConfigurationError
from metatags.plugins.base import PluginBase, PluginMeta
from metatags.plugins.hooks import HOOK_AFTER_DISPATCH
from metatags.schemas.config import MetaTagsConfig
from metatags.services.metatags_service import MetaTagsService, PassResult

logger = logging.getLogger(__name__)

_META = PluginMeta(
    name="metatags",
    version="1.0.0",
    description="Open Graph, Twitter Card, Dublin Core and canonical tags kept in sync with page content",
    hooks=[HOOK_AFTER_DISPATCH],
    config_model=MetaTagsConfig,
)


class MetaTagsPlugin(PluginBase):
    def __init__(self, service: MetaTagsService | None = None) -> None:
        self.service = service

    @property
    def meta(self) -> PluginMeta:
        return _META

    async def on_load(self, config: dict[str, Any]) -> None:
        try:
            options = MetaTagsConfig.model_validate(config)
        except ValidationError as exc:
            raise ConfigurationError(errors=exc.errors(include_url=False)) from exc

        self.service = MetaTagsService(options)
        logger.debug(
            "MetaTagsPlugin loaded (autoupdate_period=%s, twitter_card=%r)",
            options.autoupdate_period,
            options.twitter_card,
        )

    async def handle_hook(self, hook_name: str, payload: dict[str, Any]) -> PassResult | None:
        if hook_name != HOOK_AFTER_DISPATCH:
            return None
        if self.service is None:
            logger.warning("MetaTagsPlugin received %s before on_load", hook_name)
            return None
        return await self.service.process(payload["context"], payload["db"])
