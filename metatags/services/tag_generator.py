"""
Tag Generator

Maps the data a content reader returned for a page onto tag candidates of
four families: Open Graph, SEO, Twitter Card and Dublin Core. Each tag is
generated only when its option is switched on.
"""

import logging
from collections.abc import Mapping
from typing import Any

from metatags.schemas.config import MetaTagsConfig
from metatags.services.tag_catalog import get_definition
from metatags.utils.text import escape_text
from metatags.utils.url import make_absolute

logger = logging.getLogger(__name__)

Candidates = dict[str, dict[str, Any]]


def _value(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    return "" if value is None else str(value)


class TagGenerator:
    def generate(
        self,
        data: Mapping[str, Any],
        url: str,
        config: MetaTagsConfig,
        site_root: str = "",
    ) -> Candidates:
        """
        Build the tag candidates of a page.

        Args:
            data: Page data from a content reader (title, metadesc, image ...)
            url: Page URL used by the URL tags
            config: Plugin options
            site_root: Base URL that relative images are resolved against

        Returns:
            Candidate mappings keyed by tag name
        """
        tags: Candidates = {}

        # Every value lands in an attribute; escape once here
        title = escape_text(_value(data, "title"))
        metadesc = escape_text(_value(data, "metadesc"))
        created = escape_text(_value(data, "created"))
        modified = escape_text(_value(data, "modified"))
        image = escape_text(self.prepare_image(data, config, site_root))
        url = escape_text(url)

        self._add_open_graph(tags, config, title, metadesc, image, url, created, modified)
        self._add_seo(tags, config, url)
        self._add_twitter(tags, config, title, metadesc, image, escape_text(_value(data, "image_alt")), url)
        self._add_dublin_core(tags, config, title, metadesc, url, created, modified)

        logger.debug("Generated %d tag candidates for %s", len(tags), url)
        return tags

    def prepare_image(self, data: Mapping[str, Any], config: MetaTagsConfig, site_root: str) -> str:
        """Absolute URL of the page image, falling back to the default image."""
        image = _value(data, "image").strip()
        if image:
            return make_absolute(image, site_root)
        if config.default_image:
            return make_absolute(config.default_image, site_root)
        return ""

    @staticmethod
    def _put(tags: Candidates, config: MetaTagsConfig, name: str, content: str) -> None:
        if config.is_tag_enabled(name) and content != "":
            tags[name] = get_definition(name).render(content)

    def _add_open_graph(self, tags, config, title, metadesc, image, url, created, modified) -> None:
        self._put(tags, config, "ogtitle", title)
        self._put(tags, config, "ogdescription", metadesc)
        self._put(tags, config, "ogimage", image)
        self._put(tags, config, "ogurl", url)
        self._put(tags, config, "ogarticle_published_time", created)
        self._put(tags, config, "ogarticle_modified_time", modified)

    def _add_seo(self, tags, config, url) -> None:
        self._put(tags, config, "seo_canonical", url)

    def _add_twitter(self, tags, config, title, metadesc, image, image_alt, url) -> None:
        # The card type is stored under one name whatever type is chosen
        if config.twitter_card:
            tags["twitter_card"] = get_definition(config.twitter_card).render()

        self._put(tags, config, "twitter_card_title", title)
        self._put(tags, config, "twitter_card_description", metadesc)
        self._put(tags, config, "twitter_card_image", image)
        self._put(tags, config, "twitter_card_image_alt", image_alt)
        self._put(tags, config, "twitter_card_url", url)

    def _add_dublin_core(self, tags, config, title, metadesc, url, created, modified) -> None:
        self._put(tags, config, "dublincore_title", title)
        self._put(tags, config, "dublincore_description", metadesc)
        self._put(tags, config, "dublincore_url", url)
        self._put(tags, config, "dublincore_published_time", created)
        self._put(tags, config, "dublincore_modified_time", modified)
