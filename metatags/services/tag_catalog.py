"""
Tag Definition Catalog

Definitions every generated tag is rendered from, keyed by tag name.
A definition fixes the tag's label, its markup family and the attribute
value it renders with; the page supplies the content.
"""

from dataclasses import dataclass
from typing import Any

from metatags.exceptions import TagDefinitionError

TYPE_PROPERTY = "property"
TYPE_NAME = "name"
TYPE_LINK = "link"

_TEMPLATES = {
    TYPE_PROPERTY: '<meta property="{tag}" content="{content}" />',
    TYPE_NAME: '<meta name="{tag}" content="{content}" />',
    TYPE_LINK: '<link rel="{tag}" href="{content}" />',
}


@dataclass(frozen=True)
class TagDefinition:
    name: str
    title: str
    type: str
    tag: str
    content: str = ""

    def render(self, content: str | None = None) -> dict[str, Any]:
        """Candidate mapping for this definition; fixed content wins when no content is given."""
        value = self.content if content is None else content
        return {
            "title": self.title,
            "type": self.type,
            "tag": self.tag,
            "content": value,
            "output": _TEMPLATES[self.type].format(tag=self.tag, content=value),
        }


_DEFINITIONS = [
    # Open Graph
    TagDefinition("ogtitle", "Open Graph Title", TYPE_PROPERTY, "og:title"),
    TagDefinition("ogdescription", "Open Graph Description", TYPE_PROPERTY, "og:description"),
    TagDefinition("ogimage", "Open Graph Image", TYPE_PROPERTY, "og:image"),
    TagDefinition("ogurl", "Open Graph URL", TYPE_PROPERTY, "og:url"),
    TagDefinition("ogarticle_published_time", "Article Published Time", TYPE_PROPERTY, "article:published_time"),
    TagDefinition("ogarticle_modified_time", "Article Modified Time", TYPE_PROPERTY, "article:modified_time"),
    # SEO
    TagDefinition("seo_canonical", "Canonical URL", TYPE_LINK, "canonical"),
    # Twitter Card types
    TagDefinition("twitter_card_summary", "Twitter Card", TYPE_NAME, "twitter:card", "summary"),
    TagDefinition(
        "twitter_card_summary_large_image", "Twitter Card", TYPE_NAME, "twitter:card", "summary_large_image"
    ),
    TagDefinition("twitter_card_app", "Twitter Card", TYPE_NAME, "twitter:card", "app"),
    TagDefinition("twitter_card_player", "Twitter Card", TYPE_NAME, "twitter:card", "player"),
    # Twitter Card
    TagDefinition("twitter_card_title", "Twitter Card Title", TYPE_NAME, "twitter:title"),
    TagDefinition("twitter_card_description", "Twitter Card Description", TYPE_NAME, "twitter:description"),
    TagDefinition("twitter_card_image", "Twitter Card Image", TYPE_NAME, "twitter:image"),
    TagDefinition("twitter_card_image_alt", "Twitter Card Image Alt", TYPE_NAME, "twitter:image:alt"),
    TagDefinition("twitter_card_url", "Twitter Card URL", TYPE_NAME, "twitter:url"),
    # Dublin Core
    TagDefinition("dublincore_title", "Dublin Core Title", TYPE_NAME, "DC.title"),
    TagDefinition("dublincore_description", "Dublin Core Description", TYPE_NAME, "DC.description"),
    TagDefinition("dublincore_url", "Dublin Core Identifier", TYPE_NAME, "DC.identifier"),
    TagDefinition("dublincore_published_time", "Dublin Core Created", TYPE_NAME, "DC.date.created"),
    TagDefinition("dublincore_modified_time", "Dublin Core Modified", TYPE_NAME, "DC.date.modified"),
]

TAG_DEFINITIONS: dict[str, TagDefinition] = {definition.name: definition for definition in _DEFINITIONS}

TWITTER_CARD_TYPES = frozenset(
    {
        "twitter_card_summary",
        "twitter_card_summary_large_image",
        "twitter_card_app",
        "twitter_card_player",
    }
)


def get_definition(name: str) -> TagDefinition:
    """Return the definition for ``name`` or raise TagDefinitionError."""
    try:
        return TAG_DEFINITIONS[name]
    except KeyError:
        raise TagDefinitionError(name) from None
