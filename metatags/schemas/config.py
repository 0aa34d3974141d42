from pydantic import BaseModel, ConfigDict, Field, field_validator

from metatags.constants import SUPPORTED_EXTENSIONS
from metatags.services.tag_catalog import TWITTER_CARD_TYPES


class ExtensionToggles(BaseModel):
    """One enable flag per supported extension."""

    model_config = ConfigDict(extra="forbid")

    content: bool = True
    k2: bool = False
    cobalt: bool = False
    crowdfunding: bool = False
    userideas: bool = False
    socialcommunity: bool = False
    virtuemart: bool = False
    eshop: bool = False

    def is_enabled(self, extension: str) -> bool:
        return extension in SUPPORTED_EXTENSIONS and bool(getattr(self, extension, False))


class MetaTagsConfig(BaseModel):
    """Options of the meta tags plugin, validated once at load time."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    generate_metadesc: bool = Field(True, description="Derive a description from the body when none is set.")
    extract_image: bool = Field(False, description="Use the first body image when no image is set.")
    autoupdate_period: int = Field(0, ge=0, description="Days between two passes over the same URL.")
    default_image: str = Field("", description="Image used when the page has none. URL or site-relative path.")
    twitter_card: str = Field("", description="Twitter card definition, e.g. twitter_card_summary.")
    extensions: ExtensionToggles = Field(default_factory=ExtensionToggles)

    # Open Graph
    ogtitle: bool = True
    ogdescription: bool = True
    ogimage: bool = True
    ogurl: bool = True
    ogarticle_published_time: bool = False
    ogarticle_modified_time: bool = False

    # SEO
    seo_canonical: bool = True

    # Twitter Card
    twitter_card_title: bool = False
    twitter_card_description: bool = False
    twitter_card_image: bool = False
    twitter_card_image_alt: bool = False
    twitter_card_url: bool = False

    # Dublin Core
    dublincore_title: bool = False
    dublincore_description: bool = False
    dublincore_url: bool = False
    dublincore_published_time: bool = False
    dublincore_modified_time: bool = False

    @field_validator("twitter_card")
    @classmethod
    def validate_twitter_card(cls, value: str) -> str:
        value = value.strip()
        if value and value not in TWITTER_CARD_TYPES:
            raise ValueError(f"twitter_card must be one of {sorted(TWITTER_CARD_TYPES)}")
        return value

    @field_validator("default_image")
    @classmethod
    def strip_default_image(cls, value: str) -> str:
        return value.strip()

    def is_tag_enabled(self, name: str) -> bool:
        return bool(getattr(self, name, False))
