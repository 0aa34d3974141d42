from .config import ExtensionToggles, MetaTagsConfig
from .tag import Tag, TagDelta, TagSet

# Define the public API of this module
__all__ = [
    "ExtensionToggles",
    "MetaTagsConfig",
    "Tag",
    "TagDelta",
    "TagSet",
]
