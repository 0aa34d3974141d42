"""
Shared constants for the meta tags plugin.
"""

# Extensions whose pages can carry generated meta tags.
SUPPORTED_EXTENSIONS: tuple[str, ...] = (
    "content",
    "k2",
    "cobalt",
    "crowdfunding",
    "userideas",
    "socialcommunity",
    "virtuemart",
    "eshop",
)

# Namespace mixed into the page cache key of a URI
CACHE_URI = "metatags.uri"
CACHE_PREFIX = "cache:metatags:"

# Query parameters that never identify a page
TRACKING_PARAMS = frozenset({"fbclid", "gclid", "msclkid"})
TRACKING_PREFIXES = ("utm_",)

METADESC_MAX_LENGTH = 160
