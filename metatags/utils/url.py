"""
URL Utilities

Helpers that derive the identifiers of a page from its request URL.
"""

import html
from urllib.parse import parse_qsl, urlencode

from starlette.datastructures import URL

from metatags.constants import TRACKING_PARAMS, TRACKING_PREFIXES
from metatags.utils.text import strip_html


def _is_tracking_param(key: str) -> bool:
    key = key.lower()
    return key in TRACKING_PARAMS or key.startswith(TRACKING_PREFIXES)


def get_clean_uri(url: URL) -> str:
    """
    Path and query of a URL without fragment and tracking parameters.

    This is the key URL records are registered under.
    """
    params = [(key, value) for key, value in parse_qsl(url.query, keep_blank_values=True) if not _is_tracking_param(key)]
    path = url.path or "/"
    if params:
        return f"{path}?{urlencode(params)}"
    return path


def get_page_url(url: URL) -> str:
    """
    Scheme, host, port and clean URI of a URL, markup stripped.

    Entities are decoded before stripping so encoded markup is removed too.
    """
    page_url = f"{url.scheme}://{url.netloc}{get_clean_uri(url)}"
    return strip_html(html.unescape(page_url))


def make_absolute(path: str, site_root: str) -> str:
    """Prefix a site-relative path with the site root; full links pass through."""
    if path.startswith("http"):
        return path
    return f"{site_root.rstrip('/')}/{path.lstrip('/')}"
