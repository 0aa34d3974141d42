"""
Text Utilities

Turns item fields into tag content: plain text extraction, escaping for
attribute values, description shortening and body image lookup.
"""

import html
import re
from typing import Optional

import bleach
from bs4 import BeautifulSoup

from metatags.constants import METADESC_MAX_LENGTH


def strip_html(text: Optional[str]) -> str:
    """
    Strip all HTML tags and return plain text only.

    Entities are decoded so the result can be escaped once, later.
    """
    if text is None:
        return ""

    cleaned = bleach.clean(text, tags=[], strip=True)
    cleaned = html.unescape(cleaned)

    # Normalize whitespace
    return re.sub(r'\s+', ' ', cleaned).strip()


def escape_text(text: Optional[str]) -> str:
    """Escape a value for use inside a tag attribute, quotes included."""
    if text is None:
        return ""
    return html.escape(str(text), quote=True).strip()


def shorten(text: str, max_length: int = METADESC_MAX_LENGTH) -> str:
    """Cut text to max_length on a word boundary."""
    text = text.strip()
    if len(text) <= max_length:
        return text

    cut = text[:max_length]
    if ' ' in cut:
        cut = cut.rsplit(' ', 1)[0]
    return cut.rstrip(' ,.;:-')


def make_metadesc(body: Optional[str], max_length: int = METADESC_MAX_LENGTH) -> str:
    """Build a meta description out of an HTML body."""
    return shorten(strip_html(body), max_length)


def find_first_image(body: Optional[str]) -> str:
    """Return the src of the first <img> in body, or an empty string."""
    if not body:
        return ""
    img = BeautifulSoup(body, "html.parser").find("img", src=True)
    return img["src"].strip() if img else ""
