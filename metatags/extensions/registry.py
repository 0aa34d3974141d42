"""
Extension Registry

Maps the fixed set of supported extension names to the content reader that
serves each one. Supported extensions without a reader yield no data.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy.ext.asyncio import AsyncSession

from metatags.constants import SUPPORTED_EXTENSIONS

if TYPE_CHECKING:
    from metatags.extensions.base import ContentReader

logger = logging.getLogger(__name__)


class ExtensionRegistry:
    """In-process registry of content readers, keyed by extension name."""

    def __init__(self) -> None:
        self._readers: dict[str, ContentReader] = {}

    # ── Registration ──────────────────────────────────────────────────────────

    def register(self, reader: ContentReader) -> None:
        """Register a reader for one of the supported extensions."""
        if reader.extension not in SUPPORTED_EXTENSIONS:
            raise ValueError(f"Unsupported extension: {reader.extension!r}")
        self._readers[reader.extension] = reader
        logger.info("Content reader registered: %s", reader.extension)

    # ── Lookup ────────────────────────────────────────────────────────────────

    def get(self, extension: str) -> ContentReader | None:
        return self._readers.get(extension)

    def is_registered(self, extension: str) -> bool:
        return extension in self._readers

    def extensions(self) -> list[str]:
        return list(self._readers)

    # ── Data loading ──────────────────────────────────────────────────────────

    async def get_data(self, extension: str, options: dict[str, Any], db: AsyncSession) -> dict[str, Any]:
        """
        Load page data through the extension's reader.

        Returns an empty mapping when no reader serves the extension.
        """
        reader = self._readers.get(extension)
        if reader is None:
            logger.debug("No content reader for extension %r", extension)
            return {}
        return dict(await reader.get_data(options, db))


def register_builtin_readers(registry: ExtensionRegistry) -> None:
    """Register the readers shipped with the plugin."""
    from metatags.extensions.content import ContentArticleReader
    from metatags.extensions.eshop import EshopProductReader

    for reader_class in (ContentArticleReader, EshopProductReader):
        registry.register(reader_class())


# ── Global singleton ──────────────────────────────────────────────────────────
extension_registry = ExtensionRegistry()
