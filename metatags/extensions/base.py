"""
Content Reader Base Class

A content reader knows how one extension stores its pages and returns the
data tags are generated from. Readers are looked up by extension name in
the ExtensionRegistry.

Returned data keys (all optional):
    title, metadesc, image, image_alt, created, modified
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from metatags.exceptions import ContentReaderError
from metatags.utils.text import find_first_image, make_metadesc, strip_html

logger = logging.getLogger(__name__)


def parse_item_id(value: Any) -> int | None:
    """Item id of a route parameter; slugged ids such as ``12:my-article`` are accepted."""
    if value is None:
        return None
    text = str(value).split(":", 1)[0].strip()
    return int(text) if text.isdigit() else None


def format_date(value: datetime | None) -> str:
    return value.isoformat() if value else ""


class ContentReader(ABC):
    """
    Abstract base class for all content readers.

    Subclasses implement ``extension`` and ``load``; ``get_data`` adds the
    generated description and extracted image the options ask for.
    """

    @property
    @abstractmethod
    def extension(self) -> str:
        """Extension name the reader serves, e.g. "content"."""
        ...

    @abstractmethod
    async def load(self, options: dict[str, Any], db: AsyncSession) -> dict[str, Any]:
        """
        Load raw page data for the requested view.

        The mapping may carry a ``body`` key with the item's HTML; it is used
        for description generation and image extraction, then dropped.
        """

    async def get_data(self, options: dict[str, Any], db: AsyncSession) -> dict[str, Any]:
        try:
            data = await self.load(options, db)
        except SQLAlchemyError as e:
            raise ContentReaderError(self.extension, "Failed to load page data") from e

        body = data.pop("body", "") or ""
        if not data.get("metadesc") and options.get("generate_metadesc"):
            data["metadesc"] = make_metadesc(body)
        else:
            data["metadesc"] = strip_html(data.get("metadesc"))

        if not data.get("image") and options.get("extract_image"):
            data["image"] = find_first_image(body)

        return {key: value for key, value in data.items() if value not in (None, "")}
