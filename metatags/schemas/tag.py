from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

# Columns written on insert; storage assigns id and ordering
INSERT_COLUMNS = ("name", "title", "type", "tag", "content", "output", "url_id")
REPLACE_COLUMNS = ("id", "name", "title", "type", "tag", "content", "output", "ordering", "url_id")


class Tag(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = Field(None, title="Tag ID", description="Row identifier, assigned by storage.")
    name: str = Field(..., title="Tag Name", description="Catalog name, unique per URL (e.g. ogtitle).")
    title: str = Field("", title="Title", description="Human label of the tag.")
    type: str = Field("", title="Type", description="Markup family: property, name or link.")
    tag: str = Field("", title="Tag", description="Attribute value the tag renders with (e.g. og:title).")
    content: str = Field("", title="Content", description="Value computed for the URL.")
    output: str = Field("", title="Output", description="Rendered markup.")
    ordering: Optional[int] = Field(None, title="Ordering", description="Display order, assigned by storage.")
    url_id: Optional[int] = Field(None, title="URL ID", description="Owning URL record.")

    def insert_row(self) -> dict[str, Any]:
        return {column: getattr(self, column) for column in INSERT_COLUMNS}

    def replace_row(self) -> dict[str, Any]:
        return {column: getattr(self, column) for column in REPLACE_COLUMNS}


class TagSet:
    """All stored tags of one URL, addressable by name."""

    def __init__(self, url_id: int, tags: Iterable[Tag] = ()):
        self.url_id = url_id
        self._tags: dict[str, Tag] = {tag.name: tag for tag in tags}

    def get(self, name: str) -> Tag | None:
        return self._tags.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._tags

    def __iter__(self) -> Iterator[Tag]:
        return iter(self._tags.values())

    def __len__(self) -> int:
        return len(self._tags)


@dataclass
class TagDelta:
    """Inserts and updates needed to bring a URL's stored tags up to date."""

    to_insert: list[Tag] = field(default_factory=list)
    to_update: list[Tag] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.to_insert and not self.to_update

    def insert_rows(self) -> list[dict[str, Any]]:
        return [tag.insert_row() for tag in self.to_insert]

    def replace_rows(self) -> list[dict[str, Any]]:
        return [tag.replace_row() for tag in self.to_update]

    def update_ids(self) -> list[int]:
        return [int(tag.id) for tag in self.to_update]
